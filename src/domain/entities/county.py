"""
County Entity

A tax jurisdiction: a county, or a municipality inside one.
"""

from typing import Optional

from sqlmodel import Field, Index, SQLModel

from .enums import JurisdictionType


class County(SQLModel, table=True):
    """
    County entity - one row per jurisdiction.

    A row with no municipality_name (or one equal to county_name) is the
    county itself; anything else is a municipality within that county.
    """

    __tablename__ = "counties"

    id: Optional[int] = Field(default=None, primary_key=True)
    state: str = Field(max_length=2, index=True)
    county_name: str = Field(max_length=255)
    municipality_name: Optional[str] = Field(default=None, max_length=255)
    fips_code: Optional[str] = Field(default=None, max_length=16)

    __table_args__ = (Index("idx_county_state_name", "state", "county_name"),)

    @property
    def jurisdiction_type(self) -> JurisdictionType:
        if not self.municipality_name or self.municipality_name == self.county_name:
            return JurisdictionType.county
        return JurisdictionType.municipality

    @property
    def display_name(self) -> str:
        return self.municipality_name or self.county_name

    def is_parent_of(self, other: "County") -> bool:
        """True if other is a municipality inside this county"""
        if self.jurisdiction_type != JurisdictionType.county:
            return False
        if other.jurisdiction_type != JurisdictionType.municipality:
            return False
        if other.state != self.state:
            return False
        # Parent rows are sometimes stored as "X County" while children say "X"
        return (
            other.county_name == self.county_name
            or f"{other.county_name} County" == self.county_name
        )
