from typing import List

from src.libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from .dtos import StateSummary

STATE_NAMES = {
    "WI": "Wisconsin",
    "IL": "Illinois",
    "IA": "Iowa",
    "MI": "Michigan",
    "MN": "Minnesota",
    "IN": "Indiana",
    "OH": "Ohio",
    "FL": "Florida",
}


class ListStatesUseCase:
    """States that have jurisdictions, with a count each; unknown codes keep the code as name"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[List[StateSummary]]:
        async with self.uow:
            counts = await self.uow.counties.state_counts()
            return Return.ok(
                [
                    StateSummary(
                        code=state,
                        name=STATE_NAMES.get(state, state),
                        jurisdiction_count=count,
                    )
                    for state, count in counts
                ]
            )
