from typing import Mapping, NoReturn, Optional

from fastapi import status
from src.libs.result import Error

NOT_FOUND_CODES = frozenset(
    {
        "USER_NOT_FOUND",
        "RESEARCH_NOT_FOUND",
        "COUNTY_NOT_FOUND",
        "INSTALLMENT_NOT_FOUND",
        "CONTACT_NOT_FOUND",
        "FEE_NOT_FOUND",
        "INVITE_CODE_NOT_FOUND",
        "SURVEY_CONFIG_NOT_FOUND",
        "SURVEY_NOT_FOUND",
        "BATCH_NOT_FOUND",
        "ITEM_NOT_FOUND",
    }
)


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


def raise_for_error(error: Error, statuses: Optional[Mapping[str, int]] = None) -> NoReturn:
    """
    Raise the HTTP error for a failed use case result.

    Codes in statuses map to that status, *_NOT_FOUND codes to 404, and
    anything else is treated as a server error.
    """
    statuses = statuses or {}
    if error.code in statuses:
        raise ClientError(error, status_code=statuses[error.code])
    if error.code in NOT_FOUND_CODES:
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    raise ServerError(error)
