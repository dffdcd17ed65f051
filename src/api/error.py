from typing import Dict, NoReturn

from fastapi import status
from libs.result import Error


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


# Status codes shared by every route; routes may override per code
CLIENT_ERROR_STATUSES: Dict[str, int] = {
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "DUPLICATE_ACCOUNT": status.HTTP_409_CONFLICT,
    "ACCOUNT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "INVALID_CREDENTIALS": status.HTTP_400_BAD_REQUEST,
    "TOKEN_EXPIRED": status.HTTP_401_UNAUTHORIZED,
    "TOKEN_INVALID": status.HTTP_401_UNAUTHORIZED,
    "RESET_TOKEN_EXPIRED": status.HTTP_400_BAD_REQUEST,
    "RESET_TOKEN_INVALID": status.HTTP_400_BAD_REQUEST,
}


def raise_for_error(error: Error) -> NoReturn:
    """Client-caused codes become ClientError, everything else ServerError"""
    status_code = CLIENT_ERROR_STATUSES.get(error.code)
    if status_code is None:
        raise ServerError(error)
    raise ClientError(error, status_code=status_code)
