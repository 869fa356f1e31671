from fastapi import status
from newsletter.result import Error

# Every expected error code and the HTTP status it is rendered with.
# Codes not listed here are infrastructure failures.
_CLIENT_ERROR_STATUS = {
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "INVALID_TOKEN": status.HTTP_400_BAD_REQUEST,
    "PASSWORD_MISMATCH": status.HTTP_400_BAD_REQUEST,
    "INVALID_CREDENTIALS": status.HTTP_401_UNAUTHORIZED,
    "INVALID_CURRENT_PASSWORD": status.HTTP_401_UNAUTHORIZED,
    "IDEMPOTENCY_CONFLICT": status.HTTP_409_CONFLICT,
}


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


def status_for(error: Error) -> int:
    """HTTP status code for an error code; unknown codes are server errors."""
    return _CLIENT_ERROR_STATUS.get(error.code, status.HTTP_500_INTERNAL_SERVER_ERROR)


def raise_for_error(error: Error):
    """Raise the ClientError or ServerError matching the error code."""
    status_code = status_for(error)
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        raise ServerError(error)
    raise ClientError(error, status_code=status_code)
