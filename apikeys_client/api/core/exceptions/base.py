"""Exception hierarchy for the API key client."""

from typing import Any

import httpx

from ..constants import ERROR_BODY_EXCERPT_LENGTH
from ..messages import MessageCode, get_default_message


class APIKeysClientError(Exception):
    """Base exception for the API key client with unified message codes."""

    def __init__(
        self,
        message_code: MessageCode,
        status_code: int | None = None,
        details: dict | None = None,
        message: str | None = None,
    ):
        self.message_code = message_code
        self.status_code = status_code
        self.message: str = message or get_default_message(message_code)
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"{self.message} (status {self.status_code})"
        return self.message

    def to_dict(self) -> dict:
        """Convert exception to a plain dict, e.g. for structured logs."""
        return {
            "message_code": self.message_code,
            "message": self.message,
            "status_code": self.status_code,
            "details": self.details,
        }


class RequestEncodeError(APIKeysClientError):
    """The outgoing record could not be serialized. Nothing was sent."""

    def __init__(self, details: dict | None = None, message: str | None = None):
        super().__init__(
            MessageCode.REQUEST_ENCODE_FAILED, details=details, message=message
        )


class TransportError(APIKeysClientError):
    """The HTTP exchange could not complete."""

    def __init__(
        self,
        message_code: MessageCode = MessageCode.TRANSPORT_FAILED,
        details: dict | None = None,
        message: str | None = None,
    ):
        super().__init__(message_code, details=details, message=message)


class RequestTimeoutError(TransportError):
    """The HTTP exchange did not complete within its timeout."""

    def __init__(self, details: dict | None = None, message: str | None = None):
        super().__init__(MessageCode.TIMEOUT, details=details, message=message)


class UnexpectedStatusError(APIKeysClientError):
    """The service answered with a status other than the operation's success status."""

    def __init__(
        self,
        status_code: int,
        details: dict | None = None,
        message_code: MessageCode = MessageCode.UNEXPECTED_STATUS,
        message: str | None = None,
    ):
        super().__init__(
            message_code, status_code=status_code, details=details, message=message
        )


class APIKeyNotFoundError(UnexpectedStatusError):
    def __init__(self, status_code: int = 404, details: dict | None = None):
        super().__init__(
            status_code, details=details, message_code=MessageCode.API_KEY_NOT_FOUND
        )


class APIKeyConflictError(UnexpectedStatusError):
    def __init__(self, status_code: int = 409, details: dict | None = None):
        super().__init__(
            status_code, details=details, message_code=MessageCode.CONFLICT
        )


class APIKeyValidationError(UnexpectedStatusError):
    def __init__(self, status_code: int = 422, details: dict | None = None):
        super().__init__(
            status_code, details=details, message_code=MessageCode.VALIDATION_FAILED
        )


class ResponseDecodeError(APIKeysClientError):
    """The response body does not match the expected structure."""

    def __init__(
        self,
        status_code: int | None = None,
        details: dict | None = None,
        message: str | None = None,
    ):
        super().__init__(
            MessageCode.RESPONSE_DECODE_FAILED,
            status_code=status_code,
            details=details,
            message=message,
        )


_STATUS_ERRORS: dict[int, type[UnexpectedStatusError]] = {
    400: APIKeyValidationError,
    404: APIKeyNotFoundError,
    409: APIKeyConflictError,
    422: APIKeyValidationError,
}


def error_for_status(
    response: httpx.Response, details: dict[str, Any] | None = None
) -> UnexpectedStatusError:
    """Build the status error matching a non-success response."""
    details = dict(details or {})
    body = response.text
    if body:
        details["response_body"] = body[:ERROR_BODY_EXCERPT_LENGTH]

    error_class = _STATUS_ERRORS.get(response.status_code)
    if error_class is None:
        return UnexpectedStatusError(response.status_code, details=details)
    return error_class(response.status_code, details=details)
