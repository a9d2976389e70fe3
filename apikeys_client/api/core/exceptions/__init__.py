from .base import (
    APIKeyConflictError,
    APIKeyNotFoundError,
    APIKeysClientError,
    APIKeyValidationError,
    RequestEncodeError,
    RequestTimeoutError,
    ResponseDecodeError,
    TransportError,
    UnexpectedStatusError,
    error_for_status,
)

__all__ = [
    "APIKeyConflictError",
    "APIKeyNotFoundError",
    "APIKeysClientError",
    "APIKeyValidationError",
    "RequestEncodeError",
    "RequestTimeoutError",
    "ResponseDecodeError",
    "TransportError",
    "UnexpectedStatusError",
    "error_for_status",
]
