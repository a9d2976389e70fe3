"""Client for the remote API key management service."""

from apikeys_client.api.core.exceptions import (
    APIKeyConflictError,
    APIKeyNotFoundError,
    APIKeysClientError,
    APIKeyValidationError,
    RequestEncodeError,
    RequestTimeoutError,
    ResponseDecodeError,
    TransportError,
    UnexpectedStatusError,
)
from apikeys_client.api.core.messages import MessageCode
from apikeys_client.api.keys.schemas import APIKey, ValidateResponse
from apikeys_client.modules.keys.client import APIKeyClient, get_apikeys_client
from apikeys_client.modules.keys.retry import RetryPolicy

__all__ = [
    "APIKey",
    "APIKeyClient",
    "APIKeyConflictError",
    "APIKeyNotFoundError",
    "APIKeysClientError",
    "APIKeyValidationError",
    "MessageCode",
    "RequestEncodeError",
    "RequestTimeoutError",
    "ResponseDecodeError",
    "RetryPolicy",
    "TransportError",
    "UnexpectedStatusError",
    "ValidateResponse",
    "get_apikeys_client",
]
