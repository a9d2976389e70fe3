"""Client for the remote API key management service."""

from typing import Any, Callable, TypeVar
from urllib.parse import quote
from uuid import UUID

import httpx
import structlog
from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from apikeys_client.api.core.constants import (
    APIKEY_BY_ID_PATH,
    APIKEY_BY_SECRET_PATH,
    APIKEY_VALIDATE_PATH,
    APIKEYS_PATH,
    DEFAULT_TIMEOUT_SECONDS,
    JSON_CONTENT_TYPE,
    REDACTED,
)
from apikeys_client.api.core.exceptions import (
    RequestEncodeError,
    RequestTimeoutError,
    ResponseDecodeError,
    TransportError,
    error_for_status,
)
from apikeys_client.api.keys.schemas import APIKey, ValidateResponse
from apikeys_client.modules.keys.retry import RetryPolicy
from apikeys_client.utils.logger import get_logger
from apikeys_client.utils.settings.client import APIKeysClientSettings

logger = get_logger(__name__)

T = TypeVar("T")
ModelT = TypeVar("ModelT", bound=BaseModel)

Timeout = float | httpx.Timeout | None

_API_KEY_LIST = TypeAdapter(list[APIKey] | None)


class APIKeyClient:
    """Synchronous client for the API key service.

    Every operation performs one HTTP exchange and either returns the decoded
    result or raises an ``APIKeysClientError`` subclass. Reads may be retried
    when a ``RetryPolicy`` is configured; writes never are.

    The ``timeout`` keyword bounds a single exchange. Under a retry policy it
    applies to each attempt, and ``RetryPolicy.max_delay`` bounds the total.
    """

    def __init__(
        self,
        base_url: str,
        http_client: httpx.Client | None = None,
        *,
        retry_policy: RetryPolicy | None = None,
        escape_secrets: bool = True,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        self.base_url = base_url.rstrip("/")
        self._owns_http_client = http_client is None
        self.http_client = http_client or httpx.Client(timeout=timeout)
        self.retry_policy = retry_policy
        self.escape_secrets = escape_secrets

    def __enter__(self) -> "APIKeyClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_http_client:
            self.http_client.close()

    def create_api_key(self, key: APIKey, *, timeout: Timeout = None) -> APIKey:
        """Create a key; returns the service's canonical copy."""
        _, body = self._encode(key)
        response = self._request(
            "create_api_key",
            "POST",
            APIKEYS_PATH,
            expected_status=httpx.codes.CREATED,
            content=body,
            timeout=timeout,
        )
        created = self._decode(response, APIKey)
        logger.info(f"Created API key {created.id}", operation="create_api_key")
        return created

    def get_api_key_by_id(
        self, key_id: UUID | str, *, timeout: Timeout = None
    ) -> APIKey:
        path = APIKEY_BY_ID_PATH.format(key_id=self._escape_id(key_id))

        def fetch() -> APIKey:
            response = self._request(
                "get_api_key_by_id",
                "GET",
                path,
                expected_status=httpx.codes.OK,
                timeout=timeout,
            )
            return self._decode(response, APIKey)

        return self._read("get_api_key_by_id", fetch)

    def get_api_key_by_api_key(self, secret: str, *, timeout: Timeout = None) -> APIKey:
        """Look up a key by its secret value."""
        path = APIKEY_BY_SECRET_PATH.format(secret=self._escape_secret(secret))
        log_path = APIKEY_BY_SECRET_PATH.format(secret=REDACTED)

        def fetch() -> APIKey:
            response = self._request(
                "get_api_key_by_api_key",
                "GET",
                path,
                expected_status=httpx.codes.OK,
                timeout=timeout,
                log_path=log_path,
            )
            return self._decode(response, APIKey)

        return self._read("get_api_key_by_api_key", fetch)

    def update_api_key(self, key: APIKey, *, timeout: Timeout = None) -> APIKey:
        """Replace the stored record addressed by ``key.id``."""
        key, body = self._encode(key)
        path = APIKEY_BY_ID_PATH.format(key_id=self._escape_id(key.id))
        response = self._request(
            "update_api_key",
            "PUT",
            path,
            expected_status=httpx.codes.OK,
            content=body,
            timeout=timeout,
        )
        updated = self._decode(response, APIKey)
        logger.info(f"Updated API key {updated.id}", operation="update_api_key")
        return updated

    def delete_api_key(self, key_id: UUID | str, *, timeout: Timeout = None) -> None:
        """Delete a key. A repeated delete surfaces whatever the service answers."""
        path = APIKEY_BY_ID_PATH.format(key_id=self._escape_id(key_id))
        self._request(
            "delete_api_key",
            "DELETE",
            path,
            expected_status=httpx.codes.OK,
            timeout=timeout,
        )
        logger.info(f"Deleted API key {key_id}", operation="delete_api_key")

    def list_api_keys(self, *, timeout: Timeout = None) -> list[APIKey]:
        """All keys in the order the service returns them."""

        def fetch() -> list[APIKey]:
            response = self._request(
                "list_api_keys",
                "GET",
                APIKEYS_PATH,
                expected_status=httpx.codes.OK,
                timeout=timeout,
            )
            try:
                keys = _API_KEY_LIST.validate_json(response.content)
            except ValidationError as e:
                raise self._decode_error(response, "list[APIKey]", e) from e
            return keys or []

        return self._read("list_api_keys", fetch)

    def validate_api_key(self, secret: str, *, timeout: Timeout = None) -> bool:
        """Point-in-time check of whether ``secret`` is currently valid."""
        path = APIKEY_VALIDATE_PATH.format(secret=self._escape_secret(secret))
        log_path = APIKEY_VALIDATE_PATH.format(secret=REDACTED)

        def fetch() -> bool:
            response = self._request(
                "validate_api_key",
                "GET",
                path,
                expected_status=httpx.codes.OK,
                timeout=timeout,
                log_path=log_path,
            )
            return self._decode(response, ValidateResponse).is_valid

        return self._read("validate_api_key", fetch)

    def _read(self, operation: str, fetch: Callable[[], T]) -> T:
        if self.retry_policy is None:
            return fetch()
        return self.retry_policy.call(operation, fetch)

    def _escape_id(self, key_id: UUID | str) -> str:
        try:
            normalized = key_id if isinstance(key_id, UUID) else UUID(str(key_id))
        except ValueError as e:
            raise RequestEncodeError(
                details={"key_id": str(key_id)},
                message=f"Invalid API key id: {key_id!r}",
            ) from e
        return quote(str(normalized), safe="")

    def _escape_secret(self, secret: str) -> str:
        if self.escape_secrets:
            return quote(secret, safe="")
        return secret

    def _encode(self, key: APIKey) -> tuple[APIKey, bytes]:
        try:
            if not isinstance(key, APIKey):
                key = APIKey.model_validate(key)
            return key, key.model_dump_json(by_alias=True).encode()
        except (ValidationError, PydanticSerializationError, TypeError) as e:
            logger.error(f"Failed to encode API key: {e}")
            raise RequestEncodeError(details={"error": str(e)}) from e

    def _request(
        self,
        operation: str,
        method: str,
        path: str,
        *,
        expected_status: int,
        content: bytes | None = None,
        timeout: Timeout = None,
        log_path: str | None = None,
    ) -> httpx.Response:
        url = f"{self.base_url}{path}"
        details = {
            "operation": operation,
            "method": method,
            "url": f"{self.base_url}{log_path or path}",
        }
        kwargs: dict[str, Any] = {}
        if content is not None:
            kwargs["content"] = content
            kwargs["headers"] = {"Content-Type": JSON_CONTENT_TYPE}
        if timeout is not None:
            kwargs["timeout"] = timeout

        with structlog.contextvars.bound_contextvars(service_url=self.base_url):
            try:
                response = self.http_client.request(method, url, **kwargs)
            except httpx.TimeoutException as e:
                logger.error(f"API key service timed out: {e}", **details)
                raise RequestTimeoutError(details={**details, "error": str(e)}) from e
            except httpx.RequestError as e:
                logger.error(f"API key service request failed: {e}", **details)
                raise TransportError(details={**details, "error": str(e)}) from e

            if response.status_code != expected_status:
                error = error_for_status(response, details)
                logger.warning(
                    f"API key service returned {response.status_code}",
                    message_code=error.message_code.value,
                    expected_status=expected_status,
                    **details,
                )
                raise error

            logger.debug(
                "API key service request succeeded",
                status_code=response.status_code,
                **details,
            )
        return response

    def _decode(self, response: httpx.Response, model: type[ModelT]) -> ModelT:
        try:
            return model.model_validate_json(response.content)
        except ValidationError as e:
            raise self._decode_error(response, model.__name__, e) from e

    def _decode_error(
        self, response: httpx.Response, target: str, error: ValidationError
    ) -> ResponseDecodeError:
        logger.error(
            f"Could not decode API key service response into {target}",
            status_code=response.status_code,
            error_count=error.error_count(),
        )
        return ResponseDecodeError(
            status_code=response.status_code,
            details={"target": target, "errors": error.errors(include_input=False)},
        )


def get_apikeys_client(
    settings: APIKeysClientSettings | None = None,
    http_client: httpx.Client | None = None,
) -> APIKeyClient:
    """Build a client from settings, for dependency injection."""
    settings = settings or APIKeysClientSettings()
    retry_policy = None
    if settings.APIKEYS_RETRY_MAX_ATTEMPTS > 1:
        retry_policy = RetryPolicy(
            max_attempts=settings.APIKEYS_RETRY_MAX_ATTEMPTS,
            backoff_factor=settings.APIKEYS_RETRY_BACKOFF_FACTOR,
        )
    return APIKeyClient(
        settings.APIKEYS_BASE_URL,
        http_client,
        retry_policy=retry_policy,
        escape_secrets=settings.APIKEYS_ESCAPE_SECRETS,
        timeout=settings.APIKEYS_TIMEOUT,
    )
