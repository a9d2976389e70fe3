"""Opt-in retry policy for idempotent reads."""

import time
from dataclasses import dataclass, field
from typing import Callable, TypeVar

from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception,
    stop_after_attempt,
    stop_after_delay,
    wait_exponential,
)

from apikeys_client.api.core.constants import (
    DEFAULT_RETRY_BACKOFF_FACTOR,
    DEFAULT_RETRY_MAX_ATTEMPTS,
    DEFAULT_RETRY_STATUSES,
)
from apikeys_client.api.core.exceptions import (
    APIKeysClientError,
    TransportError,
    UnexpectedStatusError,
)
from apikeys_client.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """Retry transport failures and transient statuses with exponential backoff.

    Only read operations (get, list, validate) consult the policy; create,
    update and delete are always sent once.

    A per-call ``timeout`` bounds each attempt, not the whole read. Set
    ``max_delay`` to stop retrying once that many seconds have passed since
    the first attempt started.
    """

    max_attempts: int = DEFAULT_RETRY_MAX_ATTEMPTS
    backoff_factor: float = DEFAULT_RETRY_BACKOFF_FACTOR
    retry_on_statuses: tuple[int, ...] = DEFAULT_RETRY_STATUSES
    max_delay: float | None = None
    sleep: Callable[[float], None] = field(default=time.sleep, compare=False)

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.backoff_factor < 0:
            raise ValueError("backoff_factor must not be negative")
        if self.max_delay is not None and self.max_delay < 0:
            raise ValueError("max_delay must not be negative")

    def should_retry(self, error: BaseException) -> bool:
        if isinstance(error, TransportError):
            return True
        if isinstance(error, UnexpectedStatusError):
            return error.status_code in self.retry_on_statuses
        return False

    def call(self, operation: str, func: Callable[[], T]) -> T:
        stop = stop_after_attempt(self.max_attempts)
        if self.max_delay is not None:
            stop = stop | stop_after_delay(self.max_delay)

        def log_retry(retry_state: RetryCallState) -> None:
            error = retry_state.outcome.exception()
            if not isinstance(error, APIKeysClientError):
                return
            logger.warning(
                "apikeys.retry",
                operation=operation,
                attempt=retry_state.attempt_number,
                max_attempts=self.max_attempts,
                delay=retry_state.next_action.sleep,
                message_code=error.message_code.value,
                status_code=error.status_code,
            )

        retrying = Retrying(
            stop=stop,
            wait=wait_exponential(multiplier=self.backoff_factor),
            retry=retry_if_exception(self.should_retry),
            before_sleep=log_retry,
            sleep=self.sleep,
            reraise=True,
        )
        return retrying(func)
