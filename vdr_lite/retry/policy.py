"""Bounded retry with jittered exponential backoff for remote calls."""

import asyncio
import random
from collections.abc import Awaitable, Callable
from typing import TypeVar

from tenacity import AsyncRetrying, RetryCallState, retry_if_exception, stop_after_attempt

from vdr_lite.config import constants
from vdr_lite.exceptions import ErrorKind, VdrError
from vdr_lite.logging.logger import Log

T = TypeVar("T")

RetryPredicate = Callable[[BaseException], bool]
SleepFn = Callable[[float], Awaitable[None]]

_TRANSIENT_MARKERS: tuple[str, ...] = (
    "rate limit",
    "quota",
    "timeout",
    "timed out",
    "network",
    "connection",
    "temporary",
    "unavailable",
)
_PERMANENT_MARKERS: tuple[str, ...] = (
    "invalid api key",
    "authentication",
    "unauthorized",
    "forbidden",
    "not found",
    "bad request",
)
_JITTER_RATIO = 0.25


def should_retry(error: BaseException) -> bool:
    """Default retry predicate.

    Errors tagged with an ErrorKind are decided by the tag. Untagged
    third-party errors fall back to message inspection and are retried
    unless they look permanent.
    """
    if isinstance(error, VdrError):
        return error.kind == ErrorKind.TRANSIENT
    if isinstance(error, (TimeoutError, asyncio.TimeoutError, ConnectionError)):
        return True
    message = str(error).lower()
    if any(marker in message for marker in _TRANSIENT_MARKERS):
        return True
    if any(marker in message for marker in _PERMANENT_MARKERS):
        return False
    return True


def calculate_backoff_delay(
    attempt: int,
    base_delay: float = constants.RETRY_BASE_DELAY_SECONDS,
    max_delay: float = constants.RETRY_MAX_DELAY_SECONDS,
    rng: Callable[[], float] = random.random,
) -> float:
    """Delay in seconds before retrying after the 0-based `attempt`.

    `base_delay * 2**attempt`, jittered by up to +/-25%, capped at `max_delay`.
    """
    exponential = base_delay * (2**attempt)
    jitter = exponential * _JITTER_RATIO * (rng() * 2 - 1)
    return min(exponential + jitter, max_delay)


class RetryPolicy:
    """Runs an async operation until it succeeds, the predicate declines, or attempts run out.

    The last error is re-raised unchanged when retrying stops.
    """

    def __init__(
        self,
        *,
        max_attempts: int = constants.RETRY_MAX_ATTEMPTS,
        base_delay: float = constants.RETRY_BASE_DELAY_SECONDS,
        max_delay: float = constants.RETRY_MAX_DELAY_SECONDS,
        predicate: RetryPredicate = should_retry,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._max_attempts = max_attempts
        self._base_delay = base_delay
        self._max_delay = max_delay
        self._predicate = predicate
        self._sleep = sleep

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    async def call(self, operation: Callable[[], Awaitable[T]], *, label: str = "") -> T:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self._max_attempts),
            wait=self._wait,
            retry=retry_if_exception(self._predicate),
            sleep=self._sleep,
            before_sleep=lambda state: self._log_retry(state, label),
            reraise=True,
        )
        return await retrying(operation)

    def _wait(self, retry_state: RetryCallState) -> float:
        return calculate_backoff_delay(
            retry_state.attempt_number - 1,
            self._base_delay,
            self._max_delay,
        )

    def _log_retry(self, retry_state: RetryCallState, label: str) -> None:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        delay = retry_state.next_action.sleep if retry_state.next_action else 0.0
        Log.warning(
            f"Retrying {label or 'operation'} after attempt {retry_state.attempt_number} "
            f"failed: {error}",
            delay_seconds=round(delay, 2),
            max_attempts=self._max_attempts,
        )
