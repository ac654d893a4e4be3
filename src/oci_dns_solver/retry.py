"""Retry policy for DNS provider calls: a fixed attempt cap, a retry predicate and exponential backoff."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_ATTEMPTS = 10
_UNAUTHORIZED = 401


@dataclass(frozen=True)
class Attempt:
    """Outcome of one provider call."""

    number: int
    status: int | None = None
    error: BaseException | None = None


class RetriesExhaustedError(Exception):
    """Raised when every allowed attempt produced a retryable outcome."""

    def __init__(self, attempt: Attempt) -> None:
        super().__init__(
            f"giving up after {attempt.number} attempt(s); last status: {attempt.status}, last error: {attempt.error}"
        )
        self.attempt = attempt


def should_retry(attempt: Attempt) -> bool:
    """Retry everything except a clean 2xx and a 401."""
    if attempt.error is None and attempt.status is not None and 200 <= attempt.status < 300:
        return False
    return attempt.status != _UNAUTHORIZED


def exponential_backoff(attempt: Attempt) -> int:
    """Seconds to wait after ``attempt``: 1, 2, 4, ... with no jitter and no cap."""
    return 2 ** (attempt.number - 1)


def _status_attribute(error: BaseException) -> int | None:
    return getattr(error, "status", None)


@dataclass(frozen=True)
class RetryPolicy:
    """Stateless retry decision: attempt cap, predicate and backoff schedule."""

    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    should_retry: Callable[[Attempt], bool] = should_retry
    backoff: Callable[[Attempt], float] = exponential_backoff

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be a positive integer, got: {self.max_attempts}")

    def call(
        self,
        operation: Callable[[], T],
        retry_on: tuple[type[BaseException], ...] = (),
        status_of: Callable[[BaseException], int | None] = _status_attribute,
        sleep: Callable[[float], Any] = time.sleep,
    ) -> T:
        """Invoke ``operation`` until it yields a non-retryable outcome or attempts run out.

        Exceptions of the ``retry_on`` types are treated as outcomes whose
        status is read with ``status_of``; any other exception propagates
        unchanged. Successful responses are expected to expose ``status``.

        Raises:
            RetriesExhaustedError: The last allowed attempt was still retryable.
        """
        attempt = None
        for number in range(1, self.max_attempts + 1):
            response = None
            try:
                response = operation()
            except retry_on as exc:
                attempt = Attempt(number=number, status=status_of(exc), error=exc)
            else:
                attempt = Attempt(number=number, status=getattr(response, "status", None))

            if not self.should_retry(attempt):
                if attempt.error is not None:
                    raise attempt.error
                return response

            if number == self.max_attempts:
                break

            delay = self.backoff(attempt)
            logger.debug(
                "Attempt %d responded %s (%s); retrying in %ss",
                number,
                attempt.status,
                attempt.error,
                delay,
            )
            sleep(delay)

        raise RetriesExhaustedError(attempt) from attempt.error


DEFAULT_RETRY_POLICY = RetryPolicy()
