"""
Retry policy for transient read failures.

A bounded, fixed-delay retry driver. Each attempt is reduced to a tagged
AttemptResult (success, retryable, fatal) and the driver branches on that tag.
Which failures count as retryable is decided by an error-code predicate, not
by exception type.
"""

import logging
import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Union

from ..runtime.errors import ErrorCode, error_code


logger = logging.getLogger(__name__)


RetryCondition = Callable[[Exception], bool]


class AttemptStatus(Enum):
    """Outcome tag of a single attempt."""
    SUCCESS = "success"
    RETRYABLE = "retryable"
    FATAL = "fatal"


@dataclass(frozen=True)
class AttemptResult:
    """Result of one attempt: a value on success, an error otherwise."""
    status: AttemptStatus
    attempt: int
    value: Any = None
    error: Optional[Exception] = None


def retry_on_code(*codes: ErrorCode) -> RetryCondition:
    """Build a retry condition matching the given error codes."""
    wanted = frozenset(codes)

    def condition(exc: Exception) -> bool:
        return error_code(exc) in wanted

    return condition


class RetryPolicy:
    """
    Fixed delay retry policy.

    Invokes an operation up to ``max_attempts`` times in total, sleeping
    ``delay`` seconds between attempts, for as long as each failure matches
    the retry condition. Any other failure, or the last retryable one once
    attempts are exhausted, is raised unchanged.
    """

    def __init__(
        self,
        max_attempts: int,
        delay: float,
        retry_on: Union[ErrorCode, RetryCondition],
        sleep: Callable[[float], None] = time.sleep
    ):
        """
        Initialize retry policy.

        Args:
            max_attempts: Total number of invocations allowed (>= 1)
            delay: Delay between attempts in seconds
            retry_on: Error code, or predicate over the raised exception
            sleep: Function used to wait between attempts
        """
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")
        if delay < 0:
            raise ValueError(f"delay must be >= 0, got {delay}")

        self.max_attempts = max_attempts
        self.delay = delay
        self.retry_on = retry_on_code(retry_on) if isinstance(retry_on, ErrorCode) else retry_on
        self._sleep = sleep

        # Statistics, shared by every thread using the policy
        self._stats_lock = threading.Lock()
        self.total_attempts = 0
        self.total_retries = 0
        self.total_successes = 0
        self.total_failures = 0

    def _count(self, counter: str) -> None:
        with self._stats_lock:
            setattr(self, counter, getattr(self, counter) + 1)

    def _attempt(self, attempt: int, func: Callable, args, kwargs) -> AttemptResult:
        try:
            value = func(*args, **kwargs)
        except Exception as e:
            status = AttemptStatus.RETRYABLE if self.retry_on(e) else AttemptStatus.FATAL
            return AttemptResult(status, attempt, error=e)
        return AttemptResult(AttemptStatus.SUCCESS, attempt, value=value)

    def execute(self, func: Callable, *args, **kwargs) -> Any:
        """
        Execute function with retry policy.

        Args:
            func: Function to execute
            *args: Function arguments
            **kwargs: Function keyword arguments

        Returns:
            Function result

        Raises:
            The most recent failure, unchanged
        """
        attempt = 0
        while True:
            attempt += 1
            self._count("total_attempts")
            result = self._attempt(attempt, func, args, kwargs)

            if result.status is AttemptStatus.SUCCESS:
                self._count("total_successes")
                if attempt > 1:
                    logger.info(f"Operation succeeded on attempt {attempt}")
                return result.value

            if result.status is AttemptStatus.RETRYABLE and attempt < self.max_attempts:
                self._count("total_retries")
                logger.warning(
                    f"Attempt {attempt} failed: {result.error}. "
                    f"Retrying in {self.delay:.2f}s..."
                )
                self._sleep(self.delay)
                continue

            self._count("total_failures")
            raise result.error

    def with_max_attempts(self, max_attempts: int) -> "RetryPolicy":
        """Copy of this policy with a different attempt limit."""
        return RetryPolicy(max_attempts, self.delay, self.retry_on, self._sleep)

    def with_delay(self, delay: float) -> "RetryPolicy":
        """Copy of this policy with a different delay."""
        return RetryPolicy(self.max_attempts, delay, self.retry_on, self._sleep)

    def get_stats(self) -> dict:
        """Get retry policy statistics."""
        with self._stats_lock:
            attempts = self.total_attempts
            retries = self.total_retries
            successes = self.total_successes
            failures = self.total_failures
        return {
            "total_attempts": attempts,
            "total_retries": retries,
            "total_successes": successes,
            "total_failures": failures,
            "success_rate": successes / max(attempts, 1),
            "retry_rate": retries / max(attempts, 1)
        }


def create_stale_response_retry_policy(
    max_attempts: int = 5,
    delay: float = 0.2,
    sleep: Callable[[float], None] = time.sleep
) -> RetryPolicy:
    """Create retry policy that retries stale responses only."""
    return RetryPolicy(max_attempts, delay, ErrorCode.STALE_RESPONSE, sleep)

