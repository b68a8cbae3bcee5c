"""
Retry loop and retry decorators.
"""

import asyncio
import functools
import logging
import random
import time
from typing import Awaitable, Callable, ParamSpec, TypeVar

from .backoff import BackoffPolicy
from .cancellation import CancellationToken
from .config import RetryConfig
from .predicates import RetryPredicate, always_retry
from ..exceptions import RetryCancelledError, RetryTimeoutError

logger = logging.getLogger(__name__)

P = ParamSpec("P")
T = TypeVar("T")

OnRetry = Callable[[int, Exception], None]
OnTimeout = Callable[[], None]


def _ignore_retry(attempt: int, exc: Exception) -> None:
    pass


def _ignore_timeout() -> None:
    pass


class RetryLoop:
    """
    Runs an operation until it succeeds or a terminal condition is reached.

    The operation is invoked at most ``config.max_attempts`` times. Between
    attempts the loop waits ``BackoffPolicy.delay(attempts)`` seconds, where
    ``attempts`` is the number of failures so far (so the first wait uses
    attempt 1). The wait is the only point where a cancellation token is
    observed, and the overall deadline is checked only after a full wait.

    Terminal outcomes:
        - the operation returns: its return value is returned
        - ``retry_if`` rejects the error: the error is re-raised unchanged
        - attempts are exhausted: the last error is re-raised unchanged
        - the token fires during a wait: RetryCancelledError
        - the deadline has passed after a wait: RetryTimeoutError
    """

    def __init__(
        self,
        config: RetryConfig | None = None,
        *,
        retry_if: RetryPredicate | None = None,
        on_retry: OnRetry | None = None,
        on_timeout: OnTimeout | None = None,
        rng: random.Random | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize the loop.

        Args:
            config: Retry configuration (default: RetryConfig())
            retry_if: Predicate deciding whether an error is retryable (default: always)
            on_retry: Callback(attempt, exception) called for every retryable failure
            on_timeout: Callback called once when the deadline is exceeded
            rng: Random source for jitter (default: the ``random`` module)
            clock: Monotonic clock in seconds
            sleep: Blocking sleep used when no cancellation token is given
        """
        self.config = config or RetryConfig()
        self.policy = BackoffPolicy(self.config, rng)
        self.retry_if = retry_if or always_retry
        self.on_retry = on_retry or _ignore_retry
        self.on_timeout = on_timeout or _ignore_timeout
        self._clock = clock
        self._sleep = sleep

    def execute(
        self,
        operation: Callable[[], T],
        cancellation: CancellationToken | None = None,
    ) -> T:
        """Run ``operation`` synchronously under this loop's retry policy."""
        start = self._clock()
        attempts = 0

        while True:
            try:
                return operation()
            except Exception as e:
                if not self.retry_if(e):
                    logger.debug(f"Error not retryable after {attempts + 1} attempt(s): {e!r}")
                    raise
                self.on_retry(attempts + 1, e)
                attempts += 1
                if attempts >= self.config.max_attempts:
                    logger.warning(f"All {self.config.max_attempts} attempts failed, last error: {e!r}")
                    raise
                last_error = e

            delay = self.policy.delay(attempts)
            logger.debug(
                f"Retry {attempts}/{self.config.max_attempts - 1}: {last_error!r}, "
                f"waiting {delay:.3f}s"
            )
            if self._wait(delay, cancellation):
                raise self._cancelled(cancellation, attempts) from last_error
            self._check_deadline(start, attempts, last_error)

    async def execute_async(
        self,
        operation: Callable[[], Awaitable[T]],
        cancellation: CancellationToken | None = None,
    ) -> T:
        """Run a coroutine function under this loop's retry policy."""
        start = self._clock()
        attempts = 0

        while True:
            try:
                return await operation()
            except Exception as e:
                if not self.retry_if(e):
                    logger.debug(f"Error not retryable after {attempts + 1} attempt(s): {e!r}")
                    raise
                self.on_retry(attempts + 1, e)
                attempts += 1
                if attempts >= self.config.max_attempts:
                    logger.warning(f"All {self.config.max_attempts} attempts failed, last error: {e!r}")
                    raise
                last_error = e

            delay = self.policy.delay(attempts)
            logger.debug(
                f"Retry {attempts}/{self.config.max_attempts - 1}: {last_error!r}, "
                f"waiting {delay:.3f}s"
            )
            if await self._wait_async(delay, cancellation):
                raise self._cancelled(cancellation, attempts) from last_error
            self._check_deadline(start, attempts, last_error)

    def _wait(self, delay: float, cancellation: CancellationToken | None) -> bool:
        if cancellation is None:
            self._sleep(delay)
            return False
        return cancellation.wait(delay)

    async def _wait_async(self, delay: float, cancellation: CancellationToken | None) -> bool:
        if cancellation is None:
            await asyncio.sleep(delay)
            return False
        return await cancellation.wait_async(delay)

    def _cancelled(self, cancellation: CancellationToken, attempts: int) -> RetryCancelledError:
        logger.warning(f"Retry cancelled after {attempts} attempt(s): {cancellation.reason!r}")
        return RetryCancelledError(reason=cancellation.reason, attempts=attempts)

    def _check_deadline(self, start: float, attempts: int, last_error: Exception) -> None:
        if not self.config.has_deadline:
            return
        elapsed = self._clock() - start
        if elapsed < self.config.timeout:
            return

        self.on_timeout()
        logger.warning(f"Retry deadline of {self.config.timeout}s exceeded after {attempts} attempt(s)")
        raise RetryTimeoutError(
            elapsed,
            timeout=self.config.timeout,
            last_error=last_error,
            attempts=attempts,
        ) from last_error


def retry(
    operation: Callable[[], T],
    config: RetryConfig | None = None,
    *,
    retry_if: RetryPredicate | None = None,
    on_retry: OnRetry | None = None,
    on_timeout: OnTimeout | None = None,
    cancellation: CancellationToken | None = None,
    rng: random.Random | None = None,
) -> T:
    """
    Run ``operation`` with exponential backoff and jitter.

    Args:
        operation: Zero-argument callable; raising an Exception counts as a failure
        config: Retry configuration (default: RetryConfig())
        retry_if: Predicate deciding whether an error is retryable (default: always)
        on_retry: Callback(attempt, exception) called for every retryable failure
        on_timeout: Callback called once when the deadline is exceeded
        cancellation: Token that aborts the sequence during a backoff wait
        rng: Random source for jitter

    Returns:
        Whatever ``operation`` returns on its first successful call
    """
    loop = RetryLoop(
        config,
        retry_if=retry_if,
        on_retry=on_retry,
        on_timeout=on_timeout,
        rng=rng,
    )
    return loop.execute(operation, cancellation)


async def async_retry(
    operation: Callable[[], Awaitable[T]],
    config: RetryConfig | None = None,
    *,
    retry_if: RetryPredicate | None = None,
    on_retry: OnRetry | None = None,
    on_timeout: OnTimeout | None = None,
    cancellation: CancellationToken | None = None,
    rng: random.Random | None = None,
) -> T:
    """Coroutine counterpart of :func:`retry`."""
    loop = RetryLoop(
        config,
        retry_if=retry_if,
        on_retry=on_retry,
        on_timeout=on_timeout,
        rng=rng,
    )
    return await loop.execute_async(operation, cancellation)


def with_retry(
    config: RetryConfig | None = None,
    *,
    retry_if: RetryPredicate | None = None,
    on_retry: OnRetry | None = None,
    on_timeout: OnTimeout | None = None,
    cancellation: CancellationToken | None = None,
    rng: random.Random | None = None,
) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """
    Decorator for synchronous functions with retry logic.

    Every call of the decorated function runs its own retry sequence.

    Args:
        config: Retry configuration (default: RetryConfig())
        retry_if: Predicate deciding whether an error is retryable (default: always)
        on_retry: Optional callback(attempt, exception) called before each retry
        on_timeout: Optional callback called when the deadline is exceeded
        cancellation: Token shared by every call of the decorated function
        rng: Random source for jitter, shared by every call

    Returns:
        Decorated function with retry behavior
    """
    loop = RetryLoop(
        config,
        retry_if=retry_if,
        on_retry=on_retry,
        on_timeout=on_timeout,
        rng=rng,
    )

    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            return loop.execute(functools.partial(func, *args, **kwargs), cancellation)

        return wrapper

    return decorator


def async_with_retry(
    config: RetryConfig | None = None,
    *,
    retry_if: RetryPredicate | None = None,
    on_retry: OnRetry | None = None,
    on_timeout: OnTimeout | None = None,
    cancellation: CancellationToken | None = None,
    rng: random.Random | None = None,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """
    Decorator for async functions with retry logic.

    Args:
        config: Retry configuration (default: RetryConfig())
        retry_if: Predicate deciding whether an error is retryable (default: always)
        on_retry: Optional callback(attempt, exception) called before each retry
        on_timeout: Optional callback called when the deadline is exceeded
        cancellation: Token shared by every call of the decorated function
        rng: Random source for jitter, shared by every call

    Returns:
        Decorated async function with retry behavior
    """
    loop = RetryLoop(
        config,
        retry_if=retry_if,
        on_retry=on_retry,
        on_timeout=on_timeout,
        rng=rng,
    )

    def decorator(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            return await loop.execute_async(functools.partial(func, *args, **kwargs), cancellation)

        return wrapper

    return decorator
