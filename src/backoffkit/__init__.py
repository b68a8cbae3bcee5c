"""
backoffkit - Retry with exponential backoff and jitter.

Runs a fallible operation until it succeeds, hits a non-retryable error,
runs out of attempts, is cancelled, or passes an overall deadline.
"""

from .exceptions import (
    RetryError,
    RetryCancelledError,
    RetryTimeoutError,
    InvalidConfigError,
)
from .retry import (
    RetryConfig,
    BackoffPolicy,
    calculate_backoff,
    CancellationToken,
    RetryLoop,
    retry,
    async_retry,
    with_retry,
    async_with_retry,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Exceptions
    "RetryError",
    "RetryCancelledError",
    "RetryTimeoutError",
    "InvalidConfigError",
    # Retry
    "RetryConfig",
    "BackoffPolicy",
    "calculate_backoff",
    "CancellationToken",
    "RetryLoop",
    "retry",
    "async_retry",
    "with_retry",
    "async_with_retry",
]
