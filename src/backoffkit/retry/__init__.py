"""
backoffkit - Retry Logic.

Exponential backoff with jitter, retry predicates, cancellation and an
overall deadline.
"""

from .config import RetryConfig
from .backoff import BackoffPolicy, calculate_backoff
from .cancellation import CancellationToken
from .loop import RetryLoop, retry, async_retry, with_retry, async_with_retry
from .predicates import (
    RetryPredicate,
    always_retry,
    never_retry,
    retry_on,
    retry_unless,
    retry_if_retryable,
    any_of,
    all_of,
)

__all__ = [
    "RetryConfig",
    "BackoffPolicy",
    "calculate_backoff",
    "CancellationToken",
    "RetryLoop",
    "retry",
    "async_retry",
    "with_retry",
    "async_with_retry",
    "RetryPredicate",
    "always_retry",
    "never_retry",
    "retry_on",
    "retry_unless",
    "retry_if_retryable",
    "any_of",
    "all_of",
]
