"""
Retry classification for httpx errors.

Rate limits and server errors are worth another attempt, as are transport
failures (connect errors, timeouts, dropped connections). Other 4xx
responses are not.
"""

from typing import Collection

import httpx

from .predicates import RetryPredicate

DEFAULT_RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})


def is_retryable_status(
    status_code: int,
    retryable_status_codes: Collection[int] = DEFAULT_RETRYABLE_STATUS_CODES,
) -> bool:
    """Check if the given status code should trigger a retry."""
    return status_code in retryable_status_codes


def retry_if_http_error(
    retryable_status_codes: Collection[int] = DEFAULT_RETRYABLE_STATUS_CODES,
) -> RetryPredicate:
    """
    Build a predicate for operations that call ``response.raise_for_status()``.

    Args:
        retryable_status_codes: HTTP status codes that trigger retry

    Returns:
        Predicate returning True for retryable status errors and transport errors
    """
    codes = frozenset(retryable_status_codes)

    def predicate(exc: Exception) -> bool:
        if isinstance(exc, httpx.HTTPStatusError):
            return is_retryable_status(exc.response.status_code, codes)
        return isinstance(exc, httpx.TransportError)

    return predicate
