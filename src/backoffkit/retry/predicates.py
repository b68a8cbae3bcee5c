"""
Retry predicates.

A predicate receives the exception raised by the operation and returns True
when another attempt should be made.
"""

from typing import Callable

RetryPredicate = Callable[[Exception], bool]


def always_retry(exc: Exception) -> bool:
    """Retry every error."""
    return True


def never_retry(exc: Exception) -> bool:
    """Treat every error as final."""
    return False


def retry_on(*exc_types: type[BaseException]) -> RetryPredicate:
    """Retry only errors that are instances of ``exc_types``."""
    if not exc_types:
        raise ValueError("retry_on() needs at least one exception type")

    def predicate(exc: Exception) -> bool:
        return isinstance(exc, exc_types)

    return predicate


def retry_unless(*exc_types: type[BaseException]) -> RetryPredicate:
    """Retry every error except instances of ``exc_types``."""
    if not exc_types:
        raise ValueError("retry_unless() needs at least one exception type")

    def predicate(exc: Exception) -> bool:
        return not isinstance(exc, exc_types)

    return predicate


def retry_if_retryable(exc: Exception) -> bool:
    """Honour a ``retryable`` flag on the error; errors without one are final."""
    return bool(getattr(exc, "retryable", False))


def any_of(*predicates: RetryPredicate) -> RetryPredicate:
    """Retry when at least one predicate accepts the error."""

    def predicate(exc: Exception) -> bool:
        return any(p(exc) for p in predicates)

    return predicate


def all_of(*predicates: RetryPredicate) -> RetryPredicate:
    """Retry only when every predicate accepts the error."""

    def predicate(exc: Exception) -> bool:
        return all(p(exc) for p in predicates)

    return predicate
