"""
backoffkit - Exception Hierarchy.

Errors raised by the retry loop when it stops for its own reasons.
"""

from .base import (
    RetryError,
    RetryCancelledError,
    RetryTimeoutError,
    InvalidConfigError,
)

__all__ = [
    "RetryError",
    "RetryCancelledError",
    "RetryTimeoutError",
    "InvalidConfigError",
]
