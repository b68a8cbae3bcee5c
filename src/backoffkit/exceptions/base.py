"""
Base exception classes raised by the retry loop itself.

Errors raised by the retried operation are never wrapped in these: when an
error is rejected by the retry predicate, or the attempts run out, the
caller gets the operation's own exception back.
"""


class RetryError(Exception):
    """Base exception for errors raised by the retry machinery."""

    def __init__(self, message: str, *, attempts: int | None = None):
        super().__init__(message)
        self.message = message
        self.attempts = attempts

    def __str__(self) -> str:
        parts = [self.message]
        if self.attempts is not None:
            parts.append(f"(attempts: {self.attempts})")
        return " ".join(parts)


class RetryCancelledError(RetryError):
    """Raised when the cancellation token fires during a backoff wait."""

    def __init__(
        self,
        message: str = "Retry cancelled",
        *,
        reason: object = None,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        self.reason = reason

    def __str__(self) -> str:
        text = super().__str__()
        if self.reason is not None:
            text = f"{text}: {self.reason}"
        return text


class RetryTimeoutError(RetryError):
    """Raised when the overall deadline has passed at a backoff boundary."""

    def __init__(
        self,
        elapsed: float,
        *,
        timeout: float | None = None,
        last_error: BaseException | None = None,
        **kwargs,
    ):
        super().__init__(f"retry timed out after {elapsed:.3f}s", **kwargs)
        self.elapsed = elapsed
        self.timeout = timeout
        self.last_error = last_error


class InvalidConfigError(RetryError, ValueError):
    """Raised when a RetryConfig field is out of range."""

    def __init__(self, message: str, *, field: str | None = None):
        super().__init__(message)
        self.field = field

    def __str__(self) -> str:
        if self.field:
            return f"{self.field}: {self.message}"
        return self.message
