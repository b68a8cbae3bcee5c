"""
Cancellation token for interrupting a retry sequence between attempts.
"""

import asyncio
import logging
import threading
from typing import Callable

logger = logging.getLogger(__name__)


class CancellationToken:
    """
    One-shot, thread-safe stop signal.

    The retry loop only looks at the token while it waits between attempts;
    an operation that is already running is never interrupted by it.
    """

    def __init__(self) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._callbacks: list[Callable[[], None]] = []
        self._reason: object = None

    @classmethod
    def with_timeout(cls, seconds: float) -> "CancellationToken":
        """Create a token that cancels itself after ``seconds``."""
        token = cls()
        token.cancel_after(seconds)
        return token

    @property
    def cancelled(self) -> bool:
        """Whether the token has fired."""
        return self._event.is_set()

    @property
    def reason(self) -> object:
        """Payload passed to the first cancel() call."""
        return self._reason

    def cancel(self, reason: object = None) -> bool:
        """
        Fire the token.

        Args:
            reason: Optional payload surfaced on RetryCancelledError

        Returns:
            True if this call fired the token, False if it was already cancelled
        """
        with self._lock:
            if self._event.is_set():
                return False
            self._reason = reason
            self._event.set()
            callbacks, self._callbacks = self._callbacks, []

        logger.debug(f"Cancellation requested: {reason!r}")
        for callback in callbacks:
            try:
                callback()
            except Exception:
                logger.exception(f"Cancellation callback {callback!r} failed")
        return True

    def cancel_after(self, seconds: float, reason: object = "deadline exceeded") -> threading.Timer:
        """Schedule cancellation on a daemon timer and return the timer."""
        timer = threading.Timer(seconds, self.cancel, kwargs={"reason": reason})
        timer.daemon = True
        timer.start()
        return timer

    def add_callback(self, callback: Callable[[], None]) -> Callable[[], None]:
        """
        Run ``callback`` once when the token fires.

        The callback runs immediately when the token is already cancelled.

        Returns:
            A function that unregisters the callback
        """
        with self._lock:
            if not self._event.is_set():
                self._callbacks.append(callback)
                return lambda: self._remove_callback(callback)

        callback()
        return lambda: None

    def _remove_callback(self, callback: Callable[[], None]) -> None:
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

    def wait(self, timeout: float | None = None) -> bool:
        """Block for up to ``timeout`` seconds; True if the token fired."""
        return self._event.wait(timeout)

    async def wait_async(self, timeout: float | None = None) -> bool:
        """Asyncio counterpart of :meth:`wait`."""
        if self._event.is_set():
            return True

        loop = asyncio.get_running_loop()
        fired = loop.create_future()

        def _wake() -> None:
            if not fired.done():
                fired.set_result(None)

        remove = self.add_callback(lambda: loop.call_soon_threadsafe(_wake))
        try:
            await asyncio.wait({fired}, timeout=timeout)
        finally:
            remove()
            if not fired.done():
                fired.cancel()

        return self._event.is_set()

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else "active"
        return f"<CancellationToken {state}>"
