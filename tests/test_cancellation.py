"""Tests for the cancellation token - behavior focused."""

import asyncio
import logging
import threading
import time
from unittest.mock import MagicMock

import pytest
from backoffkit.retry import CancellationToken


class TestCancel:
    """One-shot cancel semantics."""

    def test_new_token_is_active(self):
        """A fresh token has not fired and has no reason."""
        token = CancellationToken()

        assert token.cancelled is False
        assert token.reason is None

    def test_cancel_is_idempotent(self):
        """Only the first cancel fires; its reason is kept."""
        token = CancellationToken()

        assert token.cancel("first") is True
        assert token.cancel("second") is False
        assert token.cancelled is True
        assert token.reason == "first"

    def test_repr_shows_state(self):
        """repr reflects active and cancelled states."""
        token = CancellationToken()
        assert "active" in repr(token)

        token.cancel()
        assert "cancelled" in repr(token)


class TestCallbacks:
    """Callback registration."""

    def test_callback_runs_once_on_cancel(self):
        """Registered callbacks run exactly once."""
        token = CancellationToken()
        callback = MagicMock()
        token.add_callback(callback)

        token.cancel()
        token.cancel()

        callback.assert_called_once_with()

    def test_callback_runs_immediately_when_already_cancelled(self):
        """Late registration still observes the cancellation."""
        token = CancellationToken()
        token.cancel()
        callback = MagicMock()

        token.add_callback(callback)

        callback.assert_called_once_with()

    def test_removed_callback_does_not_run(self):
        """The returned remover unregisters the callback."""
        token = CancellationToken()
        callback = MagicMock()
        remove = token.add_callback(callback)

        remove()
        token.cancel()

        callback.assert_not_called()

    def test_failing_callback_does_not_stop_others(self, caplog):
        """A raising callback is logged and the remaining callbacks still run."""
        token = CancellationToken()
        broken = MagicMock(side_effect=RuntimeError("event loop is closed"))
        healthy = MagicMock()
        token.add_callback(broken)
        token.add_callback(healthy)

        with caplog.at_level(logging.ERROR, logger="backoffkit.retry.cancellation"):
            assert token.cancel("stop") is True

        broken.assert_called_once_with()
        healthy.assert_called_once_with()
        assert token.cancelled is True
        assert "failed" in caplog.text


class TestWait:
    """Blocking and async waits."""

    def test_wait_times_out_when_not_cancelled(self):
        """wait returns False after the timeout."""
        assert CancellationToken().wait(0.01) is False

    def test_wait_returns_immediately_when_cancelled(self):
        """wait returns True without blocking once fired."""
        token = CancellationToken()
        token.cancel()

        started = time.monotonic()
        assert token.wait(10.0) is True
        assert time.monotonic() - started < 1.0

    def test_wait_wakes_on_cancel_from_other_thread(self):
        """A cancel from another thread releases a blocked wait."""
        token = CancellationToken()
        threading.Timer(0.02, token.cancel).start()

        assert token.wait(10.0) is True

    def test_cancel_after_fires_with_reason(self):
        """cancel_after schedules a cancel with the default reason."""
        token = CancellationToken()
        timer = token.cancel_after(0.01)

        assert token.wait(5.0) is True
        assert token.reason == "deadline exceeded"
        assert timer.daemon is True

    def test_with_timeout_constructor(self):
        """with_timeout returns a token that fires on its own."""
        token = CancellationToken.with_timeout(0.01)

        assert token.wait(5.0) is True

    @pytest.mark.asyncio
    async def test_wait_async_times_out(self):
        """wait_async returns False when nothing fires."""
        assert await CancellationToken().wait_async(0.01) is False

    @pytest.mark.asyncio
    async def test_wait_async_wakes_on_thread_cancel(self):
        """A timer thread cancel wakes the event loop wait."""
        token = CancellationToken.with_timeout(0.02)

        started = time.monotonic()
        assert await token.wait_async(10.0) is True
        assert time.monotonic() - started < 5.0

    @pytest.mark.asyncio
    async def test_wait_async_wakes_on_task_cancel(self):
        """A cancel from another task on the same loop wakes the wait."""
        token = CancellationToken()

        async def cancel_soon():
            await asyncio.sleep(0.01)
            token.cancel("task")

        asyncio.get_running_loop().create_task(cancel_soon())

        assert await token.wait_async(10.0) is True
        assert token.reason == "task"
