"""Unit tests for EventEmitter."""

from __future__ import annotations

import asyncio
from unittest.mock import MagicMock

import pytest

from esphome_native_client.transport.events import EventEmitter
from tests.helpers.expectations import settle


class TestEventEmitter:
    """Tests for EventEmitter subscription and dispatch."""

    def test_emit_calls_listeners_in_order(self):
        """Test listeners run in registration order with the emitted args."""
        emitter = EventEmitter()
        calls = []
        emitter.on("topic", lambda value: calls.append(("first", value)))
        emitter.on("topic", lambda value: calls.append(("second", value)))

        assert emitter.emit("topic", 42) is True
        assert calls == [("first", 42), ("second", 42)]

    def test_emit_without_listeners(self):
        """Test emit reports when nobody listened."""
        assert EventEmitter().emit("nobody") is False

    def test_once_fires_a_single_time(self):
        """Test once listeners are removed after the first emission."""
        emitter = EventEmitter()
        listener = MagicMock()
        emitter.once("topic", listener)

        _ = emitter.emit("topic", 1)
        _ = emitter.emit("topic", 2)

        listener.assert_called_once_with(1)
        assert emitter.listener_count("topic") == 0

    def test_off(self):
        """Test off removes one listener and reports whether it was registered."""
        emitter = EventEmitter()
        listener = MagicMock()
        emitter.on("topic", listener)

        assert emitter.off("topic", listener) is True
        assert emitter.off("topic", listener) is False
        assert emitter.off("other", listener) is False
        _ = emitter.emit("topic")
        listener.assert_not_called()

    def test_listener_may_unsubscribe_during_emit(self):
        """Test the listener snapshot lets a listener remove another."""
        emitter = EventEmitter()
        second = MagicMock()

        def first() -> None:
            _ = emitter.off("topic", second)

        emitter.on("topic", first)
        emitter.on("topic", second)
        _ = emitter.emit("topic")

        second.assert_called_once_with()
        _ = emitter.emit("topic")
        second.assert_called_once_with()

    def test_remove_all_listeners(self):
        """Test clearing one topic or every topic."""
        emitter = EventEmitter()
        emitter.on("a", MagicMock())
        emitter.once("b", MagicMock())

        emitter.remove_all_listeners("a")
        assert emitter.listener_count("a") == 0
        assert emitter.listener_count("b") == 1

        emitter.remove_all_listeners()
        assert emitter.listener_count("b") == 0

    @pytest.mark.asyncio
    async def test_coroutine_listener_is_scheduled(self):
        """Test async listeners run as tasks on the loop."""
        emitter = EventEmitter()
        seen = asyncio.Event()

        async def listener(value: int) -> None:
            assert value == 7
            seen.set()

        emitter.on("topic", listener)
        _ = emitter.emit("topic", 7)

        await asyncio.wait_for(seen.wait(), timeout=1)

    @pytest.mark.asyncio
    async def test_failing_coroutine_listener_is_logged(self, caplog: pytest.LogCaptureFixture):
        """Test an async listener failure is logged with its topic."""
        emitter = EventEmitter()

        async def listener() -> None:
            raise RuntimeError("listener exploded")

        emitter.on("topic", listener)
        _ = emitter.emit("topic")
        await settle()

        assert "Async listener for 'topic' failed" in caplog.text

    def test_failing_listener_does_not_stop_later_listeners(self, caplog: pytest.LogCaptureFixture):
        """Test a raising listener is logged and the remaining listeners still run."""
        emitter = EventEmitter()
        calls = []

        def broken(value: int) -> None:
            raise ValueError("bad listener")

        emitter.on("topic", broken)
        emitter.on("topic", lambda value: calls.append(value))

        assert emitter.emit("topic", 3) is True
        _ = emitter.emit("topic", 4)

        assert calls == [3, 4]
        failures = [r for r in caplog.records if "Listener for 'topic' failed" in r.getMessage()]
        assert len(failures) == 2
        assert failures[0].exc_info is not None
        assert failures[0].error_type == "ValueError"

    def test_failing_once_listener_is_still_removed(self):
        """Test a once listener that raises does not fire again."""
        emitter = EventEmitter()
        listener = MagicMock(side_effect=RuntimeError("boom"))
        emitter.once("topic", listener)

        _ = emitter.emit("topic")
        _ = emitter.emit("topic")

        listener.assert_called_once_with()
        assert emitter.listener_count("topic") == 0
