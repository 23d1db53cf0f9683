"""Topic-based publish/subscribe used by frame helpers and connections."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

__all__ = ["EventEmitter", "Listener"]

Listener = Callable[..., Any]


class EventEmitter:
    """Synchronous event emitter keyed by string topic.

    Listeners run in registration order inside ``emit``. A listener that
    returns a coroutine has it scheduled as a task on the running loop; the
    task is tracked until done. A failing listener, sync or async, is logged
    with its topic and does not stop the remaining listeners.

    Example:
        emitter = EventEmitter()
        emitter.on("close", lambda: print("closed"))
        emitter.emit("close")

    """

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = {}
        self._once: set[tuple[str, int]] = set()
        self._background_tasks: set[asyncio.Task[Any]] = set()

    def on(self, topic: str, listener: Listener) -> None:
        """Subscribe ``listener`` to ``topic``."""
        self._listeners.setdefault(topic, []).append(listener)

    def once(self, topic: str, listener: Listener) -> None:
        """Subscribe ``listener`` for the next emission of ``topic`` only."""
        self.on(topic, listener)
        self._once.add((topic, id(listener)))

    def off(self, topic: str, listener: Listener) -> bool:
        """Unsubscribe ``listener`` from ``topic``.

        Returns:
            True if the listener was registered, False otherwise

        """
        listeners = self._listeners.get(topic)
        if not listeners:
            return False
        try:
            listeners.remove(listener)
        except ValueError:
            return False
        self._once.discard((topic, id(listener)))
        if not listeners:
            del self._listeners[topic]
        return True

    def listener_count(self, topic: str) -> int:
        return len(self._listeners.get(topic, ()))

    def remove_all_listeners(self, topic: str | None = None) -> None:
        """Drop every listener, or every listener of one topic."""
        if topic is None:
            self._listeners.clear()
            self._once.clear()
            return
        self._listeners.pop(topic, None)
        self._once = {entry for entry in self._once if entry[0] != topic}

    def emit(self, topic: str, *args: Any) -> bool:
        """Call every listener of ``topic`` with ``args``.

        Returns:
            True if the topic had at least one listener

        """
        listeners = self._listeners.get(topic)
        if not listeners:
            return False

        # Snapshot: listeners may subscribe or unsubscribe while running
        for listener in list(listeners):
            if (topic, id(listener)) in self._once:
                _ = self.off(topic, listener)
            try:
                result = listener(*args)
            except Exception as e:
                logger.error(
                    "Listener for '%s' failed: %s",
                    topic,
                    e,
                    exc_info=True,
                    extra={"topic": topic, "error_type": type(e).__name__},
                )
                continue
            if inspect.iscoroutine(result):
                self._schedule(topic, result)
        return True

    def _schedule(self, topic: str, coro: Any) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._background_tasks.add(task)
        task.add_done_callback(lambda done: self._on_listener_done(topic, done))

    def _on_listener_done(self, topic: str, task: asyncio.Task[Any]) -> None:
        self._background_tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(
                "Async listener for '%s' failed: %s",
                topic,
                error,
                exc_info=error,
                extra={"topic": topic, "error_type": type(error).__name__},
            )
