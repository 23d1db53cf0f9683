"""Exchange IDs shared by the log lines of one request/reply exchange."""

from __future__ import annotations

import contextvars
import secrets
from collections.abc import Generator
from contextlib import contextmanager

__all__ = ["correlation_context", "get_correlation_id"]

_correlation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "esphome_correlation_id",
    default=None,
)


def get_correlation_id() -> str | None:
    return _correlation_id.get()


@contextmanager
def correlation_context(correlation_id: str | None = None) -> Generator[str]:
    """Run the block under ``correlation_id``, or a fresh 12-hex-digit ID.

    The enclosing ID is restored on exit. Each asyncio task sees its own
    value, so exchanges in flight on one loop never share an ID.
    """
    correlation_id = correlation_id or secrets.token_hex(6)
    token = _correlation_id.set(correlation_id)
    try:
        yield correlation_id
    finally:
        _correlation_id.reset(token)
