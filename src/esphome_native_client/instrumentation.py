"""
Timing for service calls on a connection.

Enabled with ESPHOME_CLIENT_PERF_TRACKING; calls slower than
ESPHOME_CLIENT_PERF_THRESHOLD_MS are logged as warnings.
"""

from __future__ import annotations

import functools
import logging
import time
from collections.abc import Callable, Coroutine
from typing import Any, ParamSpec, TypeVar

__all__ = [
    "measure_time",
    "timed_async",
]

P = ParamSpec("P")
T = TypeVar("T")


def measure_time(start_time: float) -> float:
    """
    Calculate elapsed time in milliseconds.

    Args:
        start_time: Start time from time.perf_counter()

    Returns:
        Elapsed time in milliseconds
    """
    return (time.perf_counter() - start_time) * 1000


def timed_async(
    operation_name: str | None = None,
) -> Callable[[Callable[P, Coroutine[Any, Any, T]]], Callable[P, Coroutine[Any, Any, T]]]:
    """
    Decorator for timing async functions with configurable threshold warnings.

    Args:
        operation_name: Name for the operation (defaults to function name)

    Example:
        @timed_async("device_info")
        async def device_info(self):
            ...
    """

    def decorator(func: Callable[P, Coroutine[Any, Any, T]]) -> Callable[P, Coroutine[Any, Any, T]]:
        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            # Import here to avoid circular dependency
            from esphome_native_client import const  # noqa: PLC0415
            from esphome_native_client.logging_abstraction import get_logger  # noqa: PLC0415

            if not const.CLIENT_PERF_TRACKING:
                return await func(*args, **kwargs)

            logger = get_logger(__name__)
            op_name = operation_name or func.__name__

            start_time = time.perf_counter()
            try:
                return await func(*args, **kwargs)
            finally:
                elapsed_ms = measure_time(start_time)
                _log_timing(logger, op_name, elapsed_ms, const.CLIENT_PERF_THRESHOLD_MS)

        return wrapper

    return decorator


def _log_timing(logger: logging.Logger, operation_name: str, elapsed_ms: float, threshold_ms: int) -> None:
    if elapsed_ms > threshold_ms:
        logger.warning(
            "⏱️ [%s] completed in %.1fms (threshold: %dms)",
            operation_name,
            elapsed_ms,
            threshold_ms,
            extra={
                "operation": operation_name,
                "duration_ms": round(elapsed_ms, 2),
                "threshold_ms": threshold_ms,
                "exceeded_threshold": True,
            },
        )
    else:
        logger.debug(
            "⏱️ [%s] completed in %.1fms",
            operation_name,
            elapsed_ms,
            extra={
                "operation": operation_name,
                "duration_ms": round(elapsed_ms, 2),
                "threshold_ms": threshold_ms,
                "exceeded_threshold": False,
            },
        )
