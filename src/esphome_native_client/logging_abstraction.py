"""Log formatting for the native API client.

Modules log through ``logging.getLogger(__name__)`` and pass structured
context as ``extra``. This module supplies the two output formats (JSON and
human-readable), both tagged with the current correlation ID, and attaches
them to the package logger on request.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import override

from esphome_native_client.correlation import get_correlation_id

__all__ = [
    "PACKAGE_LOGGER",
    "HumanReadableFormatter",
    "JSONFormatter",
    "configure_logging",
    "get_logger",
    "record_context",
]

PACKAGE_LOGGER = "esphome_native_client"

# Attributes every LogRecord carries; anything else came in through ``extra``
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
    | {"message", "asctime", "correlation_id", "taskName"},
)

_configured: dict[str, logging.Handler] = {}


def record_context(record: logging.LogRecord) -> dict[str, object]:
    """Return the structured ``extra`` fields attached to a record."""
    return {key: value for key, value in vars(record).items() if key not in _RESERVED_ATTRS}


class JSONFormatter(logging.Formatter):
    """Formatter that outputs structured JSON logs."""

    @override
    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, object] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
            "correlation_id": get_correlation_id(),
        }

        context = record_context(record)
        if context:
            log_data["context"] = context

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            log_data["stack_info"] = self.formatStack(record.stack_info)

        return json.dumps(log_data, default=str)


class HumanReadableFormatter(logging.Formatter):
    """Formatter that outputs human-readable logs with correlation IDs."""

    def __init__(self) -> None:
        # Format: timestamp level [module:line] correlation_id > message
        super().__init__(
            fmt="%(asctime)s.%(msecs)03d %(levelname)s [%(module)s:%(lineno)d] %(correlation_id)s > %(message)s",
            datefmt="%m/%d/%y %H:%M:%S",
        )

    @override
    def format(self, record: logging.LogRecord) -> str:
        context = record_context(record)

        correlation_id = get_correlation_id()
        record.correlation_id = f"[{correlation_id[:8]}]" if correlation_id else "[--------]"

        formatted = super().format(record)
        if context:
            context_str = " | ".join(f"{k}={v}" for k, v in context.items())
            formatted = f"{formatted} | {context_str}"
        return formatted


def _human_handler(human_output: str) -> logging.Handler:
    if human_output == "stdout":
        return logging.StreamHandler(sys.stdout)
    if human_output == "stderr":
        return logging.StreamHandler(sys.stderr)
    try:
        human_path = Path(human_output)
        human_path.parent.mkdir(parents=True, exist_ok=True)
        return logging.FileHandler(human_path, mode="a")
    except OSError as e:
        print(f"Warning: Failed to create human log file {human_output}: {e}", file=sys.stderr)
        return logging.StreamHandler(sys.stderr)


def configure_logging(
    log_format: str | None = None,
    json_file: str | Path | None = None,
    human_output: str | None = None,
    level: int | None = None,
) -> logging.Logger:
    """Attach formatters to the package logger.

    Repeated calls replace the handlers installed by the previous call, so
    calling it twice never duplicates output.

    Args:
        log_format: "json", "human", or "both" (default from ESPHOME_CLIENT_LOG_FORMAT)
        json_file: Path for JSON output (default from ESPHOME_CLIENT_LOG_JSON_FILE)
        human_output: "stdout", "stderr", or file path
        level: Log level (default DEBUG when ESPHOME_CLIENT_DEBUG is set, else INFO)

    Returns:
        The package logger

    """
    # Read at call time so tests can patch the environment-derived defaults
    from esphome_native_client import const  # noqa: PLC0415

    log_format = log_format or const.CLIENT_LOG_FORMAT
    json_file = json_file or const.CLIENT_LOG_JSON_FILE
    human_output = human_output or const.CLIENT_LOG_HUMAN_OUTPUT
    if level is None:
        level = logging.DEBUG if const.CLIENT_DEBUG else logging.INFO

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    for handler in _configured.values():
        logger.removeHandler(handler)
        handler.close()
    _configured.clear()

    if log_format in ("json", "both") and json_file:
        try:
            json_path = Path(json_file)
            json_path.parent.mkdir(parents=True, exist_ok=True)
            json_handler = logging.FileHandler(json_path, mode="a")
        except OSError as e:
            print(f"Warning: Failed to create JSON log file {json_file}: {e}", file=sys.stderr)
        else:
            json_handler.setFormatter(JSONFormatter())
            json_handler.setLevel(level)
            logger.addHandler(json_handler)
            _configured["json"] = json_handler

    if log_format in ("human", "both"):
        human_handler = _human_handler(human_output)
        human_handler.setFormatter(HumanReadableFormatter())
        human_handler.setLevel(level)
        logger.addHandler(human_handler)
        _configured["human"] = human_handler

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the package namespace, configuring output on first use."""
    if not _configured:
        _ = configure_logging()
    if name != PACKAGE_LOGGER and not name.startswith(f"{PACKAGE_LOGGER}."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)
