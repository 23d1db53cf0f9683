"""Package-wide defaults and environment-driven settings."""

import os

from esphome_native_client import __version__

__all__ = [
    "API_VERSION_MAJOR",
    "API_VERSION_MINOR",
    "BLUETOOTH_REQUEST_TIMEOUT",
    "CLIENT_LOG_FORMAT",
    "CLIENT_LOG_HUMAN_OUTPUT",
    "CLIENT_LOG_JSON_FILE",
    "CLIENT_DEBUG",
    "CLIENT_METRICS_PORT",
    "CLIENT_PERF_THRESHOLD_MS",
    "CLIENT_PERF_TRACKING",
    "CLIENT_VERSION",
    "DEFAULT_CLIENT_INFO",
    "DEFAULT_CONNECT_TIMEOUT",
    "DEFAULT_HANDSHAKE_TIMEOUT",
    "DEFAULT_PING_ATTEMPTS",
    "DEFAULT_PING_INTERVAL",
    "DEFAULT_PORT",
    "DEFAULT_RECONNECT_INTERVAL",
    "DEFAULT_REQUEST_TIMEOUT",
    "MAX_FRAME_SIZE",
    "RAW_BLE_ADVERTISEMENTS_MIN_VERSION",
    "YES_ANSWER",
]

YES_ANSWER = ("true", "1", "yes", "y", "t", 1, "on", "o")

CLIENT_VERSION: str = __version__
DEFAULT_CLIENT_INFO: str = f"esphome-native-client {CLIENT_VERSION}"

# Wire protocol
DEFAULT_PORT: int = 6053
API_VERSION_MAJOR: int = 1
API_VERSION_MINOR: int = 10
RAW_BLE_ADVERTISEMENTS_MIN_VERSION: tuple[int, int] = (1, 9)
MAX_FRAME_SIZE: int = 1024 * 1024

# Session timing (seconds)
DEFAULT_RECONNECT_INTERVAL: float = 30.0
DEFAULT_PING_INTERVAL: float = 15.0
DEFAULT_PING_ATTEMPTS: int = 3
DEFAULT_REQUEST_TIMEOUT: float = 5.0
DEFAULT_HANDSHAKE_TIMEOUT: float = 30.0
DEFAULT_CONNECT_TIMEOUT: float = 10.0
BLUETOOTH_REQUEST_TIMEOUT: float = 10.0

CLIENT_DEBUG: bool = os.environ.get("ESPHOME_CLIENT_DEBUG", "0").casefold() in YES_ANSWER

# Logging Configuration
CLIENT_LOG_FORMAT: str = os.environ.get("ESPHOME_CLIENT_LOG_FORMAT", "human")  # "json", "human", or "both"
CLIENT_LOG_JSON_FILE: str | None = os.environ.get("ESPHOME_CLIENT_LOG_JSON_FILE")
CLIENT_LOG_HUMAN_OUTPUT: str = os.environ.get("ESPHOME_CLIENT_LOG_HUMAN_OUTPUT", "stderr")  # "stdout", "stderr", or file path

# Performance Instrumentation
CLIENT_PERF_TRACKING: bool = os.environ.get("ESPHOME_CLIENT_PERF_TRACKING", "false").casefold() in YES_ANSWER
_perf_threshold = os.environ.get("ESPHOME_CLIENT_PERF_THRESHOLD_MS", "250")
CLIENT_PERF_THRESHOLD_MS: int = int(_perf_threshold) if _perf_threshold and _perf_threshold.isdigit() else 250

_metrics_port = os.environ.get("ESPHOME_CLIENT_METRICS_PORT", "9400")
CLIENT_METRICS_PORT: int = int(_metrics_port) if _metrics_port and _metrics_port.isdigit() else 9400
