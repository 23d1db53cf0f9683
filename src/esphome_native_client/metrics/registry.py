"""Prometheus metrics registry for native API connections."""

import threading
from typing import Final

from prometheus_client import (  # type: ignore[import-untyped]
    Counter,
    Gauge,
    Histogram,
    start_http_server,
)

from esphome_native_client.const import CLIENT_METRICS_PORT

# Frame metrics
native_api_frames_sent_total: Final = Counter(  # type: ignore[assignment]
    "native_api_frames_sent_total",
    "Total frames sent",
    ["device", "message_type"],
)

native_api_frames_received_total: Final = Counter(  # type: ignore[assignment]
    "native_api_frames_received_total",
    "Total frames received",
    ["device", "message_type"],
)

native_api_decode_errors_total: Final = Counter(  # type: ignore[assignment]
    "native_api_decode_errors_total",
    "Total frame decode errors",
    ["device", "reason"],
)

# Request/response metrics
native_api_request_latency_seconds: Final = Histogram(  # type: ignore[assignment]
    "native_api_request_latency_seconds",
    "Request to correlated reply latency in seconds",
    ["device", "response_type"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0, 10.0),
)

native_api_request_timeouts_total: Final = Counter(  # type: ignore[assignment]
    "native_api_request_timeouts_total",
    "Total requests that timed out waiting for a reply",
    ["device", "response_type"],
)

# Session metrics
native_api_connection_state: Final = Gauge(  # type: ignore[assignment]
    "native_api_connection_state",
    "Current session state",
    ["device", "state"],
)

native_api_handshake_total: Final = Counter(  # type: ignore[assignment]
    "native_api_handshake_total",
    "Total transport handshakes and authorizations",
    ["device", "stage", "outcome"],
)

native_api_keepalive_total: Final = Counter(  # type: ignore[assignment]
    "native_api_keepalive_total",
    "Total keepalive pings",
    ["device", "outcome"],
)

native_api_reconnects_scheduled_total: Final = Counter(  # type: ignore[assignment]
    "native_api_reconnects_scheduled_total",
    "Total reconnect attempts scheduled",
    ["device"],
)

_STATES: Final = ("idle", "connecting", "authorizing", "authorized", "disconnected")

_server_state = {"started": False}
_server_lock = threading.Lock()


def start_metrics_server(port: int = CLIENT_METRICS_PORT) -> None:
    """Start Prometheus HTTP metrics server (idempotent).

    The default port comes from ESPHOME_CLIENT_METRICS_PORT.
    """
    with _server_lock:
        if not _server_state["started"]:
            start_http_server(port)  # type: ignore[no-untyped-call]
            _server_state["started"] = True


def record_frame_sent(device: str, message_type: str) -> None:
    """Record a sent frame."""
    native_api_frames_sent_total.labels(device=device, message_type=message_type).inc()  # type: ignore[no-untyped-call]


def record_frame_received(device: str, message_type: str) -> None:
    """Record a received and decoded frame."""
    native_api_frames_received_total.labels(device=device, message_type=message_type).inc()  # type: ignore[no-untyped-call]


def record_decode_error(device: str, reason: str) -> None:
    """Record a decode error."""
    native_api_decode_errors_total.labels(device=device, reason=reason).inc()  # type: ignore[no-untyped-call]


def record_request_latency(device: str, response_type: str, latency_seconds: float) -> None:
    """Record request round-trip latency."""
    native_api_request_latency_seconds.labels(device=device, response_type=response_type).observe(
        latency_seconds,
    )  # type: ignore[no-untyped-call]


def record_request_timeout(device: str, response_type: str) -> None:
    """Record a request timeout."""
    native_api_request_timeouts_total.labels(device=device, response_type=response_type).inc()  # type: ignore[no-untyped-call]


def record_connection_state(device: str, state: str) -> None:
    """Record session state change."""
    # Set gauge to 1 for current state, 0 for all others
    for s in _STATES:
        value = 1 if s == state else 0
        native_api_connection_state.labels(device=device, state=s).set(value)  # type: ignore[no-untyped-call]


def record_handshake(device: str, stage: str, outcome: str) -> None:
    """Record a handshake (``stage``: "noise" or "auth")."""
    native_api_handshake_total.labels(device=device, stage=stage, outcome=outcome).inc()  # type: ignore[no-untyped-call]


def record_keepalive(device: str, outcome: str) -> None:
    """Record a keepalive ping outcome."""
    native_api_keepalive_total.labels(device=device, outcome=outcome).inc()  # type: ignore[no-untyped-call]


def record_reconnect_scheduled(device: str) -> None:
    """Record a scheduled reconnect."""
    native_api_reconnects_scheduled_total.labels(device=device).inc()  # type: ignore[no-untyped-call]
