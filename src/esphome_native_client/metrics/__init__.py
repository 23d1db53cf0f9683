"""Metrics module."""

from .registry import (
    record_connection_state,
    record_decode_error,
    record_frame_received,
    record_frame_sent,
    record_handshake,
    record_keepalive,
    record_reconnect_scheduled,
    record_request_latency,
    record_request_timeout,
    start_metrics_server,
)

__all__ = [
    "record_connection_state",
    "record_decode_error",
    "record_frame_received",
    "record_frame_sent",
    "record_handshake",
    "record_keepalive",
    "record_reconnect_scheduled",
    "record_request_latency",
    "record_request_timeout",
    "start_metrics_server",
]
