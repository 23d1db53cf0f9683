"""Unit tests for protocol and session exception types."""

from __future__ import annotations

import pytest

from esphome_native_client.protocol.exceptions import (
    ApiError,
    BadServerNameError,
    FrameDecodeError,
    FramingError,
    HandshakeError,
    InvalidEncryptionKeyError,
    InvalidPasswordError,
    MessageParseError,
    ProtocolError,
    RequiresEncryptionError,
    UnknownMessageTypeError,
)
from esphome_native_client.transport.exceptions import (
    AlreadyAwaitingError,
    ApiConnectionError,
    AutoReplyError,
    ConnectionClosedError,
    NotAuthorizedError,
    RequestTimeoutError,
)


class TestProtocolErrors:
    """Tests for protocol exception types."""

    def test_framing_error_attributes(self):
        """Test FramingError keeps reason and buffer size."""
        err = FramingError("invalid_indicator_0x05", buffer_size=12)
        assert err.reason == "invalid_indicator_0x05"
        assert err.buffer_size == 12
        assert "invalid_indicator_0x05" in str(err)

    def test_frame_decode_error_truncates_preview(self):
        """Test payload preview is capped at 16 bytes."""
        err = FrameDecodeError("bad", message_type=9, data=bytes(range(40)))
        assert err.data_preview == bytes(range(16))
        assert err.message_type == 9

    def test_frame_decode_error_empty_payload(self):
        """Test empty payloads give an empty preview."""
        assert FrameDecodeError("bad", message_type=9).data_preview == b""

    def test_unknown_and_parse_errors_are_decode_errors(self):
        """Test both decode failures share the FrameDecodeError base."""
        assert isinstance(UnknownMessageTypeError(250), FrameDecodeError)
        parse_error = MessageParseError(2, "HelloResponse", b"\x08")
        assert isinstance(parse_error, FrameDecodeError)
        assert "HelloResponse" in str(parse_error)

    def test_bad_server_name_error(self):
        """Test name mismatch carries both names and is a handshake error."""
        err = BadServerNameError("kitchen", "garage")
        assert err.expected == "kitchen"
        assert err.received == "garage"
        assert isinstance(err, HandshakeError)

    @pytest.mark.parametrize(
        "error",
        [
            FramingError("x"),
            UnknownMessageTypeError(1),
            RequiresEncryptionError(),
            HandshakeError("x"),
            InvalidEncryptionKeyError("x"),
            InvalidPasswordError(),
        ],
    )
    def test_protocol_errors_share_base(self, error: Exception):
        """Test every protocol error derives from ProtocolError and ApiError."""
        assert isinstance(error, ProtocolError)
        assert isinstance(error, ApiError)

    def test_messages(self):
        """Test fixed messages of parameterless errors."""
        assert str(RequiresEncryptionError()) == "Connection requires encryption"
        assert str(InvalidPasswordError()) == "Invalid password"


class TestSessionErrors:
    """Tests for session exception types."""

    def test_connection_error_includes_state(self):
        """Test ApiConnectionError message carries the session state."""
        err = ApiConnectionError("Not connected", state="idle")
        assert err.reason == "Not connected"
        assert err.state == "idle"
        assert str(err) == "Not connected (state: idle)"

    def test_not_authorized_is_connection_error(self):
        """Test NotAuthorizedError can be caught as ApiConnectionError."""
        err = NotAuthorizedError(state="authorizing")
        assert isinstance(err, ApiConnectionError)
        assert err.reason == "Not authorized"

    def test_request_timeout_error(self):
        """Test RequestTimeoutError attributes."""
        err = RequestTimeoutError("PingResponse", 5.0, "abc123")
        assert err.response_type == "PingResponse"
        assert err.timeout_seconds == 5.0
        assert err.correlation_id == "abc123"
        assert "PingResponse" in str(err)

    def test_connection_closed_error(self):
        """Test ConnectionClosedError names the awaited reply."""
        err = ConnectionClosedError("DeviceInfoResponse")
        assert err.response_type == "DeviceInfoResponse"
        assert isinstance(err, ApiError)

    def test_already_awaiting_error(self):
        """Test AlreadyAwaitingError names the awaited reply."""
        assert AlreadyAwaitingError("PingResponse").response_type == "PingResponse"

    def test_auto_reply_error(self):
        """Test AutoReplyError wraps the cause in its message."""
        err = AutoReplyError("PingRequest", ApiConnectionError("Socket is not ready", state="closed"))
        assert err.request_type == "PingRequest"
        assert str(err).startswith("Failed respond to PingRequest. Reason: Socket is not ready")
