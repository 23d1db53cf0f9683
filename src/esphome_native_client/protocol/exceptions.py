"""Exception hierarchy for native API protocol errors.

Protocol errors describe bytes or handshakes that cannot be trusted. They are
reported through the transport's ``error`` event; the subset that leaves the
stream in an unknown state also closes the transport.
"""

from __future__ import annotations


class ApiError(Exception):
    """Base exception for all native API client errors."""


class ProtocolError(ApiError):
    """Base exception for wire-level protocol errors."""


class FramingError(ProtocolError):
    """The byte stream does not contain a valid frame header.

    Attributes:
        reason: Specific failure reason (e.g., "invalid_indicator", "varint_overflow")
        buffer_size: Size of the accumulation buffer when the error occurred

    """

    def __init__(self, reason: str, buffer_size: int = 0) -> None:
        self.reason = reason
        self.buffer_size = buffer_size
        super().__init__(f"Frame parsing failed: {reason}")


class FrameDecodeError(ProtocolError):
    """A complete frame could not be turned into a typed message.

    Attributes:
        message_type: Numeric message type identifier from the frame header
        data_preview: First 16 bytes of the payload (keeps secrets out of logs)

    """

    def __init__(self, message: str, message_type: int, data: bytes = b"") -> None:
        self.message_type = message_type
        self.data_preview = data[:16] if data else b""
        super().__init__(message)


class UnknownMessageTypeError(FrameDecodeError):
    """The frame carries a message type id missing from the catalog.

    Tolerated for forward compatibility: the frame is skipped and the
    transport stays open.
    """

    def __init__(self, message_type: int, data: bytes = b"") -> None:
        super().__init__(f"Failed to find message type for id: {message_type}", message_type, data)


class MessageParseError(FrameDecodeError):
    """The frame carries a known message type whose payload does not parse.

    The stream is considered desynchronised and the transport is closed.
    """

    def __init__(self, message_type: int, type_name: str, data: bytes = b"") -> None:
        self.type_name = type_name
        super().__init__(
            f"Failed to parse message type {type_name} for id: {message_type}",
            message_type,
            data,
        )


class RequiresEncryptionError(ProtocolError):
    """The remote answered a plaintext client with an encrypted frame indicator."""

    def __init__(self) -> None:
        super().__init__("Connection requires encryption")


class HandshakeError(ProtocolError):
    """The encrypted transport handshake failed.

    Attributes:
        reason: Specific failure reason

    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Handshake failed: {reason}")


class BadServerNameError(HandshakeError):
    """The remote identified itself with an unexpected name."""

    def __init__(self, expected: str, received: str) -> None:
        self.expected = expected
        self.received = received
        super().__init__(f"server name mismatch, expected {expected!r}, got {received!r}")


class InvalidEncryptionKeyError(HandshakeError, ValueError):
    """The pre-shared key is malformed or rejected by the remote."""


class InvalidPasswordError(ProtocolError):
    """The remote rejected the configured password."""

    def __init__(self) -> None:
        super().__init__("Invalid password")
