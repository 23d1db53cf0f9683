"""Stream framing for the plaintext and Noise transports.

Both framers buffer raw socket reads and hand out whole frames only. A
partial frame at the tail of the buffer is kept until more bytes arrive.

Usage:
    framer = PlaintextFramer()
    framer.feed(data)
    while (frame := framer.next_frame()) is not None:
        type_id, payload = frame
        ...

``next_frame`` is called in an explicit loop so the caller can stop between
frames (for example after a frame that tears the transport down).
"""

from __future__ import annotations

import logging

from esphome_native_client.const import MAX_FRAME_SIZE
from esphome_native_client.protocol.exceptions import FramingError, RequiresEncryptionError

logger = logging.getLogger(__name__)

__all__ = [
    "NOISE_HEADER_LENGTH",
    "NoiseFramer",
    "PlaintextFramer",
    "decode_varint",
    "encode_varint",
]

PLAINTEXT_INDICATOR = 0x00
NOISE_INDICATOR = 0x01
NOISE_HEADER_LENGTH = 3
NOISE_MAX_FRAME_SIZE = 0xFFFF
_MAX_VARINT_BYTES = 5  # 32-bit values


def encode_varint(value: int) -> bytes:
    """Encode a non-negative integer as a protobuf-style varint."""
    if value < 0:
        msg = f"varint value must be non-negative, got {value}"
        raise ValueError(msg)
    out = bytearray()
    while value > 0x7F:
        out.append((value & 0x7F) | 0x80)
        value >>= 7
    out.append(value)
    return bytes(out)


def decode_varint(buffer: bytes | bytearray, offset: int) -> tuple[int, int] | None:
    """Decode a varint starting at ``offset``.

    Returns:
        ``(value, next_offset)``, or None if the buffer ends mid-varint

    Raises:
        FramingError: The varint does not terminate within 5 bytes

    """
    value = 0
    shift = 0
    position = offset
    while position < len(buffer):
        byte = buffer[position]
        value |= (byte & 0x7F) << shift
        position += 1
        if not byte & 0x80:
            return value, position
        shift += 7
        if position - offset >= _MAX_VARINT_BYTES:
            raise FramingError("varint_overflow", buffer_size=len(buffer))
    return None


class PlaintextFramer:
    r"""Extract ``[0x00][varint length][varint type][payload]`` frames.

    ``length`` counts payload bytes only.

    Example:
        framer = PlaintextFramer()
        framer.feed(b"\x00\x00")
        assert framer.next_frame() is None  # type id still missing
        framer.feed(b"\x07")
        assert framer.next_frame() == (7, b"")

    """

    def __init__(self, max_frame_size: int = MAX_FRAME_SIZE) -> None:
        self.buffer: bytearray = bytearray()
        self.max_frame_size: int = max_frame_size

    def feed(self, data: bytes) -> None:
        """Append bytes from a socket read to the accumulation buffer."""
        self.buffer.extend(data)

    def next_frame(self) -> tuple[int, bytes] | None:
        """Remove and return the next complete frame, or None if more bytes are needed.

        Raises:
            RequiresEncryptionError: The remote sent a Noise frame indicator
            FramingError: Invalid indicator byte, runaway varint or oversized frame

        """
        if not self.buffer:
            return None

        indicator = self.buffer[0]
        if indicator != PLAINTEXT_INDICATOR:
            if indicator == NOISE_INDICATOR:
                raise RequiresEncryptionError
            raise FramingError(f"invalid_indicator_0x{indicator:02x}", buffer_size=len(self.buffer))

        length_field = decode_varint(self.buffer, 1)
        if length_field is None:
            return None
        length, offset = length_field
        if length > self.max_frame_size:
            raise FramingError("frame_too_large", buffer_size=len(self.buffer))

        type_field = decode_varint(self.buffer, offset)
        if type_field is None:
            return None
        type_id, offset = type_field

        end = offset + length
        if len(self.buffer) < end:
            return None

        payload = bytes(self.buffer[offset:end])
        del self.buffer[:end]
        return type_id, payload

    @staticmethod
    def encode_frame(type_id: int, payload: bytes) -> bytes:
        """Build one plaintext frame."""
        return b"".join(
            (
                bytes((PLAINTEXT_INDICATOR,)),
                encode_varint(len(payload)),
                encode_varint(type_id),
                payload,
            ),
        )


class NoiseFramer:
    """Extract ``[0x01][u16 big-endian length][bytes]`` frames."""

    def __init__(self) -> None:
        self.buffer: bytearray = bytearray()

    def feed(self, data: bytes) -> None:
        """Append bytes from a socket read to the accumulation buffer."""
        self.buffer.extend(data)

    def next_frame(self) -> bytes | None:
        """Remove and return the next complete frame body, or None if more bytes are needed.

        Raises:
            FramingError: The marker byte is not 0x01

        """
        if len(self.buffer) < NOISE_HEADER_LENGTH:
            return None

        marker = self.buffer[0]
        if marker != NOISE_INDICATOR:
            raise FramingError(f"invalid_marker_0x{marker:02x}", buffer_size=len(self.buffer))

        length = (self.buffer[1] << 8) | self.buffer[2]
        end = NOISE_HEADER_LENGTH + length
        if len(self.buffer) < end:
            return None

        frame = bytes(self.buffer[NOISE_HEADER_LENGTH:end])
        del self.buffer[:end]
        return frame

    @staticmethod
    def encode_frame(data: bytes) -> bytes:
        """Build one Noise frame around ``data``."""
        if len(data) > NOISE_MAX_FRAME_SIZE:
            msg = f"Noise frame too large: {len(data)} bytes"
            raise ValueError(msg)
        return bytes((NOISE_INDICATOR, len(data) >> 8, len(data) & 0xFF)) + data
