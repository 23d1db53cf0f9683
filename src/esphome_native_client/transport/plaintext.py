"""Unencrypted native API transport."""

from __future__ import annotations

import logging

from esphome_native_client.const import DEFAULT_CONNECT_TIMEOUT, MAX_FRAME_SIZE
from esphome_native_client.protocol.codec import MessageCodec
from esphome_native_client.protocol.framing import PlaintextFramer
from esphome_native_client.transport.frame_helper import FrameHelper

logger = logging.getLogger(__name__)

__all__ = ["PlaintextFrameHelper"]


class PlaintextFrameHelper(FrameHelper):
    """Frame helper for ``[0x00][varint len][varint type][payload]`` frames.

    Ready as soon as the socket opens. A Noise indicator from the remote
    raises ``RequiresEncryptionError`` and closes the transport.
    """

    def __init__(
        self,
        host: str,
        port: int,
        codec: MessageCodec | None = None,
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
        max_frame_size: int = MAX_FRAME_SIZE,
    ) -> None:
        super().__init__(host, port, codec=codec, connect_timeout=connect_timeout)
        self.framer: PlaintextFramer = PlaintextFramer(max_frame_size)

    def _on_socket_open(self) -> None:
        self._mark_ready()

    def _data_received(self, data: bytes) -> None:
        self.framer.feed(data)
        while not self._closing:
            frame = self.framer.next_frame()
            if frame is None:
                return
            type_id, payload = frame
            self._handle_frame(type_id, payload)

    def _write_frame(self, type_id: int, payload: bytes) -> None:
        self._write(PlaintextFramer.encode_frame(type_id, payload))

    def _on_teardown(self) -> None:
        if self.framer.buffer:
            logger.debug(
                "Discarding %d buffered bytes from %s",
                len(self.framer.buffer),
                self.device,
                extra={"bytes": len(self.framer.buffer), "device": self.device},
            )
        self.framer.buffer.clear()
