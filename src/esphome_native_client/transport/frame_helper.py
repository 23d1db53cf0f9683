"""Socket ownership and read loop shared by the plaintext and Noise transports.

A frame helper turns one TCP connection into a sequence of typed messages.
It emits:

- ``connect``: the transport is ready for ``send`` (after any handshake)
- ``message(message)``: one decoded inbound message
- ``error(cause)``: a transport or protocol error
- ``close``: the socket is gone; fired exactly once per ``connect`` call
"""

from __future__ import annotations

import asyncio
import logging
import time

from google.protobuf.message import Message

from esphome_native_client.const import DEFAULT_CONNECT_TIMEOUT
from esphome_native_client.metrics import registry
from esphome_native_client.protocol.codec import MessageCodec, message_type_name
from esphome_native_client.protocol.exceptions import (
    MessageParseError,
    ProtocolError,
    UnknownMessageTypeError,
)
from esphome_native_client.transport.events import EventEmitter
from esphome_native_client.transport.exceptions import ApiConnectionError

logger = logging.getLogger(__name__)

__all__ = ["FrameHelper"]

_MAX_READ_SIZE = 65536


class FrameHelper(EventEmitter):
    """Base class for native API frame transports.

    Subclasses implement ``_on_socket_open`` (start of any handshake),
    ``_data_received`` (frame extraction) and ``_write_frame`` (framing and,
    for Noise, encryption of one outbound message).

    **Lifecycle**:
    - ``connect()`` schedules the read task; connection failures surface as
      ``error`` followed by ``close``
    - ``end()`` flushes pending writes, then closes
    - ``destroy()`` aborts the socket immediately
    """

    def __init__(
        self,
        host: str,
        port: int,
        codec: MessageCodec | None = None,
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
    ) -> None:
        super().__init__()
        self.host: str = host
        self.port: int = port
        self.codec: MessageCodec = codec or MessageCodec()
        self.connect_timeout: float = connect_timeout
        self.device: str = f"{host}:{port}"

        self._reader: asyncio.StreamReader | None = None
        self._writer: asyncio.StreamWriter | None = None
        self._task: asyncio.Task[None] | None = None
        self._ready: bool = False
        self._closing: bool = False
        self._close_emitted: bool = True

    @property
    def is_ready(self) -> bool:
        """True once the transport accepts ``send`` and until it closes."""
        return self._ready and not self._closing

    def connect(self) -> None:
        """Open the socket in a background task on the running loop.

        Raises:
            ApiConnectionError: A previous connect attempt is still active

        """
        if self._task is not None and not self._task.done():
            raise ApiConnectionError("Transport already connecting", state="connecting")
        self._ready = False
        self._closing = False
        self._close_emitted = False
        self._task = asyncio.get_running_loop().create_task(self._run())

    def send(self, message: Message) -> None:
        """Encode and write one message.

        Raises:
            ApiConnectionError: The transport is not ready

        """
        if not self.is_ready or self._writer is None:
            raise ApiConnectionError("Socket is not ready", state="closed")
        type_id, payload = self.codec.encode(message)
        type_name = message_type_name(message)
        logger.debug(
            "→ Sending %s (%d bytes) to %s",
            type_name,
            len(payload),
            self.device,
            extra={"message_type": type_name, "bytes": len(payload), "device": self.device},
        )
        self._write_frame(type_id, payload)
        registry.record_frame_sent(self.device, type_name)

    def end(self) -> None:
        """Gracefully close: buffered writes are flushed before the socket closes."""
        self._closing = True
        if self._writer is not None:
            self._writer.close()
        elif self._task is not None and not self._task.done():
            _ = self._task.cancel()

    def destroy(self) -> None:
        """Close immediately, discarding buffered writes."""
        self._closing = True
        if self._writer is not None:
            self._writer.transport.abort()
        elif self._task is not None and not self._task.done():
            _ = self._task.cancel()

    # Subclass hooks

    def _on_socket_open(self) -> None:
        raise NotImplementedError

    def _data_received(self, data: bytes) -> None:
        raise NotImplementedError

    def _write_frame(self, type_id: int, payload: bytes) -> None:
        raise NotImplementedError

    # Shared internals

    def _write(self, data: bytes) -> None:
        if self._writer is None:
            raise ApiConnectionError("Socket is not ready", state="closed")
        self._writer.write(data)

    def _mark_ready(self) -> None:
        """Called by subclasses once application frames may flow."""
        self._ready = True
        logger.info(
            "✓ Transport ready for %s",
            self.device,
            extra={"device": self.device},
        )
        self.emit("connect")

    def _handle_frame(self, type_id: int, payload: bytes) -> None:
        """Decode one whole frame and publish it."""
        try:
            message = self.codec.decode(type_id, payload)
        except UnknownMessageTypeError as e:
            # Unknown ids are skipped; newer firmware may send types we do not know
            registry.record_decode_error(self.device, "unknown_type")
            self._report_error(e)
            return
        except MessageParseError as e:
            # A known id that fails to parse means the stream can no longer be trusted
            registry.record_decode_error(self.device, "parse_failed")
            self._report_error(e)
            self.destroy()
            return

        type_name = message_type_name(message)
        registry.record_frame_received(self.device, type_name)
        logger.debug(
            "← Received %s from %s",
            type_name,
            self.device,
            extra={"message_type": type_name, "bytes": len(payload), "device": self.device},
        )
        self.emit("message", message)

    def _report_error(self, error: BaseException) -> None:
        logger.warning(
            "Transport error on %s: %s",
            self.device,
            error,
            extra={"device": self.device, "error": str(error), "error_type": type(error).__name__},
        )
        self.emit("error", error)

    async def _open(self) -> bool:
        start_time = time.perf_counter()
        logger.info(
            "Connecting to %s (timeout: %.1fs)",
            self.device,
            self.connect_timeout,
            extra={"host": self.host, "port": self.port, "timeout": self.connect_timeout},
        )
        try:
            self._reader, self._writer = await asyncio.wait_for(
                asyncio.open_connection(self.host, self.port),
                timeout=self.connect_timeout,
            )
        except TimeoutError:
            elapsed_ms = (time.perf_counter() - start_time) * 1000
            self._report_error(ApiConnectionError(f"Connection to {self.device} timed out", state="connecting"))
            logger.debug("Connect attempt lasted %.1fms", elapsed_ms, extra={"elapsed_ms": elapsed_ms})
            return False
        except OSError as e:
            self._report_error(e)
            return False

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            "Connected to %s in %.1fms",
            self.device,
            elapsed_ms,
            extra={"host": self.host, "port": self.port, "elapsed_ms": elapsed_ms},
        )
        return True

    async def _run(self) -> None:
        """Open the socket and pump inbound bytes until EOF, error or close."""
        try:
            if not await self._open():
                return
            if self._closing:
                return

            self._on_socket_open()

            reader = self._reader
            assert reader is not None
            while not self._closing:
                data = await reader.read(_MAX_READ_SIZE)
                if not data:
                    logger.info(
                        "Connection closed by %s",
                        self.device,
                        extra={"device": self.device},
                    )
                    break
                self._data_received(data)
        except asyncio.CancelledError:
            logger.debug("Read task for %s cancelled", self.device, extra={"device": self.device})
            raise
        except ProtocolError as e:
            self._report_error(e)
        except OSError as e:
            self._report_error(e)
        finally:
            self._teardown()

    def _teardown(self) -> None:
        self._ready = False
        self._closing = True
        writer = self._writer
        self._reader = None
        self._writer = None
        if writer is not None and not writer.is_closing():
            writer.transport.abort()
        self._on_teardown()
        if not self._close_emitted:
            self._close_emitted = True
            self.emit("close")

    def _on_teardown(self) -> None:
        """Reset variant state after the socket is gone."""
