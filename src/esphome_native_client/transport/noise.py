"""Noise-encrypted native API transport (``Noise_NNpsk0_25519_ChaChaPoly_SHA256``).

Handshake sequence, as the initiator:

1. Send an empty frame (client hello) and the first handshake message,
   prefixed with a zero byte
2. Receive the server hello: ``[protocol=0x01][server name\\0][mac\\0]``
3. Receive the handshake reply: ``[status]`` followed by the Noise message on
   success (status 0) or a UTF-8 reason on failure

Afterwards every frame body is AEAD ciphertext of
``[u16 type][u16 length][payload]``.
"""

from __future__ import annotations

import asyncio
import enum
import logging

from cryptography.exceptions import InvalidTag
from dissononce.cipher.chachapoly import ChaChaPolyCipher
from dissononce.dh.x25519.x25519 import X25519DH
from dissononce.hash.sha256 import SHA256Hash
from dissononce.processing.handshakepatterns.interactive.NN import NNHandshakePattern
from dissononce.processing.impl.cipherstate import CipherState
from dissononce.processing.impl.handshakestate import HandshakeState
from dissononce.processing.impl.symmetricstate import SymmetricState
from dissononce.processing.modifiers.psk import PSKPatternModifier

from esphome_native_client.const import DEFAULT_CONNECT_TIMEOUT, DEFAULT_HANDSHAKE_TIMEOUT
from esphome_native_client.metrics import registry
from esphome_native_client.protocol.codec import MessageCodec
from esphome_native_client.protocol.encryption import NOISE_PROLOGUE, decode_encryption_key
from esphome_native_client.protocol.exceptions import (
    BadServerNameError,
    FramingError,
    HandshakeError,
    InvalidEncryptionKeyError,
)
from esphome_native_client.protocol.framing import NoiseFramer
from esphome_native_client.transport.frame_helper import FrameHelper

logger = logging.getLogger(__name__)

__all__ = ["HandshakeStage", "NoiseFrameHelper"]

_NOISE_PROTOCOL_ID = 0x01
_HANDSHAKE_OK = 0x00
_MAC_FAILURE_REASON = "Handshake MAC failure"
_ENCRYPTED_HEADER_LENGTH = 4


class HandshakeStage(enum.Enum):
    """Progress of the Noise handshake for one connect attempt."""

    HELLO = "hello"
    HANDSHAKE = "handshake"
    READY = "ready"
    CLOSED = "closed"


class NoiseFrameHelper(FrameHelper):
    """Frame helper that encrypts every message with a pre-shared key.

    ``connect`` fires only after the handshake succeeds. Handshake failures
    (bad key, name mismatch, protocol errors, timeout) surface as ``error``
    followed by ``close``.
    """

    def __init__(
        self,
        host: str,
        port: int,
        encryption_key: str | bytes,
        expected_server_name: str | None = None,
        codec: MessageCodec | None = None,
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
        handshake_timeout: float = DEFAULT_HANDSHAKE_TIMEOUT,
    ) -> None:
        super().__init__(host, port, codec=codec, connect_timeout=connect_timeout)
        self._psk: bytes = decode_encryption_key(encryption_key)
        self.expected_server_name: str | None = expected_server_name
        self.handshake_timeout: float = handshake_timeout
        self.framer: NoiseFramer = NoiseFramer()
        self.stage: HandshakeStage = HandshakeStage.CLOSED
        self.server_name: str | None = None
        self.server_mac: str | None = None

        self._handshake: HandshakeState | None = None
        self._send_cipher: CipherState | None = None
        self._recv_cipher: CipherState | None = None
        self._handshake_timer: asyncio.TimerHandle | None = None

    # Handshake

    def _new_handshake_state(self) -> HandshakeState:
        symmetric = SymmetricState(CipherState(ChaChaPolyCipher()), SHA256Hash())
        handshake = HandshakeState(symmetric, X25519DH())
        pattern = PSKPatternModifier(0).modify(NNHandshakePattern())
        handshake.initialize(pattern, True, NOISE_PROLOGUE, psks=(self._psk,))
        return handshake

    def _on_socket_open(self) -> None:
        self._handshake = self._new_handshake_state()
        self.stage = HandshakeStage.HELLO

        message = bytearray()
        _ = self._handshake.write_message(b"", message)

        # Client hello and first handshake message go out back to back
        self._write(NoiseFramer.encode_frame(b"") + NoiseFramer.encode_frame(b"\x00" + bytes(message)))
        logger.debug(
            "→ Noise hello and handshake sent to %s (%d bytes)",
            self.device,
            len(message),
            extra={"device": self.device, "bytes": len(message)},
        )

        self._handshake_timer = asyncio.get_running_loop().call_later(
            self.handshake_timeout,
            self._on_handshake_timeout,
        )

    def _on_handshake_timeout(self) -> None:
        self._handshake_timer = None
        if self.stage in (HandshakeStage.HELLO, HandshakeStage.HANDSHAKE):
            registry.record_handshake(self.device, "noise", "timeout")
            self._report_error(HandshakeError(f"timed out after {self.handshake_timeout}s"))
            self.destroy()

    def _handle_server_hello(self, frame: bytes) -> None:
        if not frame:
            raise HandshakeError("empty server hello")
        chosen_protocol = frame[0]
        if chosen_protocol != _NOISE_PROTOCOL_ID:
            raise HandshakeError(f"unknown protocol selected by server: {chosen_protocol}")

        # Older firmware sends only the protocol byte
        fields = frame[1:].split(b"\x00")
        if len(fields) > 1:
            self.server_name = fields[0].decode("utf-8", errors="replace")
        if len(fields) > 2 and fields[1]:
            self.server_mac = fields[1].decode("utf-8", errors="replace")

        if (
            self.expected_server_name is not None
            and self.server_name is not None
            and self.server_name != self.expected_server_name
        ):
            raise BadServerNameError(self.expected_server_name, self.server_name)

        logger.debug(
            "← Server hello from %s (name: %s, mac: %s)",
            self.device,
            self.server_name,
            self.server_mac,
            extra={"device": self.device, "server_name": self.server_name, "server_mac": self.server_mac},
        )
        self.stage = HandshakeStage.HANDSHAKE

    def _handle_handshake_reply(self, frame: bytes) -> None:
        if not frame:
            raise HandshakeError("empty handshake reply")
        if frame[0] != _HANDSHAKE_OK:
            reason = frame[1:].decode("utf-8", errors="replace")
            if reason == _MAC_FAILURE_REASON:
                raise InvalidEncryptionKeyError(reason)
            raise HandshakeError(reason)

        assert self._handshake is not None
        payload = bytearray()
        try:
            cipher_states = self._handshake.read_message(frame[1:], payload)
        except InvalidTag as e:
            raise InvalidEncryptionKeyError(_MAC_FAILURE_REASON) from e
        if not cipher_states:
            raise HandshakeError("handshake did not complete")

        # Initiator writes with the first cipher state and reads with the second
        self._send_cipher, self._recv_cipher = cipher_states
        self._handshake = None
        self._cancel_handshake_timer()
        self.stage = HandshakeStage.READY
        registry.record_handshake(self.device, "noise", "success")
        self._mark_ready()

    # Frame hooks

    def _data_received(self, data: bytes) -> None:
        self.framer.feed(data)
        while not self._closing:
            frame = self.framer.next_frame()
            if frame is None:
                return
            try:
                if self.stage is HandshakeStage.HELLO:
                    self._handle_server_hello(frame)
                elif self.stage is HandshakeStage.HANDSHAKE:
                    self._handle_handshake_reply(frame)
                else:
                    self._handle_encrypted_frame(frame)
            except HandshakeError:
                registry.record_handshake(self.device, "noise", "failure")
                raise

    def _handle_encrypted_frame(self, frame: bytes) -> None:
        assert self._recv_cipher is not None
        try:
            plaintext = self._recv_cipher.decrypt_with_ad(b"", frame)
        except InvalidTag as e:
            raise FramingError("decrypt_failed", buffer_size=len(self.framer.buffer)) from e
        if len(plaintext) < _ENCRYPTED_HEADER_LENGTH:
            raise FramingError("encrypted_frame_too_short", buffer_size=len(self.framer.buffer))

        type_id = int.from_bytes(plaintext[0:2], "big")
        length = int.from_bytes(plaintext[2:4], "big")
        if length > len(plaintext) - _ENCRYPTED_HEADER_LENGTH:
            raise FramingError("encrypted_length_mismatch", buffer_size=len(self.framer.buffer))
        payload = bytes(plaintext[_ENCRYPTED_HEADER_LENGTH : _ENCRYPTED_HEADER_LENGTH + length])
        self._handle_frame(type_id, payload)

    def _write_frame(self, type_id: int, payload: bytes) -> None:
        assert self._send_cipher is not None
        plaintext = type_id.to_bytes(2, "big") + len(payload).to_bytes(2, "big") + payload
        ciphertext = self._send_cipher.encrypt_with_ad(b"", plaintext)
        self._write(NoiseFramer.encode_frame(bytes(ciphertext)))

    def _cancel_handshake_timer(self) -> None:
        if self._handshake_timer is not None:
            self._handshake_timer.cancel()
            self._handshake_timer = None

    def _on_teardown(self) -> None:
        self._cancel_handshake_timer()
        self.framer.buffer.clear()
        self._handshake = None
        self._send_cipher = None
        self._recv_cipher = None
        self.stage = HandshakeStage.CLOSED
