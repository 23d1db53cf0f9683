"""In-process mock ESPHome device speaking the native API over TCP."""

from __future__ import annotations

import asyncio
import base64
import contextlib
from typing import Any

from cryptography.exceptions import InvalidTag
from google.protobuf.message import Message

from esphome_native_client.protocol.codec import MessageCodec, create_message, message_type_name
from esphome_native_client.protocol.framing import NoiseFramer, PlaintextFramer
from tests.helpers.noise import MAC_FAILURE, NoiseResponder, server_hello

_READ_SIZE = 4096


class MockDevice:
    """Minimal device: answers session requests and lists configured switches.

    With ``psk`` set the device only accepts Noise connections; a plaintext
    client is answered with a bare Noise frame and dropped.
    """

    def __init__(
        self,
        name: str = "mock-device",
        mac_address: str = "AA:BB:CC:DD:EE:FF",
        password: str = "",
        psk: bytes | None = None,
        switches: list[dict[str, Any]] | None = None,
    ) -> None:
        self.name = name
        self.mac_address = mac_address
        self.password = password
        self.psk = psk
        self.switches = switches or []
        self.codec = MessageCodec()
        self.received: list[str] = []
        self.port: int = 0
        self._server: asyncio.Server | None = None
        self._writers: list[asyncio.StreamWriter] = []

    async def start(self) -> None:
        self._server = await asyncio.start_server(self._handle_client, "127.0.0.1", 0)
        self.port = self._server.sockets[0].getsockname()[1]

    async def stop(self) -> None:
        for writer in self._writers:
            writer.close()
        if self._server is not None:
            self._server.close()
            await self._server.wait_closed()

    # Request handling

    def respond(self, request: Message) -> list[Message]:
        """Replies for one decoded request."""
        type_name = message_type_name(request)
        self.received.append(type_name)
        if type_name == "HelloRequest":
            return [
                create_message(
                    "HelloResponse",
                    api_version_major=1,
                    api_version_minor=10,
                    server_info=f"{self.name} (esphome v2024.6.0)",
                    name=self.name,
                )
            ]
        if type_name == "ConnectRequest":
            return [create_message("ConnectResponse", invalid_password=request.password != self.password)]
        if type_name == "DeviceInfoRequest":
            return [create_message("DeviceInfoResponse", name=self.name, mac_address=self.mac_address)]
        if type_name == "ListEntitiesRequest":
            listing = [create_message("ListEntitiesSwitchResponse", **switch["config"]) for switch in self.switches]
            return [*listing, create_message("ListEntitiesDoneResponse")]
        if type_name == "SubscribeStatesRequest":
            return [
                create_message("SwitchStateResponse", key=switch["config"]["key"], state=switch["state"])
                for switch in self.switches
            ]
        if type_name == "PingRequest":
            return [create_message("PingResponse")]
        if type_name == "DisconnectRequest":
            return [create_message("DisconnectResponse")]
        return []

    async def _handle_client(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        self._writers.append(writer)
        try:
            with contextlib.suppress(ConnectionError):
                if self.psk is None:
                    await self._serve_plaintext(reader, writer)
                else:
                    await self._serve_noise(reader, writer, self.psk)
        finally:
            writer.close()

    async def _serve_plaintext(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        framer = PlaintextFramer()
        while data := await reader.read(_READ_SIZE):
            framer.feed(data)
            while (frame := framer.next_frame()) is not None:
                request = self.codec.decode(*frame)
                for reply in self.respond(request):
                    writer.write(PlaintextFramer.encode_frame(*self.codec.encode(reply)))
                await writer.drain()

    async def _serve_noise(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter, psk: bytes) -> None:
        data = await reader.read(_READ_SIZE)
        if data[:1] != b"\x01":
            writer.write(NoiseFramer.encode_frame(b"\x01"))
            await writer.drain()
            return

        framer = NoiseFramer()
        framer.feed(data)
        frames: list[bytes] = []
        while len(frames) < 2:
            frame = framer.next_frame()
            if frame is not None:
                frames.append(frame)
                continue
            more = await reader.read(_READ_SIZE)
            if not more:
                return
            framer.feed(more)

        responder = NoiseResponder(psk)
        try:
            reply = responder.respond(frames[1][1:])
        except InvalidTag:
            writer.write(server_hello(self.name, self.mac_address) + NoiseFramer.encode_frame(MAC_FAILURE))
            await writer.drain()
            return
        writer.write(server_hello(self.name, self.mac_address) + reply)
        await writer.drain()

        while True:
            while (frame := framer.next_frame()) is not None:
                request = self.codec.decode(*responder.decrypt(frame))
                for message in self.respond(request):
                    writer.write(responder.encrypt(*self.codec.encode(message)))
                await writer.drain()
            data = await reader.read(_READ_SIZE)
            if not data:
                return
            framer.feed(data)


def build_device(config: dict[str, Any], **overrides: Any) -> MockDevice:
    """Create a mock device from one entry of fixtures/devices.yaml."""
    settings: dict[str, Any] = {
        "name": config["name"],
        "mac_address": config["mac_address"],
        "password": config.get("password", ""),
        "switches": config.get("switches", []),
    }
    if "encryption_key" in config:
        settings["psk"] = base64.b64decode(config["encryption_key"])
    settings.update(overrides)
    return MockDevice(**settings)
