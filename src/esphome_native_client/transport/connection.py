"""Native API session: authorization, keepalive, reconnection and request correlation.

``ApiConnection`` owns one frame helper and layers the session protocol on top
of it:

- Authorization: after the transport connects, a hello exchange followed by
  a connect (password) exchange; only then is ``authorized`` set
- Keepalive: periodic pings; ``ping_attempts`` consecutive failures close the
  transport as a dead link
- Reconnection: every transport close schedules a new connect attempt after
  ``reconnect_interval`` unless reconnection is disabled
- Correlation: ``send_message_await_response`` pairs a request with the next
  inbound message of the expected reply type, or a timeout

Events: ``connected``, ``disconnected``, ``authorized``, ``unauthorized``,
``reconnect``, ``error(cause)``, ``message(type_name, message)`` and
``message.<TypeName>(message)``.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Mapping
from enum import Enum
from typing import Any

from google.protobuf.message import Message

from esphome_native_client.commands import build_command
from esphome_native_client.const import (
    API_VERSION_MAJOR,
    API_VERSION_MINOR,
    BLUETOOTH_REQUEST_TIMEOUT,
    DEFAULT_REQUEST_TIMEOUT,
    RAW_BLE_ADVERTISEMENTS_MIN_VERSION,
)
from esphome_native_client.correlation import correlation_context
from esphome_native_client.instrumentation import timed_async
from esphome_native_client.metrics import registry
from esphome_native_client.options import ConnectionOptions
from esphome_native_client.protocol.codec import create_message, message_type_name
from esphome_native_client.protocol.exceptions import ApiError, InvalidPasswordError
from esphome_native_client.protocol.messages import (
    LIST_ENTITIES_RESPONSE_TYPES,
    BluetoothDeviceRequestType,
    LogLevel,
    VoiceAssistantSubscribeFlag,
)
from esphome_native_client.transport.events import EventEmitter
from esphome_native_client.transport.exceptions import (
    AlreadyAwaitingError,
    ApiConnectionError,
    AutoReplyError,
    ConnectionClosedError,
    NotAuthorizedError,
    RequestTimeoutError,
)
from esphome_native_client.transport.frame_helper import FrameHelper
from esphome_native_client.transport.noise import NoiseFrameHelper
from esphome_native_client.transport.plaintext import PlaintextFrameHelper
from esphome_native_client.transport.types import BluetoothGATTServices, ListedEntity, PendingRequest

logger = logging.getLogger(__name__)

__all__ = ["ApiConnection", "ConnectionState"]

# Component kind sits between these in a listing response type name
_LIST_PREFIX_LENGTH = len("ListEntities")
_LIST_SUFFIX_LENGTH = len("Response")


class ConnectionState(Enum):
    """Session state enumeration."""

    IDLE = "idle"
    CONNECTING = "connecting"
    AUTHORIZING = "authorizing"
    AUTHORIZED = "authorized"
    DISCONNECTED = "disconnected"


class ApiConnection(EventEmitter):
    """Session over one plaintext or Noise transport.

    Construct with ``ConnectionOptions`` or the same settings as keywords;
    the presence of an encryption key selects the Noise transport.

    **Preconditions**: every service call except ``hello_service`` and
    ``connect_service`` requires ``authorized``; every send requires
    ``connected``. Violations raise synchronously and write nothing.

    **Concurrency**: at most one request per reply type may be outstanding;
    a second one raises ``AlreadyAwaitingError``. Outstanding requests fail
    with ``ConnectionClosedError`` when the transport closes.

    Example:
        connection = ApiConnection(host="10.0.0.20", password="secret")
        connection.on("authorized", on_ready)
        connection.connect()

    """

    def __init__(
        self,
        options: ConnectionOptions | None = None,
        /,
        frame_helper: FrameHelper | None = None,
        **settings: Any,
    ) -> None:
        super().__init__()
        self.options: ConnectionOptions = options or ConnectionOptions(**settings)
        self.device: str = self.options.device
        self.frame_helper: FrameHelper = frame_helper or self._create_frame_helper(self.options)

        self.reconnect: bool = self.options.reconnect
        self.reconnect_interval: float = self.options.reconnect_interval
        self.ping_interval: float = self.options.ping_interval
        self.ping_attempts: int = self.options.ping_attempts
        self.ping_count: int = 0

        self.state: ConnectionState = ConnectionState.IDLE
        self.api_version: tuple[int, int] | None = None
        self.server_info: str | None = None
        self.supports_raw_ble_advertisements: bool = False

        self._connected: bool = False
        self._authorized: bool = False
        self._disposed: bool = False
        self._pending: dict[str, PendingRequest] = {}
        self._keepalive_task: asyncio.Task[None] | None = None
        self._authorize_task: asyncio.Task[None] | None = None
        self._reconnect_handle: asyncio.TimerHandle | None = None

        self.frame_helper.on("connect", self._on_transport_connect)
        self.frame_helper.on("close", self._on_transport_close)
        self.frame_helper.on("error", self._on_transport_error)
        self.frame_helper.on("message", self._on_transport_message)

        self.on("message.DisconnectRequest", self._on_disconnect_request)
        self.on("message.DisconnectResponse", self._on_disconnect_response)
        self.on("message.PingRequest", self._on_ping_request)
        self.on("message.GetTimeRequest", self._on_get_time_request)
        self.on("message.BluetoothLERawAdvertisementsResponse", self._on_raw_advertisements)

    @staticmethod
    def _create_frame_helper(options: ConnectionOptions) -> FrameHelper:
        if options.encryption_key is not None:
            return NoiseFrameHelper(
                options.host,
                options.port,
                options.encryption_key,
                expected_server_name=options.expected_server_name,
                handshake_timeout=options.handshake_timeout,
            )
        return PlaintextFrameHelper(options.host, options.port)

    # Lifecycle flags

    @property
    def connected(self) -> bool:
        return self._connected

    @connected.setter
    def connected(self, value: bool) -> None:
        if self._connected == value:
            return
        if not value and self._authorized:
            # Keep authorized implying connected at every observable point
            self.authorized = False
        self._connected = value
        _ = self.emit("connected" if value else "disconnected")

    @property
    def authorized(self) -> bool:
        return self._authorized

    @authorized.setter
    def authorized(self, value: bool) -> None:
        if self._authorized == value:
            return
        if value and not self._connected:
            raise ApiConnectionError("Cannot authorize without a connection", state=self.state.value)
        self._authorized = value
        _ = self.emit("authorized" if value else "unauthorized")

    def _set_state(self, state: ConnectionState) -> None:
        if self.state is state:
            return
        logger.debug(
            "Session %s: %s → %s",
            self.device,
            self.state.value,
            state.value,
            extra={"device": self.device, "from_state": self.state.value, "to_state": state.value},
        )
        self.state = state
        registry.record_connection_state(self.device, state.value)

    def _check_connected(self) -> None:
        if not self._connected:
            raise ApiConnectionError("Not connected", state=self.state.value)

    def _check_authorized(self) -> None:
        self._check_connected()
        if not self._authorized:
            raise NotAuthorizedError(state=self.state.value)

    # Connect / disconnect

    def connect(self) -> None:
        """Start a connection attempt on the running event loop.

        Raises:
            ApiConnectionError: Already connected, an attempt is in flight,
                or the session was disconnected

        """
        if self._disposed:
            raise ApiConnectionError("Connection was disconnected and cannot be reused", state=self.state.value)
        if self._connected:
            raise ApiConnectionError("Already connected. Can't connect.", state=self.state.value)
        self._cancel_reconnect()
        self.frame_helper.connect()
        self._set_state(ConnectionState.CONNECTING)

    def disconnect(self) -> None:
        """Terminally shut the session down.

        Disables reconnection, stops timers, sends a best-effort
        DisconnectRequest, fails outstanding requests, detaches every listener
        and destroys the transport. The session must not be reused.
        """
        self.reconnect = False
        self._cancel_reconnect()
        self._stop_keepalive()
        self._cancel_authorize()

        if self._connected:
            try:
                self.frame_helper.send(create_message("DisconnectRequest"))
            except ApiError as e:
                logger.debug(
                    "DisconnectRequest not sent to %s: %s",
                    self.device,
                    e,
                    extra={"device": self.device, "error": str(e)},
                )

        self._fail_pending()
        self.authorized = False
        self.connected = False
        self._disposed = True
        self._set_state(ConnectionState.DISCONNECTED)

        self.frame_helper.remove_all_listeners()
        self.remove_all_listeners()
        self.frame_helper.destroy()
        logger.info("Disconnected from %s", self.device, extra={"device": self.device})

    # Transport events

    def _on_transport_connect(self) -> None:
        self._cancel_reconnect()
        self.connected = True
        self._set_state(ConnectionState.AUTHORIZING)
        self._authorize_task = asyncio.get_running_loop().create_task(self._authorize())

    def _on_transport_close(self) -> None:
        self._cancel_authorize()
        self._stop_keepalive()
        self.ping_count = 0
        self._fail_pending()
        self.authorized = False
        self.connected = False
        self._set_state(ConnectionState.DISCONNECTED)

        if not self.reconnect:
            self._set_state(ConnectionState.IDLE)
        else:
            self._reconnect_handle = asyncio.get_running_loop().call_later(
                self.reconnect_interval,
                self._reconnect,
            )
            registry.record_reconnect_scheduled(self.device)
            logger.info(
                "Reconnecting to %s in %.1fs",
                self.device,
                self.reconnect_interval,
                extra={"device": self.device, "reconnect_interval": self.reconnect_interval},
            )
            _ = self.emit("reconnect")

    def _on_transport_error(self, error: BaseException) -> None:
        _ = self.emit("error", error)

    def _on_transport_message(self, message: Message) -> None:
        type_name = message_type_name(message)
        topic = f"message.{type_name}"
        if self.listener_count(topic) == 0:
            logger.debug(
                "{{ %s }} has no handler",
                type_name,
                extra={"device": self.device, "message_type": type_name},
            )
        _ = self.emit(topic, message)
        _ = self.emit("message", type_name, message)

    def _reconnect(self) -> None:
        self._reconnect_handle = None
        try:
            self.connect()
        except ApiConnectionError as e:
            _ = self.emit("error", e)

    def _cancel_reconnect(self) -> None:
        if self._reconnect_handle is not None:
            self._reconnect_handle.cancel()
            self._reconnect_handle = None

    # Authorization and keepalive

    async def _authorize(self) -> None:
        with correlation_context():
            try:
                hello = await self.hello_service(self.options.client_info)
                response = await self.connect_service(self.options.password)
                if not self._connected:
                    return
                if response.invalid_password:
                    raise InvalidPasswordError
            except ApiError as e:
                if not self._connected:
                    return
                registry.record_handshake(self.device, "auth", "failure")
                logger.warning(
                    "Authorization with %s failed: %s",
                    self.device,
                    e,
                    extra={"device": self.device, "error": str(e), "error_type": type(e).__name__},
                )
                _ = self.emit("error", e)
                self.frame_helper.end()
                return

            self.api_version = (hello.api_version_major, hello.api_version_minor)
            self.server_info = hello.server_info
            self.supports_raw_ble_advertisements = self.api_version >= RAW_BLE_ADVERTISEMENTS_MIN_VERSION
            registry.record_handshake(self.device, "auth", "success")
            logger.info(
                "✓ Authorized with %s (API %d.%d, %s)",
                self.device,
                hello.api_version_major,
                hello.api_version_minor,
                hello.server_info,
                extra={"device": self.device, "server_info": hello.server_info},
            )
            self._set_state(ConnectionState.AUTHORIZED)
            self.authorized = True
            self._start_keepalive()

    def _cancel_authorize(self) -> None:
        task = self._authorize_task
        self._authorize_task = None
        if task is not None and not task.done() and task is not asyncio.current_task():
            _ = task.cancel()

    def _start_keepalive(self) -> None:
        self._stop_keepalive()
        self.ping_count = 0
        self._keepalive_task = asyncio.get_running_loop().create_task(self._keepalive())

    def _stop_keepalive(self) -> None:
        task = self._keepalive_task
        self._keepalive_task = None
        if task is not None and not task.done() and task is not asyncio.current_task():
            _ = task.cancel()

    async def _keepalive(self) -> None:
        while True:
            await asyncio.sleep(self.ping_interval)
            try:
                _ = await self.ping_service()
            except ApiError as e:
                self.ping_count += 1
                registry.record_keepalive(self.device, "failure")
                logger.warning(
                    "Ping %d/%d to %s failed: %s",
                    self.ping_count,
                    self.ping_attempts,
                    self.device,
                    e,
                    extra={"device": self.device, "ping_count": self.ping_count, "error": str(e)},
                )
                if self.ping_count >= self.ping_attempts:
                    logger.error(
                        "No ping reply from %s after %d attempts, closing",
                        self.device,
                        self.ping_count,
                        extra={"device": self.device, "ping_attempts": self.ping_attempts},
                    )
                    self._keepalive_task = None
                    self.frame_helper.destroy()
                    return
            else:
                self.ping_count = 0
                registry.record_keepalive(self.device, "success")

    # Built-in handlers

    def _auto_reply(self, request_type: str, reply: Message) -> bool:
        try:
            self.send_message(reply)
        except ApiError as e:
            _ = self.emit("error", AutoReplyError(request_type, e))
            return False
        return True

    def _on_disconnect_request(self, _message: Message) -> None:
        logger.info("Device %s requested disconnect", self.device, extra={"device": self.device})
        _ = self._auto_reply("DisconnectRequest", create_message("DisconnectResponse"))
        self.frame_helper.end()

    def _on_disconnect_response(self, _message: Message) -> None:
        self.frame_helper.destroy()

    def _on_ping_request(self, _message: Message) -> None:
        _ = self._auto_reply("PingRequest", create_message("PingResponse"))

    def _on_get_time_request(self, _message: Message) -> None:
        _ = self._auto_reply("GetTimeRequest", create_message("GetTimeResponse", epoch_seconds=int(time.time())))

    def _on_raw_advertisements(self, message: Message) -> None:
        for advertisement in message.advertisements:
            _ = self.emit("message.BluetoothLEAdvertisementResponse", advertisement)

    # Sending and correlation

    def send_message(self, message: Message) -> None:
        """Write one message.

        Raises:
            ApiConnectionError: Not connected

        """
        self._check_connected()
        self.frame_helper.send(message)

    def send_command_message(self, message: Message) -> None:
        """Write one message that requires an authorized session.

        Raises:
            ApiConnectionError: Not connected
            NotAuthorizedError: Connected but not authorized

        """
        self._check_authorized()
        self.send_message(message)

    async def send_message_await_response(
        self,
        message: Message,
        response_type: str,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ) -> Message:
        """Send ``message`` and wait for the next inbound ``response_type``.

        Args:
            message: Request to send
            response_type: Reply message type name (e.g. "PingResponse")
            timeout: Seconds to wait for the reply

        Returns:
            The decoded reply

        Raises:
            ApiConnectionError: Not connected (nothing is sent)
            AlreadyAwaitingError: Another request already awaits ``response_type``
            RequestTimeoutError: No reply within ``timeout``
            ConnectionClosedError: Transport closed or session disconnected first

        """
        if response_type in self._pending:
            raise AlreadyAwaitingError(response_type)

        topic = f"message.{response_type}"
        with correlation_context() as correlation_id:
            self.send_message(message)

            pending = PendingRequest(
                response_type=response_type,
                future=asyncio.get_running_loop().create_future(),
                correlation_id=correlation_id,
                sent_at=time.perf_counter(),
            )

            def _resolve(reply: Message) -> None:
                if not pending.future.done():
                    pending.future.set_result(reply)

            self._pending[response_type] = pending
            self.once(topic, _resolve)
            logger.debug(
                "→ %s awaiting %s (timeout: %.1fs)",
                message_type_name(message),
                response_type,
                timeout,
                extra={"device": self.device, "response_type": response_type, "timeout": timeout},
            )

            try:
                reply = await asyncio.wait_for(pending.future, timeout=timeout)
            except TimeoutError as e:
                registry.record_request_timeout(self.device, response_type)
                logger.warning(
                    "Timeout waiting for %s from %s after %.1fs",
                    response_type,
                    self.device,
                    timeout,
                    extra={"device": self.device, "response_type": response_type, "timeout": timeout},
                )
                raise RequestTimeoutError(response_type, timeout, pending.correlation_id) from e
            finally:
                _ = self.off(topic, _resolve)
                if self._pending.get(response_type) is pending:
                    del self._pending[response_type]

            latency = time.perf_counter() - pending.sent_at
            registry.record_request_latency(self.device, response_type, latency)
            logger.debug(
                "← %s in %.1fms",
                response_type,
                latency * 1000,
                extra={"device": self.device, "response_type": response_type},
            )
            return reply

    def _fail_pending(self) -> None:
        pending = list(self._pending.values())
        self._pending.clear()
        for request in pending:
            if not request.future.done():
                request.future.set_exception(ConnectionClosedError(request.response_type))

    # Session services

    @timed_async("hello")
    async def hello_service(self, client_info: str | None = None) -> Message:
        """Negotiate the API version (allowed before authorization)."""
        message = create_message(
            "HelloRequest",
            client_info=client_info if client_info is not None else self.options.client_info,
            api_version_major=API_VERSION_MAJOR,
            api_version_minor=API_VERSION_MINOR,
        )
        return await self.send_message_await_response(message, "HelloResponse")

    @timed_async("connect")
    async def connect_service(self, password: str = "") -> Message:
        """Send the password (allowed before authorization)."""
        return await self.send_message_await_response(
            create_message("ConnectRequest", password=password),
            "ConnectResponse",
        )

    async def disconnect_service(self) -> Message:
        self._check_authorized()
        return await self.send_message_await_response(create_message("DisconnectRequest"), "DisconnectResponse")

    async def ping_service(self) -> Message:
        self._check_authorized()
        return await self.send_message_await_response(create_message("PingRequest"), "PingResponse")

    @timed_async("device_info")
    async def device_info_service(self) -> Message:
        self._check_authorized()
        return await self.send_message_await_response(create_message("DeviceInfoRequest"), "DeviceInfoResponse")

    async def get_time_service(self) -> Message:
        self._check_authorized()
        return await self.send_message_await_response(create_message("GetTimeRequest"), "GetTimeResponse")

    @timed_async("list_entities")
    async def list_entities_service(self) -> list[ListedEntity]:
        """Collect every listed entity until ListEntitiesDoneResponse.

        Returns:
            Entities in arrival order; empty if the device has none

        """
        self._check_authorized()
        entities: list[ListedEntity] = []

        def _collect(type_name: str, message: Message) -> None:
            if type_name in LIST_ENTITIES_RESPONSE_TYPES:
                component = type_name[_LIST_PREFIX_LENGTH:-_LIST_SUFFIX_LENGTH]
                entities.append(ListedEntity(component=component, entity=message))

        self.on("message", _collect)
        try:
            _ = await self.send_message_await_response(
                create_message("ListEntitiesRequest"),
                "ListEntitiesDoneResponse",
            )
        finally:
            _ = self.off("message", _collect)
        return entities

    def subscribe_states_service(self) -> None:
        self.send_command_message(create_message("SubscribeStatesRequest"))

    def subscribe_logs_service(
        self,
        level: LogLevel | int = LogLevel.LOG_LEVEL_DEBUG,
        dump_config: bool = False,
    ) -> None:
        self.send_command_message(create_message("SubscribeLogsRequest", level=level, dump_config=dump_config))

    def subscribe_home_assistant_services_service(self) -> None:
        self.send_command_message(create_message("SubscribeHomeassistantServicesRequest"))

    def subscribe_home_assistant_states_service(self) -> None:
        self.send_command_message(create_message("SubscribeHomeAssistantStatesRequest"))

    # Voice assistant

    def configure_voice_assistant_service(
        self,
        subscribe: bool = True,
        flags: VoiceAssistantSubscribeFlag | int = VoiceAssistantSubscribeFlag.VOICE_ASSISTANT_SUBSCRIBE_API_AUDIO,
    ) -> None:
        self.send_command_message(create_message("SubscribeVoiceAssistantRequest", subscribe=subscribe, flags=flags))

    def send_voice_assistant_response(self, port: int = 10700, error: bool = False) -> None:
        self.send_command_message(create_message("VoiceAssistantResponse", port=port, error=error))

    def send_voice_assistant_event(
        self,
        event_type: int = 0,
        data: Message | list[Message] | None = None,
    ) -> None:
        """Send a voice assistant pipeline event.

        ``data`` is one ``VoiceAssistantEventData`` or a list of them
        (see ``create_voice_assistant_event_data``).
        """
        message = create_message("VoiceAssistantEventResponse", event_type=event_type)
        if isinstance(data, list):
            message.data.extend(data)
        elif data is not None:
            message.data.append(data)
        self.send_command_message(message)

    @staticmethod
    def create_voice_assistant_event_data(name: str, value: str) -> Message:
        return create_message("VoiceAssistantEventData", name=name, value=value)

    def camera_image_service(self, single: bool = True, stream: bool = False) -> None:
        self.send_command_message(create_message("CameraImageRequest", single=single, stream=stream))

    # Entity commands

    def entity_command_service(self, kind: str, data: Mapping[str, Any]) -> None:
        """Send the command request for an entity of ``kind``.

        Raises:
            NotAuthorizedError: Session not authorized (checked before building)
            ValueError: Unknown kind or invalid command fields

        """
        self._check_authorized()
        self.send_command_message(build_command(kind, data))

    def button_command_service(self, data: Mapping[str, Any]) -> None:
        self.entity_command_service("Button", data)

    def climate_command_service(self, data: Mapping[str, Any]) -> None:
        self.entity_command_service("Climate", data)

    def cover_command_service(self, data: Mapping[str, Any]) -> None:
        self.entity_command_service("Cover", data)

    def fan_command_service(self, data: Mapping[str, Any]) -> None:
        self.entity_command_service("Fan", data)

    def light_command_service(self, data: Mapping[str, Any]) -> None:
        self.entity_command_service("Light", data)

    def lock_command_service(self, data: Mapping[str, Any]) -> None:
        self.entity_command_service("Lock", data)

    def media_player_command_service(self, data: Mapping[str, Any]) -> None:
        self.entity_command_service("MediaPlayer", data)

    def number_command_service(self, data: Mapping[str, Any]) -> None:
        self.entity_command_service("Number", data)

    def select_command_service(self, data: Mapping[str, Any]) -> None:
        self.entity_command_service("Select", data)

    def siren_command_service(self, data: Mapping[str, Any]) -> None:
        self.entity_command_service("Siren", data)

    def switch_command_service(self, data: Mapping[str, Any]) -> None:
        self.entity_command_service("Switch", data)

    def text_command_service(self, data: Mapping[str, Any]) -> None:
        self.entity_command_service("Text", data)

    # Bluetooth proxy

    def subscribe_bluetooth_advertisement_service(self) -> None:
        """Subscribe to BLE advertisements, raw when the device supports it."""
        flags = 1 if self.supports_raw_ble_advertisements else 0
        self.send_command_message(create_message("SubscribeBluetoothLEAdvertisementsRequest", flags=flags))

    def unsubscribe_bluetooth_advertisement_service(self) -> None:
        self.send_command_message(create_message("UnsubscribeBluetoothLEAdvertisementsRequest"))

    async def connect_bluetooth_device_service(self, address: int, address_type: int | None = None) -> Message:
        self._check_authorized()
        message = create_message(
            "BluetoothDeviceRequest",
            address=address,
            request_type=BluetoothDeviceRequestType.BLUETOOTH_DEVICE_REQUEST_TYPE_CONNECT,
        )
        if address_type is not None:
            message.has_address_type = True
            message.address_type = address_type
        return await self.send_message_await_response(
            message,
            "BluetoothDeviceConnectionResponse",
            BLUETOOTH_REQUEST_TIMEOUT,
        )

    async def disconnect_bluetooth_device_service(self, address: int) -> Message:
        self._check_authorized()
        return await self.send_message_await_response(
            create_message(
                "BluetoothDeviceRequest",
                address=address,
                request_type=BluetoothDeviceRequestType.BLUETOOTH_DEVICE_REQUEST_TYPE_DISCONNECT,
            ),
            "BluetoothDeviceConnectionResponse",
        )

    async def pair_bluetooth_device_service(self, address: int) -> Message:
        self._check_authorized()
        return await self.send_message_await_response(
            create_message(
                "BluetoothDeviceRequest",
                address=address,
                request_type=BluetoothDeviceRequestType.BLUETOOTH_DEVICE_REQUEST_TYPE_PAIR,
            ),
            "BluetoothDevicePairingResponse",
            BLUETOOTH_REQUEST_TIMEOUT,
        )

    async def unpair_bluetooth_device_service(self, address: int) -> Message:
        self._check_authorized()
        return await self.send_message_await_response(
            create_message(
                "BluetoothDeviceRequest",
                address=address,
                request_type=BluetoothDeviceRequestType.BLUETOOTH_DEVICE_REQUEST_TYPE_UNPAIR,
            ),
            "BluetoothDeviceUnpairingResponse",
            BLUETOOTH_REQUEST_TIMEOUT,
        )

    async def list_bluetooth_gatt_services_service(self, address: int) -> BluetoothGATTServices:
        """Collect GATT services for ``address`` until the done response."""
        self._check_authorized()
        result = BluetoothGATTServices(address=address)

        def _collect(message: Message) -> None:
            if message.address == address:
                result.services.extend(message.services)

        self.on("message.BluetoothGATTGetServicesResponse", _collect)
        try:
            _ = await self.send_message_await_response(
                create_message("BluetoothGATTGetServicesRequest", address=address),
                "BluetoothGATTGetServicesDoneResponse",
            )
        finally:
            _ = self.off("message.BluetoothGATTGetServicesResponse", _collect)
        return result

    async def read_bluetooth_gatt_characteristic_service(self, address: int, handle: int) -> Message:
        self._check_authorized()
        return await self.send_message_await_response(
            create_message("BluetoothGATTReadRequest", address=address, handle=handle),
            "BluetoothGATTReadResponse",
        )

    async def write_bluetooth_gatt_characteristic_service(
        self,
        address: int,
        handle: int,
        value: bytes,
        response: bool = False,
    ) -> Message:
        self._check_authorized()
        return await self.send_message_await_response(
            create_message(
                "BluetoothGATTWriteRequest",
                address=address,
                handle=handle,
                response=response,
                data=value,
            ),
            "BluetoothGATTWriteResponse",
        )

    async def notify_bluetooth_gatt_characteristic_service(self, address: int, handle: int) -> Message:
        self._check_authorized()
        return await self.send_message_await_response(
            create_message("BluetoothGATTNotifyRequest", address=address, handle=handle, enable=True),
            "BluetoothGATTNotifyResponse",
        )

    async def read_bluetooth_gatt_descriptor_service(self, address: int, handle: int) -> Message:
        self._check_authorized()
        return await self.send_message_await_response(
            create_message("BluetoothGATTReadDescriptorRequest", address=address, handle=handle),
            "BluetoothGATTReadResponse",
        )

    async def write_bluetooth_gatt_descriptor_service(self, address: int, handle: int, value: bytes) -> Message:
        self._check_authorized()
        return await self.send_message_await_response(
            create_message("BluetoothGATTWriteDescriptorRequest", address=address, handle=handle, data=value),
            "BluetoothGATTWriteResponse",
        )
