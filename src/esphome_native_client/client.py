"""High-level client: one device, its entities and its event streams.

``ApiClient`` wraps an ``ApiConnection`` and, each time the session becomes
authorized, runs an initialization sequence (device info, entity listing,
subscriptions) chosen at construction. It emits:

- ``connected`` / ``disconnected``: follows session authorization
- ``initialized``: the initialization sequence finished
- ``device_info(message)``: a DeviceInfoResponse arrived
- ``new_entity(record)``: an entity was added to the registry
- ``state(message)``: an entity state update
- ``logs(message)``: a device log line
- ``ble(advertisement)``: a BLE advertisement (raw or parsed)
- ``error(cause)``: session or initialization failure
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Final

from google.protobuf.message import Message

from esphome_native_client.options import ConnectionOptions
from esphome_native_client.protocol.exceptions import ApiError
from esphome_native_client.protocol.messages import LIST_ENTITIES_RESPONSE_TYPES, MESSAGE_TYPES, LogLevel
from esphome_native_client.transport.connection import ApiConnection
from esphome_native_client.transport.events import EventEmitter

logger = logging.getLogger(__name__)

__all__ = [
    "ApiClient",
    "EntityExistsError",
    "EntityNotFoundError",
    "EntityRecord",
]

_LIST_PREFIX_LENGTH = len("ListEntities")
_LIST_SUFFIX_LENGTH = len("Response")

# Entity state updates; the Home Assistant state messages are a separate feature
ENTITY_STATE_TYPES: Final[frozenset[str]] = frozenset(
    type_name
    for type_name in MESSAGE_TYPES
    if type_name.endswith("StateResponse") and "HomeAssistant" not in type_name
)

SubscribeLogsSetting = bool | tuple[LogLevel | int, bool]


class EntityExistsError(KeyError):
    """An entity with the same key is already registered."""

    def __init__(self, key: int) -> None:
        self.key: int = key
        super().__init__(f"Entity with key {key} is already added")


class EntityNotFoundError(KeyError):
    """No entity is registered under the key."""

    def __init__(self, key: int) -> None:
        self.key: int = key
        super().__init__(f"Cannot find entity with key {key}")


@dataclass
class EntityRecord:
    """An entity discovered through listing.

    Attributes:
        key: Entity key, unique per device
        kind: Component kind (e.g. "Light")
        config: The listing response describing the entity

    """

    key: int
    kind: str
    config: Message


class ApiClient(EventEmitter):
    """Device client with automatic initialization after authorization.

    Example:
        client = ApiClient(host="10.0.0.20", initialize_subscribe_logs=(LogLevel.LOG_LEVEL_INFO, False))
        client.on("state", handle_state)
        client.connect()

    """

    def __init__(
        self,
        options: ConnectionOptions | None = None,
        /,
        *,
        connection: ApiConnection | None = None,
        clear_session: bool = True,
        initialize_device_info: bool = True,
        initialize_list_entities: bool = True,
        initialize_subscribe_states: bool = True,
        initialize_subscribe_logs: SubscribeLogsSetting = False,
        initialize_subscribe_ble_advertisements: bool = False,
        initialize_subscribe_home_assistant_states: bool = False,
        initialize_subscribe_home_assistant_services: bool = False,
        **settings: Any,
    ) -> None:
        super().__init__()
        self.connection: ApiConnection = connection or ApiConnection(options, **settings)
        self.clear_session: bool = clear_session
        self.initialize_device_info: bool = initialize_device_info
        self.initialize_list_entities: bool = initialize_list_entities
        self.initialize_subscribe_states: bool = initialize_subscribe_states
        self.initialize_subscribe_logs: SubscribeLogsSetting = initialize_subscribe_logs
        self.initialize_subscribe_ble_advertisements: bool = initialize_subscribe_ble_advertisements
        self.initialize_subscribe_home_assistant_states: bool = initialize_subscribe_home_assistant_states
        self.initialize_subscribe_home_assistant_services: bool = initialize_subscribe_home_assistant_services

        self.device_info: Message | None = None
        self.entities: dict[int, EntityRecord] = {}
        self.initialized: bool = False
        self._connected: bool = False
        self._voice_assistant_handler: Callable[..., Any] | None = None

        conn = self.connection
        conn.on("authorized", self._on_authorized)
        conn.on("unauthorized", self._on_unauthorized)
        conn.on("error", self._on_error)
        conn.on("message", self._on_message)
        conn.on("message.DeviceInfoResponse", self._on_device_info)
        conn.on("message.SubscribeLogsResponse", self._on_logs)
        conn.on("message.BluetoothLEAdvertisementResponse", self._on_ble_advertisement)
        for type_name in LIST_ENTITIES_RESPONSE_TYPES:
            conn.on(f"message.{type_name}", self._listed_entity_handler(type_name))

    @property
    def connected(self) -> bool:
        return self._connected

    @connected.setter
    def connected(self, value: bool) -> None:
        if self._connected == value:
            return
        self._connected = value
        _ = self.emit("connected" if value else "disconnected")

    def connect(self) -> None:
        self.connection.connect()

    def disconnect(self) -> None:
        """Unsubscribe BLE advertisements if subscribed, then disconnect terminally."""
        if self.connection.authorized and self.initialize_subscribe_ble_advertisements:
            try:
                self.connection.unsubscribe_bluetooth_advertisement_service()
            except ApiError as e:
                logger.debug(
                    "BLE unsubscribe before disconnect failed: %s",
                    e,
                    extra={"device": self.connection.device, "error": str(e)},
                )
        self.connected = False
        self.initialized = False
        self.connection.disconnect()

    # Entity registry

    def add_entity(self, kind: str, config: Message) -> EntityRecord:
        """Register an entity from its listing response.

        Raises:
            EntityExistsError: The key is already registered

        """
        key = config.key
        if key in self.entities:
            raise EntityExistsError(key)
        record = EntityRecord(key=key, kind=kind, config=config)
        self.entities[key] = record
        logger.debug(
            "New %s entity %s (key: %d)",
            kind,
            getattr(config, "object_id", ""),
            key,
            extra={"device": self.connection.device, "kind": kind, "key": key},
        )
        _ = self.emit("new_entity", record)
        return record

    def remove_entity(self, key: int) -> EntityRecord:
        """Drop an entity from the registry.

        Raises:
            EntityNotFoundError: No entity has this key

        """
        record = self.entities.pop(key, None)
        if record is None:
            raise EntityNotFoundError(key)
        return record

    def set_voice_assistant_handler(self, handler: Callable[[Message], Any] | None) -> None:
        """Route VoiceAssistantRequest messages to ``handler`` and (un)subscribe accordingly."""
        if self._voice_assistant_handler is not None:
            _ = self.connection.off("message.VoiceAssistantRequest", self._voice_assistant_handler)
        self._voice_assistant_handler = handler
        if handler is not None:
            self.connection.on("message.VoiceAssistantRequest", handler)
        self.connection.configure_voice_assistant_service(subscribe=handler is not None)

    # Connection events

    async def _on_authorized(self) -> None:
        conn = self.connection
        self.connected = True
        self.initialized = False
        try:
            if self.clear_session:
                for key in list(self.entities):
                    _ = self.remove_entity(key)
            if self.initialize_device_info:
                _ = await conn.device_info_service()
            if self.initialize_list_entities:
                _ = await conn.list_entities_service()
            if self.initialize_subscribe_states:
                conn.subscribe_states_service()
            if self.initialize_subscribe_logs is True:
                conn.subscribe_logs_service()
            elif self.initialize_subscribe_logs:
                level, dump_config = self.initialize_subscribe_logs
                conn.subscribe_logs_service(level, dump_config)
            if self.initialize_subscribe_ble_advertisements:
                conn.subscribe_bluetooth_advertisement_service()
            if self.initialize_subscribe_home_assistant_states:
                conn.subscribe_home_assistant_states_service()
            if self.initialize_subscribe_home_assistant_services:
                conn.subscribe_home_assistant_services_service()
        except ApiError as e:
            logger.warning(
                "Initialization of %s failed: %s",
                conn.device,
                e,
                extra={"device": conn.device, "error": str(e), "error_type": type(e).__name__},
            )
            _ = self.emit("error", e)
            if conn.connected:
                conn.frame_helper.end()
            return

        self.initialized = True
        logger.info(
            "✓ %s initialized (%d entities)",
            conn.device,
            len(self.entities),
            extra={"device": conn.device, "entities": len(self.entities)},
        )
        _ = self.emit("initialized")

    def _on_unauthorized(self) -> None:
        self.connected = False
        self.initialized = False

    def _on_error(self, error: BaseException) -> None:
        _ = self.emit("error", error)

    def _on_message(self, type_name: str, message: Message) -> None:
        if type_name in ENTITY_STATE_TYPES:
            _ = self.emit("state", message)

    def _on_device_info(self, message: Message) -> None:
        self.device_info = message
        _ = self.emit("device_info", message)

    def _on_logs(self, message: Message) -> None:
        _ = self.emit("logs", message)

    def _on_ble_advertisement(self, advertisement: Message) -> None:
        _ = self.emit("ble", advertisement)

    def _listed_entity_handler(self, type_name: str) -> Callable[[Message], None]:
        kind = type_name[_LIST_PREFIX_LENGTH:-_LIST_SUFFIX_LENGTH]

        def _on_listed(config: Message) -> None:
            if config.key not in self.entities:
                _ = self.add_entity(kind, config)

        return _on_listed
