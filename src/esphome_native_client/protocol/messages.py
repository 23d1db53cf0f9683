"""Native API message catalog.

Each row names a message kind, its numeric type id on the wire (``None`` for
messages that only appear nested inside others) and its proto3 fields. The
catalog is compiled once at import time into real protobuf message classes, so
the rest of the package works with ordinary ``google.protobuf`` messages.

Enum-typed fields are declared as plain varints; the matching Python enums
live at the bottom of this module.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Final, NamedTuple

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory
from google.protobuf.message import Message

__all__ = [
    "ID_TO_TYPE",
    "LIST_ENTITIES_RESPONSE_TYPES",
    "MESSAGE_TYPES",
    "TYPE_TO_ID",
    "BluetoothDeviceRequestType",
    "EntityCategory",
    "LogLevel",
    "VoiceAssistantEventType",
    "VoiceAssistantSubscribeFlag",
    "message_class",
]

_PACKAGE: Final = "esphome_native_client.api"

_SCALARS: Final[dict[str, int]] = {
    "bool": descriptor_pb2.FieldDescriptorProto.TYPE_BOOL,
    "bytes": descriptor_pb2.FieldDescriptorProto.TYPE_BYTES,
    "fixed32": descriptor_pb2.FieldDescriptorProto.TYPE_FIXED32,
    "float": descriptor_pb2.FieldDescriptorProto.TYPE_FLOAT,
    "int32": descriptor_pb2.FieldDescriptorProto.TYPE_INT32,
    "sint32": descriptor_pb2.FieldDescriptorProto.TYPE_SINT32,
    "string": descriptor_pb2.FieldDescriptorProto.TYPE_STRING,
    "uint32": descriptor_pb2.FieldDescriptorProto.TYPE_UINT32,
    "uint64": descriptor_pb2.FieldDescriptorProto.TYPE_UINT64,
}


class Field(NamedTuple):
    """One proto3 field: scalar type name or the name of a nested message."""

    name: str
    number: int
    type: str
    repeated: bool = False


def _entity_base() -> tuple[Field, ...]:
    return (
        Field("object_id", 1, "string"),
        Field("key", 2, "fixed32"),
        Field("name", 3, "string"),
        Field("unique_id", 4, "string"),
    )


def _key() -> Field:
    return Field("key", 1, "fixed32")


def _address_handle() -> tuple[Field, ...]:
    return (Field("address", 1, "uint64"), Field("handle", 2, "uint32"))


# name -> (type id, fields)
_CATALOG: Final[dict[str, tuple[int | None, tuple[Field, ...]]]] = {
    # Connection control
    "HelloRequest": (1, (
        Field("client_info", 1, "string"),
        Field("api_version_major", 2, "uint32"),
        Field("api_version_minor", 3, "uint32"),
    )),
    "HelloResponse": (2, (
        Field("api_version_major", 1, "uint32"),
        Field("api_version_minor", 2, "uint32"),
        Field("server_info", 3, "string"),
        Field("name", 4, "string"),
    )),
    "ConnectRequest": (3, (Field("password", 1, "string"),)),
    "ConnectResponse": (4, (Field("invalid_password", 1, "bool"),)),
    "DisconnectRequest": (5, ()),
    "DisconnectResponse": (6, ()),
    "PingRequest": (7, ()),
    "PingResponse": (8, ()),
    "DeviceInfoRequest": (9, ()),
    "DeviceInfoResponse": (10, (
        Field("uses_password", 1, "bool"),
        Field("name", 2, "string"),
        Field("mac_address", 3, "string"),
        Field("esphome_version", 4, "string"),
        Field("compilation_time", 5, "string"),
        Field("model", 6, "string"),
        Field("has_deep_sleep", 7, "bool"),
        Field("project_name", 8, "string"),
        Field("project_version", 9, "string"),
        Field("webserver_port", 10, "uint32"),
        Field("legacy_bluetooth_proxy_version", 11, "uint32"),
        Field("manufacturer", 12, "string"),
        Field("friendly_name", 13, "string"),
        Field("legacy_voice_assistant_version", 14, "uint32"),
        Field("bluetooth_proxy_feature_flags", 15, "uint32"),
        Field("suggested_area", 16, "string"),
        Field("voice_assistant_feature_flags", 17, "uint32"),
    )),
    # Entity listing
    "ListEntitiesRequest": (11, ()),
    "ListEntitiesBinarySensorResponse": (12, (
        *_entity_base(),
        Field("device_class", 5, "string"),
        Field("is_status_binary_sensor", 6, "bool"),
        Field("disabled_by_default", 7, "bool"),
        Field("icon", 8, "string"),
        Field("entity_category", 9, "uint32"),
    )),
    "ListEntitiesCoverResponse": (13, (
        *_entity_base(),
        Field("assumed_state", 5, "bool"),
        Field("supports_position", 6, "bool"),
        Field("supports_tilt", 7, "bool"),
        Field("device_class", 8, "string"),
        Field("disabled_by_default", 9, "bool"),
        Field("icon", 10, "string"),
        Field("entity_category", 11, "uint32"),
        Field("supports_stop", 12, "bool"),
    )),
    "ListEntitiesFanResponse": (14, (
        *_entity_base(),
        Field("supports_oscillation", 5, "bool"),
        Field("supports_speed", 6, "bool"),
        Field("supports_direction", 7, "bool"),
        Field("supported_speed_count", 8, "int32"),
        Field("disabled_by_default", 9, "bool"),
        Field("icon", 10, "string"),
        Field("entity_category", 11, "uint32"),
        Field("supported_preset_modes", 12, "string", repeated=True),
    )),
    "ListEntitiesLightResponse": (15, (
        *_entity_base(),
        Field("min_mireds", 9, "float"),
        Field("max_mireds", 10, "float"),
        Field("effects", 11, "string", repeated=True),
        Field("supported_color_modes", 12, "uint32", repeated=True),
        Field("disabled_by_default", 13, "bool"),
        Field("icon", 14, "string"),
        Field("entity_category", 15, "uint32"),
    )),
    "ListEntitiesSensorResponse": (16, (
        *_entity_base(),
        Field("icon", 5, "string"),
        Field("unit_of_measurement", 6, "string"),
        Field("accuracy_decimals", 7, "int32"),
        Field("force_update", 8, "bool"),
        Field("device_class", 9, "string"),
        Field("state_class", 10, "uint32"),
        Field("disabled_by_default", 12, "bool"),
        Field("entity_category", 13, "uint32"),
    )),
    "ListEntitiesSwitchResponse": (17, (
        *_entity_base(),
        Field("icon", 5, "string"),
        Field("assumed_state", 6, "bool"),
        Field("disabled_by_default", 7, "bool"),
        Field("entity_category", 8, "uint32"),
        Field("device_class", 9, "string"),
    )),
    "ListEntitiesTextSensorResponse": (18, (
        *_entity_base(),
        Field("icon", 5, "string"),
        Field("disabled_by_default", 6, "bool"),
        Field("entity_category", 7, "uint32"),
        Field("device_class", 8, "string"),
    )),
    "ListEntitiesDoneResponse": (19, ()),
    # States
    "SubscribeStatesRequest": (20, ()),
    "BinarySensorStateResponse": (21, (
        _key(),
        Field("state", 2, "bool"),
        Field("missing_state", 3, "bool"),
    )),
    "CoverStateResponse": (22, (
        _key(),
        Field("legacy_state", 2, "uint32"),
        Field("position", 3, "float"),
        Field("tilt", 4, "float"),
        Field("current_operation", 5, "uint32"),
    )),
    "FanStateResponse": (23, (
        _key(),
        Field("state", 2, "bool"),
        Field("oscillating", 3, "bool"),
        Field("speed", 4, "uint32"),
        Field("direction", 5, "uint32"),
        Field("speed_level", 6, "int32"),
        Field("preset_mode", 7, "string"),
    )),
    "LightStateResponse": (24, (
        _key(),
        Field("state", 2, "bool"),
        Field("brightness", 3, "float"),
        Field("red", 4, "float"),
        Field("green", 5, "float"),
        Field("blue", 6, "float"),
        Field("white", 7, "float"),
        Field("color_temperature", 8, "float"),
        Field("effect", 9, "string"),
        Field("color_brightness", 10, "float"),
        Field("color_mode", 11, "uint32"),
        Field("cold_white", 12, "float"),
        Field("warm_white", 13, "float"),
    )),
    "SensorStateResponse": (25, (
        _key(),
        Field("state", 2, "float"),
        Field("missing_state", 3, "bool"),
    )),
    "SwitchStateResponse": (26, (_key(), Field("state", 2, "bool"))),
    "TextSensorStateResponse": (27, (
        _key(),
        Field("state", 2, "string"),
        Field("missing_state", 3, "bool"),
    )),
    # Logs
    "SubscribeLogsRequest": (28, (
        Field("level", 1, "uint32"),
        Field("dump_config", 2, "bool"),
    )),
    "SubscribeLogsResponse": (29, (
        Field("level", 1, "uint32"),
        Field("message", 3, "bytes"),
        Field("send_failed", 4, "bool"),
    )),
    # Commands
    "CoverCommandRequest": (30, (
        _key(),
        Field("has_legacy_command", 2, "bool"),
        Field("legacy_command", 3, "uint32"),
        Field("has_position", 4, "bool"),
        Field("position", 5, "float"),
        Field("has_tilt", 6, "bool"),
        Field("tilt", 7, "float"),
        Field("stop", 8, "bool"),
    )),
    "FanCommandRequest": (31, (
        _key(),
        Field("has_state", 2, "bool"),
        Field("state", 3, "bool"),
        Field("has_speed", 4, "bool"),
        Field("speed", 5, "uint32"),
        Field("has_oscillating", 6, "bool"),
        Field("oscillating", 7, "bool"),
        Field("has_direction", 8, "bool"),
        Field("direction", 9, "uint32"),
        Field("has_speed_level", 10, "bool"),
        Field("speed_level", 11, "int32"),
        Field("has_preset_mode", 12, "bool"),
        Field("preset_mode", 13, "string"),
    )),
    "LightCommandRequest": (32, (
        _key(),
        Field("has_state", 2, "bool"),
        Field("state", 3, "bool"),
        Field("has_brightness", 4, "bool"),
        Field("brightness", 5, "float"),
        Field("has_rgb", 6, "bool"),
        Field("red", 7, "float"),
        Field("green", 8, "float"),
        Field("blue", 9, "float"),
        Field("has_white", 10, "bool"),
        Field("white", 11, "float"),
        Field("has_color_temperature", 12, "bool"),
        Field("color_temperature", 13, "float"),
        Field("has_transition_length", 14, "bool"),
        Field("transition_length", 15, "uint32"),
        Field("has_flash_length", 16, "bool"),
        Field("flash_length", 17, "uint32"),
        Field("has_effect", 18, "bool"),
        Field("effect", 19, "string"),
        Field("has_color_brightness", 20, "bool"),
        Field("color_brightness", 21, "float"),
        Field("has_color_mode", 22, "bool"),
        Field("color_mode", 23, "uint32"),
        Field("has_cold_white", 24, "bool"),
        Field("cold_white", 25, "float"),
        Field("has_warm_white", 26, "bool"),
        Field("warm_white", 27, "float"),
    )),
    "SwitchCommandRequest": (33, (_key(), Field("state", 2, "bool"))),
    # Home Assistant integration
    "SubscribeHomeassistantServicesRequest": (34, ()),
    "HomeassistantServiceMap": (None, (
        Field("key", 1, "string"),
        Field("value", 2, "string"),
    )),
    "HomeassistantServiceResponse": (35, (
        Field("service", 1, "string"),
        Field("data", 2, "HomeassistantServiceMap", repeated=True),
        Field("data_template", 3, "HomeassistantServiceMap", repeated=True),
        Field("variables", 4, "HomeassistantServiceMap", repeated=True),
        Field("is_event", 5, "bool"),
    )),
    "GetTimeRequest": (36, ()),
    "GetTimeResponse": (37, (Field("epoch_seconds", 1, "fixed32"),)),
    "SubscribeHomeAssistantStatesRequest": (38, ()),
    "SubscribeHomeAssistantStateResponse": (39, (
        Field("entity_id", 1, "string"),
        Field("attribute", 2, "string"),
        Field("once", 3, "bool"),
    )),
    "HomeAssistantStateResponse": (40, (
        Field("entity_id", 1, "string"),
        Field("state", 2, "string"),
        Field("attribute", 3, "string"),
    )),
    "ListEntitiesServicesArgument": (None, (
        Field("name", 1, "string"),
        Field("type", 2, "uint32"),
    )),
    "ListEntitiesServicesResponse": (41, (
        Field("name", 1, "string"),
        Field("key", 2, "fixed32"),
        Field("args", 3, "ListEntitiesServicesArgument", repeated=True),
    )),
    # Camera
    "ListEntitiesCameraResponse": (43, (
        *_entity_base(),
        Field("disabled_by_default", 5, "bool"),
        Field("icon", 6, "string"),
        Field("entity_category", 7, "uint32"),
    )),
    "CameraImageResponse": (44, (
        _key(),
        Field("data", 2, "bytes"),
        Field("done", 3, "bool"),
    )),
    "CameraImageRequest": (45, (
        Field("single", 1, "bool"),
        Field("stream", 2, "bool"),
    )),
    # Climate
    "ListEntitiesClimateResponse": (46, (
        *_entity_base(),
        Field("supports_current_temperature", 5, "bool"),
        Field("supports_two_point_target_temperature", 6, "bool"),
        Field("supported_modes", 7, "uint32", repeated=True),
        Field("visual_min_temperature", 8, "float"),
        Field("visual_max_temperature", 9, "float"),
        Field("visual_target_temperature_step", 10, "float"),
        Field("supports_action", 12, "bool"),
        Field("supported_fan_modes", 13, "uint32", repeated=True),
        Field("supported_swing_modes", 14, "uint32", repeated=True),
        Field("supported_custom_fan_modes", 15, "string", repeated=True),
        Field("supported_presets", 16, "uint32", repeated=True),
        Field("supported_custom_presets", 17, "string", repeated=True),
        Field("disabled_by_default", 18, "bool"),
        Field("icon", 19, "string"),
        Field("entity_category", 20, "uint32"),
    )),
    "ClimateStateResponse": (47, (
        _key(),
        Field("mode", 2, "uint32"),
        Field("current_temperature", 3, "float"),
        Field("target_temperature", 4, "float"),
        Field("target_temperature_low", 5, "float"),
        Field("target_temperature_high", 6, "float"),
        Field("action", 8, "uint32"),
        Field("fan_mode", 9, "uint32"),
        Field("swing_mode", 10, "uint32"),
        Field("custom_fan_mode", 11, "string"),
        Field("preset", 12, "uint32"),
        Field("custom_preset", 13, "string"),
        Field("current_humidity", 14, "float"),
        Field("target_humidity", 15, "float"),
    )),
    "ClimateCommandRequest": (48, (
        _key(),
        Field("has_mode", 2, "bool"),
        Field("mode", 3, "uint32"),
        Field("has_target_temperature", 4, "bool"),
        Field("target_temperature", 5, "float"),
        Field("has_target_temperature_low", 6, "bool"),
        Field("target_temperature_low", 7, "float"),
        Field("has_target_temperature_high", 8, "bool"),
        Field("target_temperature_high", 9, "float"),
        Field("has_fan_mode", 12, "bool"),
        Field("fan_mode", 13, "uint32"),
        Field("has_swing_mode", 14, "bool"),
        Field("swing_mode", 15, "uint32"),
        Field("has_custom_fan_mode", 16, "bool"),
        Field("custom_fan_mode", 17, "string"),
        Field("has_preset", 18, "bool"),
        Field("preset", 19, "uint32"),
        Field("has_custom_preset", 20, "bool"),
        Field("custom_preset", 21, "string"),
        Field("has_target_humidity", 22, "bool"),
        Field("target_humidity", 23, "float"),
    )),
    # Number
    "ListEntitiesNumberResponse": (49, (
        *_entity_base(),
        Field("icon", 5, "string"),
        Field("min_value", 6, "float"),
        Field("max_value", 7, "float"),
        Field("step", 8, "float"),
        Field("disabled_by_default", 9, "bool"),
        Field("entity_category", 10, "uint32"),
        Field("unit_of_measurement", 11, "string"),
        Field("mode", 12, "uint32"),
        Field("device_class", 13, "string"),
    )),
    "NumberStateResponse": (50, (
        _key(),
        Field("state", 2, "float"),
        Field("missing_state", 3, "bool"),
    )),
    "NumberCommandRequest": (51, (_key(), Field("state", 2, "float"))),
    # Select
    "ListEntitiesSelectResponse": (52, (
        *_entity_base(),
        Field("icon", 5, "string"),
        Field("options", 6, "string", repeated=True),
        Field("disabled_by_default", 7, "bool"),
        Field("entity_category", 8, "uint32"),
    )),
    "SelectStateResponse": (53, (
        _key(),
        Field("state", 2, "string"),
        Field("missing_state", 3, "bool"),
    )),
    "SelectCommandRequest": (54, (_key(), Field("state", 2, "string"))),
    # Siren
    "ListEntitiesSirenResponse": (55, (
        *_entity_base(),
        Field("icon", 5, "string"),
        Field("disabled_by_default", 6, "bool"),
        Field("tones", 7, "string", repeated=True),
        Field("supports_duration", 8, "bool"),
        Field("supports_volume", 9, "bool"),
        Field("entity_category", 10, "uint32"),
    )),
    "SirenStateResponse": (56, (_key(), Field("state", 2, "bool"))),
    "SirenCommandRequest": (57, (
        _key(),
        Field("has_state", 2, "bool"),
        Field("state", 3, "bool"),
        Field("has_tone", 4, "bool"),
        Field("tone", 5, "string"),
        Field("has_duration", 6, "bool"),
        Field("duration", 7, "uint32"),
        Field("has_volume", 8, "bool"),
        Field("volume", 9, "float"),
    )),
    # Lock
    "ListEntitiesLockResponse": (58, (
        *_entity_base(),
        Field("icon", 5, "string"),
        Field("disabled_by_default", 6, "bool"),
        Field("entity_category", 7, "uint32"),
        Field("assumed_state", 8, "bool"),
        Field("supports_open", 9, "bool"),
        Field("requires_code", 10, "bool"),
        Field("code_format", 11, "string"),
    )),
    "LockStateResponse": (59, (_key(), Field("state", 2, "uint32"))),
    "LockCommandRequest": (60, (
        _key(),
        Field("command", 2, "uint32"),
        Field("has_code", 3, "bool"),
        Field("code", 4, "string"),
    )),
    # Button
    "ListEntitiesButtonResponse": (61, (
        *_entity_base(),
        Field("icon", 5, "string"),
        Field("disabled_by_default", 6, "bool"),
        Field("entity_category", 7, "uint32"),
        Field("device_class", 8, "string"),
    )),
    "ButtonCommandRequest": (62, (_key(),)),
    # Media player
    "ListEntitiesMediaPlayerResponse": (63, (
        *_entity_base(),
        Field("icon", 5, "string"),
        Field("disabled_by_default", 6, "bool"),
        Field("entity_category", 7, "uint32"),
        Field("supports_pause", 8, "bool"),
    )),
    "MediaPlayerStateResponse": (64, (
        _key(),
        Field("state", 2, "uint32"),
        Field("volume", 3, "float"),
        Field("muted", 4, "bool"),
    )),
    "MediaPlayerCommandRequest": (65, (
        _key(),
        Field("has_command", 2, "bool"),
        Field("command", 3, "uint32"),
        Field("has_volume", 4, "bool"),
        Field("volume", 5, "float"),
        Field("has_media_url", 6, "bool"),
        Field("media_url", 7, "string"),
        Field("has_announcement", 8, "bool"),
        Field("announcement", 9, "bool"),
    )),
    # Bluetooth proxy
    "SubscribeBluetoothLEAdvertisementsRequest": (66, (Field("flags", 1, "uint32"),)),
    "BluetoothServiceData": (None, (
        Field("uuid", 1, "string"),
        Field("legacy_data", 2, "uint32", repeated=True),
        Field("data", 3, "bytes"),
    )),
    "BluetoothLEAdvertisementResponse": (67, (
        Field("address", 1, "uint64"),
        Field("name", 2, "bytes"),
        Field("rssi", 3, "sint32"),
        Field("service_uuids", 4, "string", repeated=True),
        Field("service_data", 5, "BluetoothServiceData", repeated=True),
        Field("manufacturer_data", 6, "BluetoothServiceData", repeated=True),
        Field("address_type", 7, "uint32"),
    )),
    "BluetoothDeviceRequest": (68, (
        Field("address", 1, "uint64"),
        Field("request_type", 2, "uint32"),
        Field("has_address_type", 3, "bool"),
        Field("address_type", 4, "uint32"),
    )),
    "BluetoothDeviceConnectionResponse": (69, (
        Field("address", 1, "uint64"),
        Field("connected", 2, "bool"),
        Field("mtu", 3, "uint32"),
        Field("error", 4, "int32"),
    )),
    "BluetoothGATTGetServicesRequest": (70, (Field("address", 1, "uint64"),)),
    "BluetoothGATTDescriptor": (None, (
        Field("uuid", 1, "uint64", repeated=True),
        Field("handle", 2, "uint32"),
    )),
    "BluetoothGATTCharacteristic": (None, (
        Field("uuid", 1, "uint64", repeated=True),
        Field("handle", 2, "uint32"),
        Field("properties", 3, "uint32"),
        Field("descriptors", 4, "BluetoothGATTDescriptor", repeated=True),
    )),
    "BluetoothGATTService": (None, (
        Field("uuid", 1, "uint64", repeated=True),
        Field("handle", 2, "uint32"),
        Field("characteristics", 3, "BluetoothGATTCharacteristic", repeated=True),
    )),
    "BluetoothGATTGetServicesResponse": (71, (
        Field("address", 1, "uint64"),
        Field("services", 2, "BluetoothGATTService", repeated=True),
    )),
    "BluetoothGATTGetServicesDoneResponse": (72, (Field("address", 1, "uint64"),)),
    "BluetoothGATTReadRequest": (73, _address_handle()),
    "BluetoothGATTReadResponse": (74, (*_address_handle(), Field("data", 3, "bytes"))),
    "BluetoothGATTWriteRequest": (75, (
        *_address_handle(),
        Field("response", 3, "bool"),
        Field("data", 4, "bytes"),
    )),
    "BluetoothGATTReadDescriptorRequest": (76, _address_handle()),
    "BluetoothGATTWriteDescriptorRequest": (77, (*_address_handle(), Field("data", 3, "bytes"))),
    "BluetoothGATTNotifyRequest": (78, (*_address_handle(), Field("enable", 3, "bool"))),
    "BluetoothGATTNotifyDataResponse": (79, (*_address_handle(), Field("data", 3, "bytes"))),
    "SubscribeBluetoothConnectionsFreeRequest": (80, ()),
    "BluetoothConnectionsFreeResponse": (81, (
        Field("free", 1, "uint32"),
        Field("limit", 2, "uint32"),
    )),
    "BluetoothGATTErrorResponse": (82, (*_address_handle(), Field("error", 3, "int32"))),
    "BluetoothGATTWriteResponse": (83, _address_handle()),
    "BluetoothGATTNotifyResponse": (84, _address_handle()),
    "BluetoothDevicePairingResponse": (85, (
        Field("address", 1, "uint64"),
        Field("paired", 2, "bool"),
        Field("error", 3, "int32"),
    )),
    "BluetoothDeviceUnpairingResponse": (86, (
        Field("address", 1, "uint64"),
        Field("success", 2, "bool"),
        Field("error", 3, "int32"),
    )),
    "UnsubscribeBluetoothLEAdvertisementsRequest": (87, ()),
    "BluetoothDeviceClearCacheResponse": (88, (
        Field("address", 1, "uint64"),
        Field("success", 2, "bool"),
        Field("error", 3, "int32"),
    )),
    # Voice assistant
    "SubscribeVoiceAssistantRequest": (89, (
        Field("subscribe", 1, "bool"),
        Field("flags", 2, "uint32"),
    )),
    "VoiceAssistantAudioSettings": (None, (
        Field("noise_suppression_level", 1, "uint32"),
        Field("auto_gain", 2, "uint32"),
        Field("volume_multiplier", 3, "float"),
    )),
    "VoiceAssistantRequest": (90, (
        Field("start", 1, "bool"),
        Field("conversation_id", 2, "string"),
        Field("flags", 3, "uint32"),
        Field("audio_settings", 4, "VoiceAssistantAudioSettings"),
        Field("wake_word_phrase", 5, "string"),
    )),
    "VoiceAssistantResponse": (91, (
        Field("port", 1, "uint32"),
        Field("error", 2, "bool"),
    )),
    "VoiceAssistantEventData": (None, (
        Field("name", 1, "string"),
        Field("value", 2, "string"),
    )),
    "VoiceAssistantEventResponse": (92, (
        Field("event_type", 1, "uint32"),
        Field("data", 2, "VoiceAssistantEventData", repeated=True),
    )),
    "BluetoothLERawAdvertisement": (None, (
        Field("address", 1, "uint64"),
        Field("rssi", 2, "sint32"),
        Field("address_type", 3, "uint32"),
        Field("data", 4, "bytes"),
    )),
    "BluetoothLERawAdvertisementsResponse": (93, (
        Field("advertisements", 1, "BluetoothLERawAdvertisement", repeated=True),
    )),
    # Alarm control panel (decoded so listings stay quiet; no services)
    "ListEntitiesAlarmControlPanelResponse": (94, (
        *_entity_base(),
        Field("icon", 5, "string"),
        Field("disabled_by_default", 6, "bool"),
        Field("entity_category", 7, "uint32"),
        Field("supported_features", 8, "uint32"),
        Field("requires_code", 9, "bool"),
        Field("requires_code_to_arm", 10, "bool"),
    )),
    "AlarmControlPanelStateResponse": (95, (_key(), Field("state", 2, "uint32"))),
    # Text
    "ListEntitiesTextResponse": (97, (
        *_entity_base(),
        Field("icon", 5, "string"),
        Field("disabled_by_default", 6, "bool"),
        Field("entity_category", 7, "uint32"),
        Field("min_length", 8, "uint32"),
        Field("max_length", 9, "uint32"),
        Field("pattern", 10, "string"),
        Field("mode", 11, "uint32"),
    )),
    "TextStateResponse": (98, (
        _key(),
        Field("state", 2, "string"),
        Field("missing_state", 3, "bool"),
    )),
    "TextCommandRequest": (99, (_key(), Field("state", 2, "string"))),
    "VoiceAssistantAudio": (106, (
        Field("data", 1, "bytes"),
        Field("end", 2, "bool"),
    )),
}


def _build_file() -> descriptor_pb2.FileDescriptorProto:
    file_proto = descriptor_pb2.FileDescriptorProto(
        name="esphome_native_client/api.proto",
        package=_PACKAGE,
        syntax="proto3",
    )
    for type_name, (_, fields) in _CATALOG.items():
        message_proto = file_proto.message_type.add(name=type_name)
        for field in fields:
            field_proto = message_proto.field.add(
                name=field.name,
                number=field.number,
                label=(
                    descriptor_pb2.FieldDescriptorProto.LABEL_REPEATED
                    if field.repeated
                    else descriptor_pb2.FieldDescriptorProto.LABEL_OPTIONAL
                ),
            )
            if field.type in _SCALARS:
                field_proto.type = _SCALARS[field.type]
            else:
                field_proto.type = descriptor_pb2.FieldDescriptorProto.TYPE_MESSAGE
                field_proto.type_name = f".{_PACKAGE}.{field.type}"
    return file_proto


_POOL: Final = descriptor_pool.DescriptorPool()
_POOL.AddSerializedFile(_build_file().SerializeToString())

MESSAGE_TYPES: Final[dict[str, type[Message]]] = {
    type_name: message_factory.GetMessageClass(_POOL.FindMessageTypeByName(f"{_PACKAGE}.{type_name}"))
    for type_name in _CATALOG
}
ID_TO_TYPE: Final[dict[int, str]] = {
    type_id: type_name for type_name, (type_id, _) in _CATALOG.items() if type_id is not None
}
TYPE_TO_ID: Final[dict[str, int]] = {type_name: type_id for type_id, type_name in ID_TO_TYPE.items()}

# Response kinds collected by an entity listing, in catalog order.
LIST_ENTITIES_RESPONSE_TYPES: Final[tuple[str, ...]] = (
    "ListEntitiesBinarySensorResponse",
    "ListEntitiesCoverResponse",
    "ListEntitiesFanResponse",
    "ListEntitiesLightResponse",
    "ListEntitiesSensorResponse",
    "ListEntitiesSwitchResponse",
    "ListEntitiesTextSensorResponse",
    "ListEntitiesCameraResponse",
    "ListEntitiesClimateResponse",
    "ListEntitiesNumberResponse",
    "ListEntitiesSelectResponse",
    "ListEntitiesSirenResponse",
    "ListEntitiesLockResponse",
    "ListEntitiesButtonResponse",
    "ListEntitiesMediaPlayerResponse",
    "ListEntitiesTextResponse",
)


def message_class(type_name: str) -> type[Message]:
    """Return the message class registered under ``type_name``.

    Raises:
        KeyError: If the catalog has no such message

    """
    return MESSAGE_TYPES[type_name]


class LogLevel(IntEnum):
    """Device log levels accepted by SubscribeLogsRequest."""

    LOG_LEVEL_NONE = 0
    LOG_LEVEL_ERROR = 1
    LOG_LEVEL_WARN = 2
    LOG_LEVEL_INFO = 3
    LOG_LEVEL_CONFIG = 4
    LOG_LEVEL_DEBUG = 5
    LOG_LEVEL_VERBOSE = 6
    LOG_LEVEL_VERY_VERBOSE = 7


class EntityCategory(IntEnum):
    ENTITY_CATEGORY_NONE = 0
    ENTITY_CATEGORY_CONFIG = 1
    ENTITY_CATEGORY_DIAGNOSTIC = 2


class BluetoothDeviceRequestType(IntEnum):
    """Actions carried by BluetoothDeviceRequest."""

    BLUETOOTH_DEVICE_REQUEST_TYPE_CONNECT = 0
    BLUETOOTH_DEVICE_REQUEST_TYPE_DISCONNECT = 1
    BLUETOOTH_DEVICE_REQUEST_TYPE_PAIR = 2
    BLUETOOTH_DEVICE_REQUEST_TYPE_UNPAIR = 3
    BLUETOOTH_DEVICE_REQUEST_TYPE_CONNECT_V3_WITH_CACHE = 4
    BLUETOOTH_DEVICE_REQUEST_TYPE_CONNECT_V3_WITHOUT_CACHE = 5
    BLUETOOTH_DEVICE_REQUEST_TYPE_CLEAR_CACHE = 6


class VoiceAssistantSubscribeFlag(IntEnum):
    VOICE_ASSISTANT_SUBSCRIBE_NONE = 0
    VOICE_ASSISTANT_SUBSCRIBE_API_AUDIO = 1


class VoiceAssistantEventType(IntEnum):
    VOICE_ASSISTANT_ERROR = 0
    VOICE_ASSISTANT_RUN_START = 1
    VOICE_ASSISTANT_RUN_END = 2
    VOICE_ASSISTANT_STT_START = 3
    VOICE_ASSISTANT_STT_END = 4
    VOICE_ASSISTANT_INTENT_START = 5
    VOICE_ASSISTANT_INTENT_END = 6
    VOICE_ASSISTANT_TTS_START = 7
    VOICE_ASSISTANT_TTS_END = 8
    VOICE_ASSISTANT_WAKE_WORD_START = 9
    VOICE_ASSISTANT_WAKE_WORD_END = 10
    VOICE_ASSISTANT_STT_VAD_START = 11
    VOICE_ASSISTANT_STT_VAD_END = 12
    VOICE_ASSISTANT_TTS_STREAM_START = 98
    VOICE_ASSISTANT_TTS_STREAM_END = 99
