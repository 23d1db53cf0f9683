"""Native API protocol package - message catalog, codec and stream framing.

Public API:
- Message catalog (MESSAGE_TYPES, ID_TO_TYPE, TYPE_TO_ID) and protocol enums
- Codec (MessageCodec, create_message, message_to_dict, message_type_name)
- Framers for the plaintext and Noise transports
"""

from esphome_native_client.protocol.codec import (
    MessageCodec,
    create_message,
    message_to_dict,
    message_type_name,
)
from esphome_native_client.protocol.framing import NoiseFramer, PlaintextFramer, encode_varint
from esphome_native_client.protocol.messages import (
    ID_TO_TYPE,
    LIST_ENTITIES_RESPONSE_TYPES,
    MESSAGE_TYPES,
    TYPE_TO_ID,
    BluetoothDeviceRequestType,
    EntityCategory,
    LogLevel,
    VoiceAssistantEventType,
    VoiceAssistantSubscribeFlag,
)

__all__ = [
    # Codec
    "MessageCodec",
    "create_message",
    "message_to_dict",
    "message_type_name",
    # Framing
    "NoiseFramer",
    "PlaintextFramer",
    "encode_varint",
    # Catalog
    "ID_TO_TYPE",
    "LIST_ENTITIES_RESPONSE_TYPES",
    "MESSAGE_TYPES",
    "TYPE_TO_ID",
    # Enums
    "BluetoothDeviceRequestType",
    "EntityCategory",
    "LogLevel",
    "VoiceAssistantEventType",
    "VoiceAssistantSubscribeFlag",
]
