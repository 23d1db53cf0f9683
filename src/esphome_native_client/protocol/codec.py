"""Message codec: typed protobuf messages to and from (type id, payload) pairs."""

from __future__ import annotations

import logging
from typing import Any

from google.protobuf import json_format
from google.protobuf.message import DecodeError, Message

from esphome_native_client.protocol.exceptions import MessageParseError, UnknownMessageTypeError
from esphome_native_client.protocol.messages import ID_TO_TYPE, TYPE_TO_ID, message_class

logger = logging.getLogger(__name__)

__all__ = [
    "MessageCodec",
    "create_message",
    "message_to_dict",
    "message_type_name",
]


def message_type_name(message: Message) -> str:
    """Return the catalog name of a message instance (e.g. ``"PingRequest"``)."""
    return message.DESCRIPTOR.name


def create_message(type_name: str, **fields: Any) -> Message:
    """Instantiate a catalog message by name.

    Raises:
        KeyError: Unknown message type name
        ValueError, TypeError: Field values rejected by protobuf

    """
    return message_class(type_name)(**fields)


def message_to_dict(message: Message) -> dict[str, Any]:
    """Convert a message to a plain dict, keeping proto field names and defaults."""
    return json_format.MessageToDict(
        message,
        preserving_proto_field_name=True,
        always_print_fields_with_no_presence=True,
    )


class MessageCodec:
    """Encode and decode catalog messages.

    Stateless; one instance is shared by every frame helper.
    """

    def encode(self, message: Message) -> tuple[int, bytes]:
        """Serialize a message and look up its wire type id.

        Raises:
            ValueError: The message has no wire id (nested-only type)

        """
        type_name = message_type_name(message)
        type_id = TYPE_TO_ID.get(type_name)
        if type_id is None:
            msg = f"{type_name} cannot be sent as a top-level message"
            raise ValueError(msg)
        return type_id, message.SerializeToString()

    def decode(self, type_id: int, payload: bytes) -> Message:
        """Decode a payload into the message registered under ``type_id``.

        Raises:
            UnknownMessageTypeError: ``type_id`` is not in the catalog
            MessageParseError: ``type_id`` is known but the payload is malformed

        """
        type_name = ID_TO_TYPE.get(type_id)
        if type_name is None:
            raise UnknownMessageTypeError(type_id, payload)

        message = message_class(type_name)()
        try:
            message.ParseFromString(payload)
        except DecodeError as e:
            logger.debug(
                "Payload for %s does not parse: %s",
                type_name,
                e,
                extra={"message_type": type_id, "payload_len": len(payload)},
            )
            raise MessageParseError(type_id, type_name, payload) from e
        return message

    def is_known(self, type_id: int) -> bool:
        return type_id in ID_TO_TYPE
