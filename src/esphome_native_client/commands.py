"""Per-entity-kind command requests.

Command payloads are plain mappings of field name to value. Fields that the
firmware guards with a presence flag (``has_state``, ``has_brightness``, ...)
get that flag set automatically whenever the field is supplied.

Example:
    message = build_command("Light", {"key": 0x1234, "state": True, "brightness": 0.5})
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Final

from google.protobuf.message import Message

from esphome_native_client.protocol.codec import create_message

__all__ = ["COMMAND_REQUEST_TYPES", "build_command"]

COMMAND_REQUEST_TYPES: Final[dict[str, str]] = {
    "Button": "ButtonCommandRequest",
    "Climate": "ClimateCommandRequest",
    "Cover": "CoverCommandRequest",
    "Fan": "FanCommandRequest",
    "Light": "LightCommandRequest",
    "Lock": "LockCommandRequest",
    "MediaPlayer": "MediaPlayerCommandRequest",
    "Number": "NumberCommandRequest",
    "Select": "SelectCommandRequest",
    "Siren": "SirenCommandRequest",
    "Switch": "SwitchCommandRequest",
    "Text": "TextCommandRequest",
}

# Fields whose presence flag is not simply ``has_<field>``
_GROUPED_PRESENCE: Final[dict[str, str]] = {
    "red": "has_rgb",
    "green": "has_rgb",
    "blue": "has_rgb",
    "legacy_command": "has_legacy_command",
}


def build_command(kind: str, data: Mapping[str, Any]) -> Message:
    """Build the command request for one entity.

    Args:
        kind: Component kind (e.g. "Light"), as reported by entity listing
        data: Field values; ``key`` is required, ``None`` values are skipped

    Raises:
        ValueError: Unknown kind, missing key, or a field the command does not have

    """
    type_name = COMMAND_REQUEST_TYPES.get(kind)
    if type_name is None:
        msg = f"Unknown entity kind for commands: {kind!r}"
        raise ValueError(msg)
    if data.get("key") is None:
        msg = f"{type_name} requires an entity key"
        raise ValueError(msg)

    message = create_message(type_name)
    fields = message.DESCRIPTOR.fields_by_name
    for name, value in data.items():
        if value is None:
            continue
        if name not in fields or name.startswith("has_"):
            msg = f"{type_name} has no field {name!r}"
            raise ValueError(msg)
        setattr(message, name, value)

        presence = _GROUPED_PRESENCE.get(name, f"has_{name}")
        if presence in fields:
            setattr(message, presence, True)
    return message
