"""
Unit tests for commands module.

Tests entity command request construction and presence flags.
"""

import pytest

from esphome_native_client.commands import COMMAND_REQUEST_TYPES, build_command
from esphome_native_client.protocol.codec import message_type_name
from esphome_native_client.protocol.messages import TYPE_TO_ID


class TestBuildCommand:
    """Tests for build_command"""

    def test_every_kind_has_a_wire_type(self):
        """Test each supported kind maps to a sendable request"""
        for type_name in COMMAND_REQUEST_TYPES.values():
            assert type_name in TYPE_TO_ID

    def test_light_presence_flags(self):
        """Test supplied fields set their has_ flags"""
        message = build_command("Light", {"key": 0x1234, "state": True, "brightness": 0.5})

        assert message_type_name(message) == "LightCommandRequest"
        assert message.key == 0x1234
        assert message.has_state
        assert message.state
        assert message.has_brightness
        assert not message.has_rgb
        assert not message.has_effect

    def test_rgb_shares_one_flag(self):
        """Test colour channels set the grouped has_rgb flag"""
        message = build_command("Light", {"key": 1, "red": 1.0, "green": 0.0, "blue": 0.5})

        assert message.has_rgb
        assert message.red == 1.0

    def test_none_values_are_skipped(self):
        """Test None leaves a field and its flag unset"""
        message = build_command("Light", {"key": 1, "state": None, "brightness": 0.25})

        assert not message.has_state
        assert message.has_brightness

    def test_cover_legacy_command(self):
        """Test cover fields with their own flags"""
        message = build_command("Cover", {"key": 2, "legacy_command": 1, "tilt": 0.5, "stop": True})

        assert message.has_legacy_command
        assert message.has_tilt
        assert message.stop

    def test_button_needs_only_key(self):
        """Test a button press carries just the key"""
        message = build_command("Button", {"key": 9})
        assert message.SerializeToString() == b"\x0d\x09\x00\x00\x00"

    def test_unknown_kind(self):
        """Test unsupported kinds are rejected"""
        with pytest.raises(ValueError, match="Unknown entity kind"):
            _ = build_command("Teapot", {"key": 1})

    @pytest.mark.parametrize("data", [{}, {"key": None}, {"state": True}])
    def test_missing_key(self, data: dict[str, object]):
        """Test a command without an entity key is rejected"""
        with pytest.raises(ValueError, match="requires an entity key"):
            _ = build_command("Switch", data)

    def test_unknown_field(self):
        """Test fields the request does not declare are rejected"""
        with pytest.raises(ValueError, match="has no field 'colour'"):
            _ = build_command("Light", {"key": 1, "colour": "red"})

    def test_presence_flags_cannot_be_set_directly(self):
        """Test has_ fields are managed by the builder"""
        with pytest.raises(ValueError, match="has no field 'has_state'"):
            _ = build_command("Light", {"key": 1, "has_state": True})
