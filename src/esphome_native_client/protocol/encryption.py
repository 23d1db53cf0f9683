"""Pre-shared key handling for the Noise transport."""

from __future__ import annotations

import base64
import binascii

from esphome_native_client.protocol.exceptions import InvalidEncryptionKeyError

__all__ = ["NOISE_PROLOGUE", "PSK_LENGTH", "decode_encryption_key"]

NOISE_PROLOGUE = b"NoiseAPIInit\x00\x00"
PSK_LENGTH = 32


def decode_encryption_key(key: str | bytes) -> bytes:
    """Turn a configured pre-shared key into its 32 raw bytes.

    Args:
        key: Base64 text (as shown in device configuration) or raw bytes

    Raises:
        InvalidEncryptionKeyError: Not valid base64, or not 32 bytes long

    """
    if isinstance(key, str):
        try:
            raw = base64.b64decode(key, validate=True)
        except binascii.Error as e:
            raise InvalidEncryptionKeyError("encryption key is not valid base64") from e
    else:
        raw = bytes(key)
    if len(raw) != PSK_LENGTH:
        raise InvalidEncryptionKeyError(f"encryption key must be {PSK_LENGTH} bytes, got {len(raw)}")
    return raw
