"""Validated connection settings."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from esphome_native_client.const import (
    DEFAULT_CLIENT_INFO,
    DEFAULT_HANDSHAKE_TIMEOUT,
    DEFAULT_PING_ATTEMPTS,
    DEFAULT_PING_INTERVAL,
    DEFAULT_PORT,
    DEFAULT_RECONNECT_INTERVAL,
)
from esphome_native_client.protocol.encryption import decode_encryption_key

logger = logging.getLogger(__name__)

__all__ = ["ConnectionOptions", "load_connection_options"]


class ConnectionOptions(BaseModel):
    """Settings for one device connection.

    Supplying ``encryption_key`` selects the Noise transport; without it the
    connection is plaintext and ``password`` (possibly empty) is sent during
    authorization.

    Example:
        options = ConnectionOptions(host="10.0.0.20", encryption_key="...base64...")
    """

    model_config = ConfigDict(frozen=True)

    host: str = Field(min_length=1)
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    client_info: str = DEFAULT_CLIENT_INFO
    password: str = ""
    encryption_key: str | bytes | None = None
    expected_server_name: str | None = None
    reconnect: bool = True
    reconnect_interval: float = Field(default=DEFAULT_RECONNECT_INTERVAL, gt=0)
    ping_interval: float = Field(default=DEFAULT_PING_INTERVAL, gt=0)
    ping_attempts: int = Field(default=DEFAULT_PING_ATTEMPTS, ge=1)
    handshake_timeout: float = Field(default=DEFAULT_HANDSHAKE_TIMEOUT, gt=0)

    @field_validator("encryption_key")
    @classmethod
    def _check_encryption_key(cls, value: str | bytes | None) -> str | bytes | None:
        if value is None or value == "":
            return None
        _ = decode_encryption_key(value)
        return value

    @property
    def uses_encryption(self) -> bool:
        return self.encryption_key is not None

    @property
    def device(self) -> str:
        """``host:port`` label used in logs and metrics."""
        return f"{self.host}:{self.port}"


def load_connection_options(config_file: Path) -> ConnectionOptions:
    """Read connection settings from a YAML file.

    The file holds one mapping of option names to values, either at the top
    level or under a ``connection`` key.

    Raises:
        OSError: The file cannot be read
        yaml.YAMLError: The file is not valid YAML
        pydantic.ValidationError: The settings are invalid

    """
    logger.debug("Parsing connection config: %s", config_file, extra={"config_file": str(config_file)})
    try:
        with config_file.open() as f:
            config_data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError):
        logger.exception("Failed to parse connection config: %s", config_file)
        raise

    if isinstance(config_data, dict) and isinstance(config_data.get("connection"), dict):
        config_data = config_data["connection"]
    if not isinstance(config_data, dict):
        msg = f"{config_file} does not contain a mapping of connection options"
        raise TypeError(msg)
    return ConnectionOptions.model_validate(config_data)
