"""Asyncio client for the ESPHome native API."""

__version__ = "0.4.0"

from esphome_native_client.client import (  # noqa: E402
    ApiClient,
    EntityExistsError,
    EntityNotFoundError,
    EntityRecord,
)
from esphome_native_client.options import ConnectionOptions, load_connection_options  # noqa: E402
from esphome_native_client.protocol.exceptions import (  # noqa: E402
    ApiError,
    BadServerNameError,
    FrameDecodeError,
    FramingError,
    HandshakeError,
    InvalidEncryptionKeyError,
    InvalidPasswordError,
    MessageParseError,
    ProtocolError,
    RequiresEncryptionError,
    UnknownMessageTypeError,
)
from esphome_native_client.transport.connection import ApiConnection, ConnectionState  # noqa: E402
from esphome_native_client.transport.exceptions import (  # noqa: E402
    AlreadyAwaitingError,
    ApiConnectionError,
    AutoReplyError,
    ConnectionClosedError,
    NotAuthorizedError,
    RequestTimeoutError,
)
from esphome_native_client.transport.types import ListedEntity  # noqa: E402

__all__ = [
    "AlreadyAwaitingError",
    "ApiClient",
    "ApiConnection",
    "ApiConnectionError",
    "ApiError",
    "AutoReplyError",
    "BadServerNameError",
    "ConnectionClosedError",
    "ConnectionOptions",
    "ConnectionState",
    "EntityExistsError",
    "EntityNotFoundError",
    "EntityRecord",
    "FrameDecodeError",
    "FramingError",
    "HandshakeError",
    "InvalidEncryptionKeyError",
    "InvalidPasswordError",
    "ListedEntity",
    "MessageParseError",
    "NotAuthorizedError",
    "ProtocolError",
    "RequestTimeoutError",
    "RequiresEncryptionError",
    "UnknownMessageTypeError",
    "__version__",
    "load_connection_options",
]
