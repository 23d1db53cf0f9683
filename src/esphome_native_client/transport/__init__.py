"""Transport and session layer.

Public API:
- ApiConnection: session state machine and service calls
- PlaintextFrameHelper / NoiseFrameHelper: socket transports
- EventEmitter: topic-based publish/subscribe
- Session exceptions
"""

from esphome_native_client.protocol.encryption import decode_encryption_key
from esphome_native_client.transport.connection import ApiConnection, ConnectionState
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

__all__ = [
    # Session
    "ApiConnection",
    "ConnectionState",
    # Transports
    "FrameHelper",
    "NoiseFrameHelper",
    "PlaintextFrameHelper",
    "decode_encryption_key",
    # Events
    "EventEmitter",
    # Types
    "BluetoothGATTServices",
    "ListedEntity",
    "PendingRequest",
    # Exceptions
    "AlreadyAwaitingError",
    "ApiConnectionError",
    "AutoReplyError",
    "ConnectionClosedError",
    "NotAuthorizedError",
    "RequestTimeoutError",
]
