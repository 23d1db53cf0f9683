"""Dataclasses shared by the session layer and its callers."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

from google.protobuf.message import Message


@dataclass
class PendingRequest:
    """Tracks one request awaiting its correlated reply.

    Attributes:
        response_type: Reply message type name being awaited
        future: Resolved with the reply, or failed on timeout/teardown
        correlation_id: Correlation ID of the exchange (for logs)
        sent_at: time.perf_counter() when the request was written

    """

    response_type: str
    future: asyncio.Future[Message]
    correlation_id: str
    sent_at: float


@dataclass(frozen=True)
class ListedEntity:
    """One entity reported during entity listing.

    Attributes:
        component: Kind label taken from the response type name
            (``ListEntitiesLightResponse`` gives ``"Light"``)
        entity: The listing response message

    """

    component: str
    entity: Message


@dataclass
class BluetoothGATTServices:
    """GATT services reported for one Bluetooth device address."""

    address: int
    services: list[Message] = field(default_factory=list)
