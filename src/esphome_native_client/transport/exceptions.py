"""Exception types for session state and request correlation errors."""

from __future__ import annotations

from esphome_native_client.protocol.exceptions import ApiError


class ApiConnectionError(ApiError):
    """Connection state error (not connected, already connected, etc.).

    Raised synchronously before any I/O takes place.

    Attributes:
        reason: Specific failure reason
        state: Session state when error occurred

    """

    def __init__(self, reason: str, state: str = "unknown") -> None:
        self.reason: str = reason
        self.state: str = state
        super().__init__(f"{reason} (state: {state})")


class NotAuthorizedError(ApiConnectionError):
    """Operation requires an authorized session."""

    def __init__(self, state: str = "unknown") -> None:
        super().__init__("Not authorized", state=state)


class ConnectionClosedError(ApiError):
    """A pending request was aborted because the transport went away.

    Attributes:
        response_type: Reply type the request was waiting for

    """

    def __init__(self, response_type: str) -> None:
        self.response_type: str = response_type
        super().__init__(f"Connection closed while waiting for {response_type}")


class RequestTimeoutError(ApiError):
    """Correlated reply not received within the timeout.

    Attributes:
        response_type: Reply type that never arrived
        timeout_seconds: Timeout value that was exceeded
        correlation_id: Correlation ID of the exchange

    """

    def __init__(self, response_type: str, timeout_seconds: float, correlation_id: str = "") -> None:
        self.response_type: str = response_type
        self.timeout_seconds: float = timeout_seconds
        self.correlation_id: str = correlation_id
        super().__init__(f"Timeout waiting for {response_type} after {timeout_seconds}s")


class AlreadyAwaitingError(ApiError):
    """A request for the same reply type is already outstanding."""

    def __init__(self, response_type: str) -> None:
        self.response_type: str = response_type
        super().__init__(f"Already awaiting {response_type}")


class AutoReplyError(ApiError):
    """Failed to answer a remote-initiated request.

    Attributes:
        request_type: Inbound request that was being answered

    """

    def __init__(self, request_type: str, cause: BaseException) -> None:
        self.request_type: str = request_type
        super().__init__(f"Failed respond to {request_type}. Reason: {cause}")
