from __future__ import annotations
from typing import Optional


class WebSocketError(Exception):
    """Base class for every failure the realtime client surfaces."""
    kind: str = "webSocketError"


class ConnectionFailedError(WebSocketError):
    """Raised when the transport did not reach the open state."""
    kind = "connectionFailed"

    def __init__(self, detail: Optional[str] = None) -> None:
        self.detail = detail
        super().__init__(detail or "WebSocket connection failed")


class DisconnectedError(WebSocketError):
    """Raised when an operation needs a live transport and there is none."""
    kind = "disconnected"

    def __init__(self, detail: Optional[str] = None) -> None:
        self.detail = detail
        super().__init__(detail or "WebSocket is not connected")


class InvalidMessageError(WebSocketError):
    """Raised for an unsupported frame kind or a mistyped simulated value."""
    kind = "invalidMessage"

    def __init__(self, detail: Optional[str] = None) -> None:
        self.detail = detail
        super().__init__(detail or "Invalid WebSocket message")


class DecodingFailedError(WebSocketError):
    """Raised when an inbound frame could not be decoded into the requested type."""
    kind = "decodingFailed"

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(f"Failed to decode message: {cause}")


class EncodingFailedError(WebSocketError):
    """Raised when an outbound value could not be encoded."""
    kind = "encodingFailed"

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(f"Failed to encode message: {cause}")


class ServerError(WebSocketError):
    """Raised when an outbound frame breaks a wire invariant, e.g. non-UTF-8 text."""
    kind = "serverError"

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(detail)
