from __future__ import annotations

from enum import Enum
from typing import Any

from websockets.protocol import State


class ConnectionState(str, Enum):
    """Health of the client's single connection."""

    CONNECTED = "connected"
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    FAILED = "failed"

    @classmethod
    def from_transport(cls, state: Any) -> ConnectionState:
        """Map a websockets protocol state onto a ConnectionState."""
        if state is State.OPEN:
            return cls.CONNECTED
        if state is State.CONNECTING:
            return cls.CONNECTING
        if state in (State.CLOSING, State.CLOSED):
            return cls.DISCONNECTED
        return cls.FAILED
