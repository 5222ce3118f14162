from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, AsyncIterator, Type, TypeVar

T = TypeVar("T")


class RealtimeClient(ABC):
    """
    Capability surface shared by the real WebSocket client and the mock.

    Implementations hold at most one live transport, follow the
    disconnected/connecting/connected/failed state machine and raise only
    the errors defined in shared.errors.
    """

    @abstractmethod
    async def authenticate(self, token: str) -> None:
        """Connect if needed, then send the authentication frame"""
        ...

    @abstractmethod
    async def send(self, value: Any) -> None:
        """Encode value and send it as a single frame"""
        ...

    @abstractmethod
    def receive(self, as_type: Type[T]) -> AsyncIterator[T]:
        """Return a lazy stream of inbound frames decoded as as_type"""
        ...

    @abstractmethod
    async def disconnect(self) -> None:
        """Close the transport. Safe to call repeatedly."""
        ...

    async def __aenter__(self) -> "RealtimeClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.disconnect()


async def failed_stream(error: Exception) -> AsyncIterator[Any]:
    """A stream whose only event is `error`."""
    raise error
    yield  # pragma: no cover
