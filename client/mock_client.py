from __future__ import annotations
import asyncio
from typing import Any, AsyncIterator, List, Sequence, Type, TypeVar, get_origin

from client.contract import RealtimeClient, failed_stream
from client.state import ConnectionState
from shared.envelope import AuthPayload
from shared.errors import DisconnectedError, InvalidMessageError
from shared.log import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class MockWebSocketClient(RealtimeClient):
    """
    Offline stand-in for WebSocketClient, for previews and tests.

    Nothing touches the network: authenticate flips a connected flag, send
    only records and logs the value, and receive replays the canned updates
    with `delay` seconds before each one.
    """

    def __init__(self, mock_updates: Sequence[Any] = (), delay: float = 1.0) -> None:
        self.mock_updates: List[Any] = list(mock_updates)
        self.delay = delay
        self.sent: List[Any] = []
        self._is_connected = False

    @property
    def connection_state(self) -> ConnectionState:
        return ConnectionState.CONNECTED if self._is_connected else ConnectionState.DISCONNECTED

    def _connect(self) -> None:
        self._is_connected = True

    async def authenticate(self, token: str) -> None:
        self._connect()
        if not self._is_connected:
            raise DisconnectedError()

        auth = AuthPayload(token=token)
        logger.info("Mock authenticate with token: %s", _mask(auth.token))
        await asyncio.sleep(self.delay)

    async def send(self, value: Any) -> None:
        self.sent.append(value)
        logger.debug("Mock send: %r", value)

    def receive(self, as_type: Type[T]) -> AsyncIterator[T]:
        if not self._is_connected:
            return failed_stream(DisconnectedError())
        return self._replay(list(self.mock_updates), as_type)

    async def _replay(self, updates: List[Any], as_type: Type[T]) -> AsyncIterator[T]:
        check = get_origin(as_type) or as_type
        for update in updates:
            await asyncio.sleep(self.delay)
            if not isinstance(update, check):
                raise InvalidMessageError(f"expected {as_type!r}, got {type(update).__name__}")
            yield update

    async def disconnect(self) -> None:
        self._is_connected = False


def _mask(token: str) -> str:
    return token[:4] + "..." if len(token) > 4 else "***"

