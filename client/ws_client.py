from __future__ import annotations
from pathlib import Path
from typing import Any, AsyncIterator, Awaitable, Callable, Dict, Optional, Type, TypeVar

import websockets
from websockets.exceptions import ConnectionClosed, ConnectionClosedOK
from websockets.frames import CloseCode

from client.contract import RealtimeClient, failed_stream
from client.environment import Environment, load_environment_overrides, resolve_url
from client.state import ConnectionState
from shared.codec import Codec, JsonCodec
from shared.envelope import AuthPayload
from shared.errors import (
    ConnectionFailedError,
    DecodingFailedError,
    DisconnectedError,
    EncodingFailedError,
    InvalidMessageError,
    ServerError,
)
from shared.log import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

Connector = Callable[..., Awaitable[Any]]


class WebSocketClient(RealtimeClient):
    """
    Client managing a single WebSocket connection.

    Handles the connection lifecycle, authentication, and typed send/receive
    through a pluggable codec. There is no reconnect logic: a new connection
    is opened only when the client is disconnected and an operation needs one.

    Use as an async context manager to guarantee the transport is released:

        async with WebSocketClient(Environment.QA) as client:
            await client.authenticate(token)
            async for update in client.receive(Envelope[EventDTO]):
                ...
    """

    def __init__(
        self,
        environment: Optional[Environment] = None,
        *,
        url: Optional[str] = None,
        codec: Optional[Codec] = None,
        connector: Optional[Connector] = None,
        connect_kwargs: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.environment = environment or Environment.default()
        self._url = url or self.environment.base_url
        self.codec: Codec = codec or JsonCodec()
        self._connector: Connector = connector or websockets.connect
        self._connect_kwargs: Dict[str, Any] = connect_kwargs or {}
        self._connection_state = ConnectionState.DISCONNECTED
        self._ws: Optional[Any] = None

    @property
    def url(self) -> str:
        return self._url

    @property
    def connection_state(self) -> ConnectionState:
        return self._connection_state

    @property
    def _websocket(self) -> Optional[Any]:
        return self._ws

    @_websocket.setter
    def _websocket(self, websocket: Optional[Any]) -> None:
        # Every assignment re-derives the connection state
        self._ws = websocket
        if websocket is None:
            self._connection_state = ConnectionState.DISCONNECTED
        else:
            self._connection_state = ConnectionState.from_transport(getattr(websocket, "state", None))

    async def _connect(self) -> None:
        """Open a new WebSocket, replacing any transport that has already closed"""
        logger.info("Connecting", extra={"url": self.url})
        self._connection_state = ConnectionState.CONNECTING
        websocket = None
        try:
            websocket = await self._connector(self.url, **self._connect_kwargs)
        except Exception as e:
            logger.warning("Connection failed: %s", e, extra={"url": self.url})
            raise ConnectionFailedError(str(e)) from e
        finally:
            if websocket is None:
                self._connection_state = ConnectionState.DISCONNECTED

        self._websocket = websocket

        if self._connection_state is not ConnectionState.CONNECTED:
            logger.warning("Transport not open after connect", extra={"url": self.url, "state": self._connection_state.value})
            raise ConnectionFailedError(f"transport is {self._connection_state.value} after connect")
        logger.info("Connected", extra={"url": self.url})

    async def connect_if_needed(self) -> None:
        """Connect only if the client is currently disconnected."""
        if self._connection_state is not ConnectionState.DISCONNECTED:
            return
        await self._connect()

    async def authenticate(self, token: str) -> None:
        """
        Connect if needed and send the authentication frame.

        No acknowledgement is read back from the server.
        """
        await self.connect_if_needed()
        await self.send(AuthPayload(token=token))

    async def send(self, value: Any) -> None:
        """
        Encode value and send it as a single text frame.

        Raises:
            DisconnectedError: no transport, or it closed during the write
            EncodingFailedError: the codec raised
            ServerError: the encoded bytes are not valid UTF-8
        """
        websocket = self._live_websocket()
        if websocket is None:
            raise DisconnectedError()

        try:
            data = self.codec.encode(value)
        except Exception as e:
            logger.warning("Failed to encode %s: %s", type(value).__name__, e)
            raise EncodingFailedError(e) from e

        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ServerError("Failed to encode message as UTF-8 string") from e

        try:
            await websocket.send(text)
        except ConnectionClosed as e:
            self._release(websocket)
            raise DisconnectedError(f"connection closed during send: {e}") from e
        logger.debug("Sent %s frame (%d bytes)", type(value).__name__, len(data))

    def receive(self, as_type: Type[T]) -> AsyncIterator[T]:
        """
        Stream inbound frames decoded as as_type.

        The stream reads from the transport that is live at call time, one
        frame per pull, and ends on the first error. A graceful close by the
        server ends it without error.
        """
        websocket = self._live_websocket()
        if websocket is None:
            return failed_stream(DisconnectedError())
        return self._receive_loop(websocket, as_type)

    async def _receive_loop(self, websocket: Any, as_type: Type[T]) -> AsyncIterator[T]:
        while True:
            try:
                message = await websocket.recv()
            except ConnectionClosedOK:
                logger.info("Connection closed by peer", extra={"url": self.url})
                self._release(websocket)
                return
            except ConnectionClosed as e:
                logger.warning("Connection lost: %s", e, extra={"url": self.url})
                self._release(websocket)
                raise DisconnectedError(f"connection lost: {e}") from e

            if isinstance(message, str):
                try:
                    data = message.encode("utf-8")
                except UnicodeEncodeError as e:
                    raise InvalidMessageError("text frame is not valid UTF-8") from e
            elif isinstance(message, (bytes, bytearray, memoryview)):
                data = bytes(message)
            else:
                raise InvalidMessageError(f"unsupported frame type {type(message).__name__}")

            try:
                decoded = self.codec.decode(data, as_type)
            except Exception as e:
                logger.warning("Failed to decode inbound frame: %s", e)
                raise DecodingFailedError(e) from e

            yield decoded

    def _live_websocket(self) -> Optional[Any]:
        # A transport left assigned in the disconnected state is stale
        if self._connection_state is ConnectionState.DISCONNECTED:
            return None
        return self._websocket

    def _release(self, websocket: Any) -> None:
        # Only forget the transport if it is still the current one
        if self._websocket is websocket:
            self._websocket = None

    async def disconnect(self) -> None:
        """Close the WebSocket (going away, no reason) and forget it."""
        websocket = self._websocket
        self._websocket = None
        if websocket is None:
            return
        await websocket.close(code=CloseCode.GOING_AWAY, reason="")
        logger.info("Disconnected", extra={"url": self.url})


def default_client(config_path: Optional[Path] = None) -> WebSocketClient:
    """
    Build a client for the default environment, honouring URL overrides
    from the environments YAML file.
    """
    environment = Environment.default()
    overrides = load_environment_overrides(config_path)
    return WebSocketClient(environment, url=resolve_url(environment, overrides))
