import asyncio
import json
from datetime import datetime, timezone

import pytest
from websockets.exceptions import ConnectionClosedOK
from websockets.frames import Close
from websockets.protocol import State


def closed_ok() -> ConnectionClosedOK:
    return ConnectionClosedOK(Close(1000, ""), Close(1000, ""), True)


class DummyWebSocket:
    """In-memory transport. `frames` are returned by recv() in order; an
    exception in the list is raised instead. Once empty, recv() reports a
    normal close."""

    def __init__(self, frames=(), state: State = State.OPEN) -> None:
        self.frames = list(frames)
        self.state = state
        self.sent_messages: list[str] = []
        self.send_error: BaseException | None = None
        self.recv_calls = 0
        self.closed = False
        self.close_code: int | None = None
        self.close_reason: str | None = None

    async def send(self, data: str) -> None:
        if self.send_error is not None:
            raise self.send_error
        self.sent_messages.append(data)

    async def recv(self):
        self.recv_calls += 1
        await asyncio.sleep(0)
        if not self.frames:
            raise closed_ok()
        frame = self.frames.pop(0)
        if isinstance(frame, BaseException):
            raise frame
        return frame

    async def close(self, code: int = 1000, reason: str = "") -> None:
        self.closed = True
        self.state = State.CLOSED
        self.close_code = code
        self.close_reason = reason


class DummyConnector:
    """Stands in for websockets.connect; hands out the given transports in order."""

    def __init__(self, *websockets, error: BaseException | None = None) -> None:
        self.websockets = list(websockets)
        self.error = error
        self.calls: list[str] = []

    async def __call__(self, url: str, **kwargs):
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return self.websockets.pop(0)


def event_frame(event_id: str, status: str = "submitted", msg_type: str = "event") -> str:
    return json.dumps({
        "type": msg_type,
        "payload": {
            "id": event_id,
            "title": f"Event {event_id}",
            "startTime": "2025-05-10T09:00:00Z",
            "endTime": "2025-05-10T10:30:00Z",
            "location": "Dubai",
            "eventStatus": status,
        },
        "meta": {"timestamp": "2025-05-10T08:59:59Z"},
    }, separators=(",", ":"))


@pytest.fixture
def ts() -> datetime:
    return datetime(2025, 5, 10, 9, 0, tzinfo=timezone.utc)
