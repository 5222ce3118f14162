import json
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from conftest import event_frame


def test_auth_payload_wire_format():
    from shared.codec import JsonCodec
    from shared.envelope import AuthPayload

    data = JsonCodec().encode(AuthPayload(token="abc123"))

    assert data == b'{"token":"abc123","action":"authenticate"}'


def test_auth_payload_action_is_constant():
    from shared.envelope import AuthPayload

    with pytest.raises(ValidationError):
        AuthPayload(token="abc123", action="logout")


def test_event_envelope_round_trip(ts):
    from models.events import EventDTO, EventStatus
    from shared.codec import JsonCodec
    from shared.envelope import Envelope, Meta

    codec = JsonCodec()
    event = EventDTO(
        id="evt-1",
        title="Launch",
        start_time=ts,
        end_time=ts.replace(hour=11),
        location="Cairo",
        event_status=EventStatus.PARTIALLY_FILLED,
    )
    envelope = Envelope[EventDTO](type="event", payload=event, meta=Meta(timestamp=ts))

    data = codec.encode(envelope)
    wire = json.loads(data)

    assert wire["payload"]["startTime"] == "2025-05-10T09:00:00Z"
    assert wire["payload"]["eventStatus"] == "partially_filled"
    assert codec.decode(data, Envelope[EventDTO]) == envelope


def test_decode_camel_case_frame():
    from models.events import EventDTO, EventStatus
    from shared.codec import JsonCodec
    from shared.envelope import Envelope

    envelope = JsonCodec().decode(event_frame("42", "cancelled"), Envelope[EventDTO])

    assert envelope.type == "event"
    assert envelope.payload.id == "42"
    assert envelope.payload.event_status is EventStatus.CANCELLED
    assert envelope.payload.start_time == datetime(2025, 5, 10, 9, 0, tzinfo=timezone.utc)


def test_meta_is_optional():
    from shared.codec import JsonCodec
    from shared.envelope import Envelope

    envelope = JsonCodec().decode(b'{"type":"ping","payload":{}}', Envelope[dict])

    assert envelope.meta is None
    assert envelope.timestamp is None


def test_unknown_status_fails_to_decode():
    from models.orders import OrderDTO
    from shared.codec import JsonCodec

    frame = {
        "id": "o-1", "title": "Buy", "startTime": "2025-05-10T09:00:00Z",
        "endTime": "2025-05-10T09:01:00Z", "location": "NYSE", "orderStatus": "expired",
    }
    with pytest.raises(ValidationError):
        JsonCodec().decode(json.dumps(frame).encode(), OrderDTO)


def test_envelope_is_immutable():
    from shared.envelope import create_envelope

    envelope = create_envelope("ping", {"n": 1})

    with pytest.raises(ValidationError):
        envelope.type = "pong"


def test_create_envelope_stamps_current_time(ts):
    from shared.envelope import create_envelope

    assert create_envelope("ping", {}).timestamp is not None
    assert create_envelope("ping", {}, timestamp=ts).timestamp == ts
    assert create_envelope("ping", {}, stamp=False).meta is None
