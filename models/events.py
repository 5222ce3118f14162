from __future__ import annotations
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class EventStatus(str, Enum):
    SUBMITTED = "submitted"
    ROUTED = "routed"
    PARTIALLY_FILLED = "partially_filled"
    FILLED = "filled"
    CANCELLED = "cancelled"
    REJECTED = "rejected"


class EventDTO(BaseModel):
    """Event record as pushed by the server; wire keys are camelCase (startTime, eventStatus)."""
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: str
    title: str
    start_time: datetime
    end_time: datetime
    location: str
    event_status: EventStatus
