from __future__ import annotations
from datetime import datetime, timezone
from typing import Generic, Literal, Optional, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class Meta(BaseModel):
    """Optional envelope metadata. Timestamps travel as ISO-8601 text."""
    model_config = ConfigDict(frozen=True)

    timestamp: Optional[datetime] = None


class Envelope(BaseModel, Generic[T]):
    """
    Generic wire envelope:
    {
    "type":    "STRING",
    "payload": { ... },
    "meta":    { "timestamp": "ISO-8601" } | null
    }

    'type' is a free-form tag agreed between sender and receiver; the client
    never validates it. The payload is decoded into whatever T the caller
    parametrizes the envelope with, e.g. Envelope[EventDTO].
    """
    model_config = ConfigDict(frozen=True)

    type: str
    payload: T
    meta: Optional[Meta] = None

    @property
    def timestamp(self) -> Optional[datetime]:
        return self.meta.timestamp if self.meta is not None else None


class AuthPayload(BaseModel):
    """Credential frame sent once after connecting: {"token": ..., "action": "authenticate"}"""
    model_config = ConfigDict(frozen=True)

    token: str
    action: Literal["authenticate"] = "authenticate"


def create_envelope(msg_type: str, payload: T, timestamp: Optional[datetime] = None,
                    stamp: bool = True) -> Envelope[T]:
    """Helper to create a new envelope with timestamp (now if not provided)"""
    if timestamp is None and stamp:
        timestamp = datetime.now(timezone.utc)
    meta = Meta(timestamp=timestamp) if timestamp is not None else None
    return Envelope[type(payload)](type=msg_type, payload=payload, meta=meta)
