from __future__ import annotations
from functools import lru_cache
from typing import Any, Protocol, Type, TypeVar, Union

from pydantic import TypeAdapter

T = TypeVar("T")


class Codec(Protocol):
    """Structured encoder/decoder used by the client for every frame."""

    def encode(self, value: Any) -> bytes:
        ...

    def decode(self, data: bytes, as_type: Type[T]) -> T:
        ...


@lru_cache(maxsize=256)
def _adapter(tp: Any) -> TypeAdapter:
    return TypeAdapter(tp)


class JsonCodec:
    """
    Generic JSON codec built on pydantic TypeAdapter.

    Handles pydantic models (including parametrized generics such as
    Envelope[EventDTO]), dataclasses, enums and builtin containers. Output is
    compact UTF-8 JSON with fields in declaration order; datetimes are written
    and read as ISO-8601.
    """

    def __init__(self, by_alias: bool = True) -> None:
        self.by_alias = by_alias

    def encode(self, value: Any) -> bytes:
        return _adapter(type(value)).dump_json(value, by_alias=self.by_alias)

    def decode(self, data: Union[bytes, str], as_type: Type[T]) -> T:
        return _adapter(as_type).validate_json(data)
