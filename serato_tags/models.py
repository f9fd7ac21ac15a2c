from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum

from .reader import ByteReader


@dataclass(frozen=True, slots=True)
class Version:
    """The `(major, minor)` header that opens every tag payload."""

    major: int
    minor: int

    @classmethod
    def take(cls, reader: ByteReader) -> "Version":
        data = reader.take(2, "version")
        return cls(data[0], data[1])

    def dump(self) -> bytes:
        return bytes((self.major, self.minor))

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}"


@dataclass(frozen=True, slots=True)
class Color:
    r: int
    g: int
    b: int

    @classmethod
    def from_bytes(cls, data: bytes) -> "Color":
        return cls(data[0], data[1], data[2])

    @classmethod
    def from_int(cls, value: int) -> "Color":
        return cls((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)

    def to_bytes(self) -> bytes:
        return bytes((self.r, self.g, self.b))

    def to_int(self) -> int:
        return (self.r << 16) | (self.g << 8) | self.b

    def __str__(self) -> str:
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"


def serialize(value: object) -> object:
    """Turn decoded values into something `json.dumps` accepts."""
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).hex()
    if isinstance(value, Color):
        return str(value)
    if isinstance(value, Version):
        return {"major": value.major, "minor": value.minor}
    if isinstance(value, Enum):
        return value.name
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        record = {"type": type(value).__name__}
        for item in dataclasses.fields(value):
            record[item.name] = serialize(getattr(value, item.name))
        return record
    if isinstance(value, (list, tuple)):
        return [serialize(item) for item in value]
    if isinstance(value, dict):
        return {str(k): serialize(v) for k, v in value.items()}
    return value
