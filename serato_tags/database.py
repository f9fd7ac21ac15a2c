"""Parser for Serato's library catalog (`_Serato_/database V2`) and crate files.

Both are a flat stream of fields::

    4 ASCII bytes name   u32 length   <length bytes>

The first letter of the name selects the value type: `o` and `r` hold
nested fields, `t` and `p` UTF-16-BE text, `u` a u32, `s` a u16 and `b` a
boolean byte. `vrsn` holds text. Anything else is kept as raw bytes.
"""

from __future__ import annotations

import logging
import struct
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

from .errors import InvalidDiscriminantError, InvalidEncodingError
from .reader import ByteReader

logger = logging.getLogger(__name__)

Value = Union[str, int, bool, bytes, Tuple["Field", ...]]


@dataclass(frozen=True, slots=True)
class Field:
    name: str
    value: Value

    @property
    def kind(self) -> str:
        return field_kind(self.name)

    def get(self, name: str) -> Optional["Field"]:
        if not isinstance(self.value, tuple):
            return None
        for child in self.value:
            if child.name == name:
                return child
        return None

    def dump(self) -> bytes:
        data = _dump_value(self.kind, self.value)
        return self.name.encode("ascii") + struct.pack(">I", len(data)) + data

    def to_record(self) -> object:
        if isinstance(self.value, tuple):
            return {"name": self.name, "fields": [child.to_record() for child in self.value]}
        if isinstance(self.value, bytes):
            return {"name": self.name, "value": self.value.hex()}
        return {"name": self.name, "value": self.value}


@dataclass(frozen=True)
class Database:
    fields: Tuple[Field, ...]

    @property
    def version(self) -> Optional[str]:
        for item in self.fields:
            if item.name == "vrsn":
                return item.value
        return None

    def tracks(self) -> Iterator[Field]:
        return (item for item in self.fields if item.name == "otrk")

    def track_paths(self) -> List[str]:
        paths = []
        for track in self.tracks():
            path = track.get("pfil")
            if path is not None:
                paths.append(path.value)
        return paths

    def dump(self) -> bytes:
        return b"".join(item.dump() for item in self.fields)

    def to_record(self) -> dict:
        return {"version": self.version, "fields": [item.to_record() for item in self.fields]}


def field_kind(name: str) -> str:
    if name == "vrsn":
        return "t"
    return name[:1]


def parse(data: bytes) -> Database:
    fields = tuple(_take_fields(ByteReader(data)))
    logger.debug("Parsed %d top-level database fields", len(fields))
    return Database(fields)


def parse_file(path: Path) -> Database:
    return parse(Path(path).read_bytes())


def _take_fields(reader: ByteReader) -> Iterator[Field]:
    while not reader.at_end():
        start = reader.offset
        raw_name = reader.take(4, "field name")
        try:
            name = raw_name.decode("ascii")
        except UnicodeDecodeError as exc:
            raise InvalidEncodingError(f"field name {raw_name!r} is not ASCII", start) from exc
        length = reader.be_u32(f"{name} length")
        block = reader.sub_reader(length, f"{name} value")
        value = _take_value(field_kind(name), name, block)
        block.finish(f"{name} value")
        yield Field(name, value)


def _take_value(kind: str, name: str, reader: ByteReader) -> Value:
    start = reader.offset
    match kind:
        case "o" | "r":
            return tuple(_take_fields(reader))
        case "t" | "p":
            raw = reader.rest()
            try:
                return raw.decode("utf-16-be")
            except UnicodeDecodeError as exc:
                raise InvalidEncodingError(f"{name} is not valid UTF-16-BE text", start) from exc
        case "u":
            return reader.be_u32(name)
        case "s":
            return reader.be_u16(name)
        case "b":
            value = reader.u8(name)
            if value not in (0, 1):
                raise InvalidDiscriminantError(f"{name} must be 0x00 or 0x01, got 0x{value:02x}", start)
            return bool(value)
        case _:
            return reader.rest()


def _dump_value(kind: str, value: Value) -> bytes:
    match kind:
        case "o" | "r":
            return b"".join(child.dump() for child in value)
        case "t" | "p":
            return value.encode("utf-16-be")
        case "u":
            return struct.pack(">I", value)
        case "s":
            return struct.pack(">H", value)
        case "b":
            return bytes((bool(value),))
        case _:
            return bytes(value)


__all__ = ["Database", "Field", "field_kind", "parse", "parse_file"]
