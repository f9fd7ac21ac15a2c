"""The `Serato Markers2` tag stores cues, loops, the track color and the BPM lock.

The payload is the version followed by base64 text (no `=` padding, wrapped
every 72 characters), a NUL terminator and NUL padding. Decoded, the text is
another version followed by named, length-prefixed entries::

    <name> \\0  u32 length  <data>

closed by an empty name. Entry kinds this module does not know are kept as
`UnknownEntry` and written back unchanged, so new kinds added by Serato
survive a round trip.
"""

from __future__ import annotations

import logging
import struct
from dataclasses import dataclass
from typing import ClassVar, Dict, Tuple, Type, Union

from ..errors import InvalidEncodingError, TrailingDataError, TruncatedInputError
from ..formats import FLACTag, ID3Tag, MP4Tag, OggTag, envelope
from ..models import Color, Version
from ..reader import ByteReader
from .base import Tag
from .markers import take_bool

logger = logging.getLogger(__name__)

MIN_PAYLOAD_SIZE = 470
LOOP_RESERVED = b"\xff\xff\xff\xff"


def _take_name(reader: ByteReader, what: str) -> str:
    start = reader.offset
    raw = reader.cstring(what)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidEncodingError(f"{what} is not valid UTF-8", start) from exc


@dataclass(frozen=True, slots=True)
class ColorEntry:
    NAME: ClassVar[str] = "COLOR"

    color: Color

    @classmethod
    def take(cls, reader: ByteReader) -> "ColorEntry":
        reader.expect(b"\x00", "color entry padding")
        return cls(Color.from_bytes(reader.take(3, "track color")))

    def dump_data(self) -> bytes:
        return b"\x00" + self.color.to_bytes()


@dataclass(frozen=True, slots=True)
class CueEntry:
    NAME: ClassVar[str] = "CUE"

    index: int
    position_millis: int
    color: Color
    name: str = ""

    @classmethod
    def take(cls, reader: ByteReader) -> "CueEntry":
        reader.expect(b"\x00", "cue padding")
        index = reader.u8("cue index")
        position = reader.be_u32("cue position")
        reader.expect(b"\x00", "cue padding")
        color = Color.from_bytes(reader.take(3, "cue color"))
        reader.expect(b"\x00\x00", "cue padding")
        name = _take_name(reader, "cue name")
        return cls(index, position, color, name)

    def dump_data(self) -> bytes:
        return b"".join(
            (
                struct.pack(">xBIx", self.index, self.position_millis),
                self.color.to_bytes(),
                b"\x00\x00",
                self.name.encode("utf-8") + b"\x00",
            )
        )


@dataclass(frozen=True, slots=True)
class LoopEntry:
    NAME: ClassVar[str] = "LOOP"

    index: int
    start_position_millis: int
    end_position_millis: int
    color: Color
    is_locked: bool
    name: str = ""

    @classmethod
    def take(cls, reader: ByteReader) -> "LoopEntry":
        reader.expect(b"\x00", "loop padding")
        index = reader.u8("loop index")
        start = reader.be_u32("loop start")
        end = reader.be_u32("loop end")
        reader.expect(LOOP_RESERVED, "reserved loop field")
        reader.expect(b"\x00", "loop padding")
        color = Color.from_bytes(reader.take(3, "loop color"))
        reader.expect(b"\x00", "loop padding")
        is_locked = take_bool(reader, "loop locked flag")
        name = _take_name(reader, "loop name")
        return cls(index, start, end, color, is_locked, name)

    def dump_data(self) -> bytes:
        return b"".join(
            (
                struct.pack(">xBII", self.index, self.start_position_millis, self.end_position_millis),
                LOOP_RESERVED,
                b"\x00" + self.color.to_bytes() + b"\x00",
                bytes((self.is_locked,)),
                self.name.encode("utf-8") + b"\x00",
            )
        )


@dataclass(frozen=True, slots=True)
class BpmLockEntry:
    NAME: ClassVar[str] = "BPMLOCK"

    enabled: bool

    @classmethod
    def take(cls, reader: ByteReader) -> "BpmLockEntry":
        return cls(take_bool(reader, "BPM lock flag"))

    def dump_data(self) -> bytes:
        return bytes((self.enabled,))


@dataclass(frozen=True, slots=True)
class UnknownEntry:
    """An entry kind without a dedicated model, e.g. `FLIP`."""

    name: str
    data: bytes

    @property
    def NAME(self) -> str:
        return self.name

    def dump_data(self) -> bytes:
        return self.data


Entry = Union[ColorEntry, CueEntry, LoopEntry, BpmLockEntry, UnknownEntry]

ENTRY_TYPES: Dict[str, Type] = {
    entry.NAME: entry for entry in (ColorEntry, CueEntry, LoopEntry, BpmLockEntry)
}


@dataclass(frozen=True)
class Markers2(Tag, ID3Tag, FLACTag, MP4Tag, OggTag):
    NAME = "Serato Markers2"
    FLAC_COMMENT = "SERATO_MARKERS_V2"
    MP4_ATOM = "----:com.serato.dj:markersv2"
    OGG_COMMENT = "serato_markers2"

    version: Version
    content_version: Version
    entries: Tuple[Entry, ...]

    @classmethod
    def take(cls, reader: ByteReader) -> "Markers2":
        version = Version.take(reader)
        text_start = reader.offset
        text = reader.rest()
        end = text.find(b"\x00")
        if end < 0:
            raise TruncatedInputError("Markers2 data is missing its NUL terminator", text_start)
        padding = text[end:]
        if padding.strip(b"\x00"):
            raise TrailingDataError("non-NUL bytes after Markers2 data", text_start + end)
        content = ByteReader(envelope.decode_base64(text[:end]))
        content_version = Version.take(content)
        entries = []
        while True:
            if content.at_end():
                raise TruncatedInputError("Markers2 entry list is missing its terminator", content.offset)
            entry_start = content.offset
            raw_name = content.cstring("entry name")
            if not raw_name:
                break
            try:
                name = raw_name.decode("ascii")
            except UnicodeDecodeError as exc:
                raise InvalidEncodingError(f"entry name {raw_name!r} is not ASCII", entry_start) from exc
            length = content.be_u32(f"{name} entry length")
            block = content.sub_reader(length, f"{name} entry")
            entry_cls = ENTRY_TYPES.get(name)
            if entry_cls is None:
                logger.debug("Keeping unknown Markers2 entry %s (%d bytes)", name, length)
                entries.append(UnknownEntry(name, block.rest()))
                continue
            entries.append(entry_cls.take(block))
            block.finish(f"{name} entry")
        if content.rest().strip(b"\x00"):
            raise TrailingDataError("non-NUL bytes after the last Markers2 entry", content.offset)
        return cls(version=version, content_version=content_version, entries=tuple(entries))

    def dump(self) -> bytes:
        parts = [self.content_version.dump()]
        for entry in self.entries:
            data = entry.dump_data()
            parts.append(entry.NAME.encode("ascii") + b"\x00" + struct.pack(">I", len(data)) + data)
        parts.append(b"\x00")
        payload = self.version.dump() + envelope.encode_base64(b"".join(parts), padding=False) + b"\x00"
        return payload.ljust(MIN_PAYLOAD_SIZE, b"\x00")

    def cues(self) -> list[CueEntry]:
        return [entry for entry in self.entries if isinstance(entry, CueEntry)]

    def loops(self) -> list[LoopEntry]:
        return [entry for entry in self.entries if isinstance(entry, LoopEntry)]

    @property
    def track_color(self) -> Color | None:
        for entry in self.entries:
            if isinstance(entry, ColorEntry):
                return entry.color
        return None

    @property
    def bpm_locked(self) -> bool:
        return any(isinstance(entry, BpmLockEntry) and entry.enabled for entry in self.entries)
