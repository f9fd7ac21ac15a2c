"""The `Serato Markers_` tag stores the first 5 cues, 9 loops and the track color.

This overlaps with `Serato Markers2`. When a track carries both, callers
should treat `Serato Markers2` as authoritative; this module does not merge
the two.

Layout after the version::

    u32 count
    count x entry:
        position   start   (1 discriminant byte + 4 bytes)
        position   end
        6 bytes    00 7f 7f 7f 7f 7f
        4 bytes    Serato32 color
        1 byte     entry type
        1 byte     locked flag
    4 bytes        Serato32 track color

A position is `00` followed by a Serato32 value, or `7f` followed by
`7f 7f 7f 7f` when unset.

MP4 files store a different layout inside the usual base64 envelope. It
uses plain integers and colors instead of Serato32::

    u32 count
    count x entry:
        u32        start (ff ff ff ff when unset)
        u32        end
        6 bytes    00 ff ff ff ff 00
        3 bytes    RGB color
        1 byte     entry type
        1 byte     locked flag
    00, 3 bytes RGB track color, 00
"""

from __future__ import annotations

import logging
import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Tuple

from .. import serato32
from ..errors import InvalidDiscriminantError
from ..formats import ID3Tag, MP4Tag, envelope
from ..models import Color, Version
from ..reader import ByteReader
from .base import Tag

logger = logging.getLogger(__name__)

POSITION_SET = 0x00
POSITION_UNSET = 0x7F
NO_POSITION = b"\x7f\x7f\x7f\x7f"
RESERVED = b"\x00\x7f\x7f\x7f\x7f\x7f"
ENTRY_SIZE = 22

MP4_NO_POSITION = 0xFFFFFFFF
MP4_RESERVED = b"\x00\xff\xff\xff\xff\x00"
MP4_ENTRY_SIZE = 19


class EntryType(IntEnum):
    INVALID = 0x00
    CUE = 0x01
    LOOP = 0x03


@dataclass(frozen=True, slots=True)
class Marker:
    start_position_millis: Optional[int]
    end_position_millis: Optional[int]
    color: Color
    entry_type: EntryType
    # Only meaningful for loops; not checked for cues.
    is_locked: bool

    @classmethod
    def take(cls, reader: ByteReader) -> "Marker":
        start = take_position(reader, "start position")
        end = take_position(reader, "end position")
        reader.expect(RESERVED, "reserved marker field")
        color = serato32.take_color(reader, "marker color")
        entry_type = take_entry_type(reader)
        is_locked = take_bool(reader, "locked flag")
        return cls(start, end, color, entry_type, is_locked)

    @classmethod
    def take_mp4(cls, reader: ByteReader) -> "Marker":
        start = _take_mp4_position(reader, "start position")
        end = _take_mp4_position(reader, "end position")
        reader.expect(MP4_RESERVED, "reserved marker field")
        color = Color.from_bytes(reader.take(3, "marker color"))
        entry_type = take_entry_type(reader)
        is_locked = take_bool(reader, "locked flag")
        return cls(start, end, color, entry_type, is_locked)

    def dump_mp4(self) -> bytes:
        return b"".join(
            (
                _dump_mp4_position(self.start_position_millis),
                _dump_mp4_position(self.end_position_millis),
                MP4_RESERVED,
                self.color.to_bytes(),
                bytes((self.entry_type, self.is_locked)),
            )
        )

    def dump(self) -> bytes:
        return b"".join(
            (
                dump_position(self.start_position_millis),
                dump_position(self.end_position_millis),
                RESERVED,
                serato32.encode_color(self.color),
                bytes((self.entry_type, self.is_locked)),
            )
        )


@dataclass(frozen=True)
class Markers(Tag, ID3Tag, MP4Tag):
    NAME = "Serato Markers_"
    MP4_ATOM = "----:com.serato.dj:markers"

    version: Version
    entries: Tuple[Marker, ...]
    track_color: Color

    @classmethod
    def take(cls, reader: ByteReader) -> "Markers":
        version = Version.take(reader)
        count = reader.be_u32("marker count")
        entries = tuple(
            Marker.take(reader.sub_reader(ENTRY_SIZE, "marker entry")) for _ in range(count)
        )
        track_color = serato32.take_color(reader, "track color")
        logger.debug("Markers_ has %d entries", count)
        return cls(version=version, entries=entries, track_color=track_color)

    def dump(self) -> bytes:
        return b"".join(
            (
                self.version.dump(),
                struct.pack(">I", len(self.entries)),
                *(entry.dump() for entry in self.entries),
                serato32.encode_color(self.track_color),
            )
        )

    @classmethod
    def parse_mp4(cls, data: bytes) -> "Markers":
        reader = ByteReader(envelope.unwrap(cls.NAME, envelope.decode_base64(data)))
        version = Version.take(reader)
        count = reader.be_u32("marker count")
        entries = tuple(
            Marker.take_mp4(reader.sub_reader(MP4_ENTRY_SIZE, "marker entry")) for _ in range(count)
        )
        reader.expect(b"\x00", "track color padding")
        track_color = Color.from_bytes(reader.take(3, "track color"))
        reader.expect(b"\x00", "track color padding")
        reader.finish(cls.NAME)
        logger.debug("MP4 Markers_ has %d entries", count)
        return cls(version=version, entries=entries, track_color=track_color)

    def dump_mp4(self) -> bytes:
        payload = b"".join(
            (
                self.version.dump(),
                struct.pack(">I", len(self.entries)),
                *(entry.dump_mp4() for entry in self.entries),
                b"\x00" + self.track_color.to_bytes() + b"\x00",
            )
        )
        return envelope.encode_base64(envelope.wrap(self.NAME, payload))

    def cues(self) -> list[Marker]:
        return [entry for entry in self.entries if entry.entry_type is EntryType.CUE]

    def loops(self) -> list[Marker]:
        return [entry for entry in self.entries if entry.entry_type is EntryType.LOOP]


def take_position(reader: ByteReader, what: str) -> Optional[int]:
    start = reader.offset
    flag = reader.u8(what)
    match flag:
        case 0x00:
            return serato32.take_u32(reader, what)
        case 0x7F:
            reader.expect(NO_POSITION, f"unset {what}")
            return None
        case _:
            raise InvalidDiscriminantError(f"{what} flag must be 0x00 or 0x7f, got 0x{flag:02x}", start)


def dump_position(value: Optional[int]) -> bytes:
    if value is None:
        return bytes((POSITION_UNSET,)) + NO_POSITION
    return bytes((POSITION_SET,)) + serato32.encode_u32(value)


def take_entry_type(reader: ByteReader) -> EntryType:
    start = reader.offset
    value = reader.u8("entry type")
    match value:
        case 0x00:
            return EntryType.INVALID
        case 0x01:
            return EntryType.CUE
        case 0x03:
            return EntryType.LOOP
        case _:
            raise InvalidDiscriminantError(f"unknown marker entry type 0x{value:02x}", start)


def take_bool(reader: ByteReader, what: str) -> bool:
    start = reader.offset
    value = reader.u8(what)
    match value:
        case 0x00:
            return False
        case 0x01:
            return True
        case _:
            raise InvalidDiscriminantError(f"{what} must be 0x00 or 0x01, got 0x{value:02x}", start)


def _take_mp4_position(reader: ByteReader, what: str) -> Optional[int]:
    value = reader.be_u32(what)
    if value == MP4_NO_POSITION:
        return None
    return value


def _dump_mp4_position(value: Optional[int]) -> bytes:
    if value is None:
        return struct.pack(">I", MP4_NO_POSITION)
    if not 0 <= value < MP4_NO_POSITION:
        raise ValueError(f"position {value} does not fit the MP4 marker layout")
    return struct.pack(">I", value)
