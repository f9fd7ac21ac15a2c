"""The `Serato BeatGrid` tag stores the beatgrid markers.

After the version comes a u32 marker count. Every marker but the last is a
non-terminal marker `(f32 position, u32 beats until the next marker)`; the
last one is terminal and carries `(f32 position, f32 bpm)`. One footer byte
of unknown meaning closes the payload.
"""

from __future__ import annotations

import logging
import struct
from dataclasses import dataclass
from typing import Optional, Tuple

from ..formats import FLACTag, ID3Tag, MP4Tag, OggTag
from ..models import Version
from ..reader import ByteReader
from .base import Tag

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class NonTerminalMarker:
    position: float
    beats_till_next_marker: int


@dataclass(frozen=True, slots=True)
class TerminalMarker:
    position: float
    bpm: float


@dataclass(frozen=True)
class Beatgrid(Tag, ID3Tag, FLACTag, MP4Tag, OggTag):
    NAME = "Serato BeatGrid"
    FLAC_COMMENT = "SERATO_BEATGRID"
    MP4_ATOM = "----:com.serato.dj:beatgrid"
    OGG_COMMENT = "serato_beatgrid"

    version: Version
    non_terminal_markers: Tuple[NonTerminalMarker, ...]
    terminal_marker: Optional[TerminalMarker]
    footer: int

    @classmethod
    def take(cls, reader: ByteReader) -> "Beatgrid":
        version = Version.take(reader)
        count = reader.be_u32("beatgrid marker count")
        non_terminal = []
        for _ in range(max(count - 1, 0)):
            position = reader.be_f32("marker position")
            beats = reader.be_u32("beats till next marker")
            non_terminal.append(NonTerminalMarker(position, beats))
        terminal = None
        if count:
            terminal = TerminalMarker(reader.be_f32("terminal position"), reader.be_f32("bpm"))
        footer = reader.u8("beatgrid footer")
        logger.debug("BeatGrid has %d markers", count)
        return cls(
            version=version,
            non_terminal_markers=tuple(non_terminal),
            terminal_marker=terminal,
            footer=footer,
        )

    def dump(self) -> bytes:
        count = len(self.non_terminal_markers) + (1 if self.terminal_marker else 0)
        if self.non_terminal_markers and self.terminal_marker is None:
            raise ValueError("a beatgrid with markers needs a terminal marker")
        parts = [self.version.dump(), struct.pack(">I", count)]
        for marker in self.non_terminal_markers:
            parts.append(struct.pack(">fI", marker.position, marker.beats_till_next_marker))
        if self.terminal_marker:
            parts.append(struct.pack(">ff", self.terminal_marker.position, self.terminal_marker.bpm))
        parts.append(bytes((self.footer,)))
        return b"".join(parts)

    @property
    def bpm(self) -> Optional[float]:
        return self.terminal_marker.bpm if self.terminal_marker else None
