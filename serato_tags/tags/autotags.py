"""The `Serato Autotags` tag stores the detected BPM and the gain values.

Each value is an ASCII decimal terminated by a NUL byte: the BPM with two
decimals, auto gain and gain with three.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from ..errors import InvalidEncodingError
from ..formats import FLACTag, ID3Tag, MP4Tag, OggTag
from ..models import Version
from ..reader import ByteReader
from .base import Tag

DECIMAL = re.compile(rb"-?\d+\.\d+")


@dataclass(frozen=True)
class Autotags(Tag, ID3Tag, FLACTag, MP4Tag, OggTag):
    NAME = "Serato Autotags"
    FLAC_COMMENT = "SERATO_AUTOGAIN"
    MP4_ATOM = "----:com.serato.dj:autgain"
    OGG_COMMENT = "serato_autogain"

    version: Version
    bpm: float
    auto_gain: float
    gain_db: float

    @classmethod
    def take(cls, reader: ByteReader) -> "Autotags":
        version = Version.take(reader)
        bpm = _take_decimal(reader, "bpm")
        auto_gain = _take_decimal(reader, "auto gain")
        gain_db = _take_decimal(reader, "gain")
        return cls(version=version, bpm=bpm, auto_gain=auto_gain, gain_db=gain_db)

    def dump(self) -> bytes:
        return b"".join(
            (
                self.version.dump(),
                f"{self.bpm:.2f}".encode("ascii") + b"\x00",
                f"{self.auto_gain:.3f}".encode("ascii") + b"\x00",
                f"{self.gain_db:.3f}".encode("ascii") + b"\x00",
            )
        )


def _take_decimal(reader: ByteReader, what: str) -> float:
    start = reader.offset
    raw = reader.cstring(what)
    if not DECIMAL.fullmatch(raw):
        raise InvalidEncodingError(f"{what} is not a decimal number: {raw!r}", start)
    return float(raw)
