"""The `Serato RelVolAd` tag stores the relative volume adjustment."""

from __future__ import annotations

from dataclasses import dataclass

from ..formats import FLACTag, ID3Tag, MP4Tag, OggTag
from ..models import Version
from ..reader import ByteReader
from .base import Tag


@dataclass(frozen=True)
class RelVolAd(Tag, ID3Tag, FLACTag, MP4Tag, OggTag):
    NAME = "Serato RelVolAd"
    FLAC_COMMENT = "SERATO_RELVOL"
    MP4_ATOM = "----:com.serato.dj:relvol"
    OGG_COMMENT = "serato_relvol"

    version: Version
    # Body layout is not known; kept verbatim.
    data: bytes

    @classmethod
    def take(cls, reader: ByteReader) -> "RelVolAd":
        return cls(version=Version.take(reader), data=reader.rest())

    def dump(self) -> bytes:
        return self.version.dump() + self.data
