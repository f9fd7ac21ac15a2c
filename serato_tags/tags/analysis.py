"""The `Serato Analysis` tag stores the version of the analysis that produced the other tags."""

from __future__ import annotations

from dataclasses import dataclass

from ..formats import FLACTag, ID3Tag, MP4Tag, OggTag
from ..models import Version
from ..reader import ByteReader
from .base import Tag


@dataclass(frozen=True)
class Analysis(Tag, ID3Tag, FLACTag, MP4Tag, OggTag):
    NAME = "Serato Analysis"
    FLAC_COMMENT = "SERATO_ANALYSIS"
    MP4_ATOM = "----:com.serato.dj:analysisVersion"
    OGG_COMMENT = "serato_analysis_ver"

    version: Version

    @classmethod
    def take(cls, reader: ByteReader) -> "Analysis":
        return cls(version=Version.take(reader))

    def dump(self) -> bytes:
        return self.version.dump()
