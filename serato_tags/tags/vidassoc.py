"""The `Serato VidAssoc` tag links a track to a video file (Serato Video).

Only the version is interpreted; the remaining bytes are kept as they are.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..formats import FLACTag, ID3Tag, MP4Tag, OggTag
from ..models import Version
from ..reader import ByteReader
from .base import Tag


@dataclass(frozen=True)
class VidAssoc(Tag, ID3Tag, FLACTag, MP4Tag, OggTag):
    NAME = "Serato VidAssoc"
    FLAC_COMMENT = "SERATO_VIDEO_ASSOC"
    MP4_ATOM = "----:com.serato.dj:videoassociation"
    OGG_COMMENT = "serato_video_assoc"

    version: Version
    data: bytes

    @classmethod
    def take(cls, reader: ByteReader) -> "VidAssoc":
        return cls(version=Version.take(reader), data=reader.rest())

    def dump(self) -> bytes:
        return self.version.dump() + self.data
