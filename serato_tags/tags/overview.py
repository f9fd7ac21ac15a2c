"""The `Serato Overview` tag stores the waveform overview shown in the library.

The payload after the version is a sequence of 16-byte chunks, one per
column of the overview image. A partial chunk at the end is left
unconsumed, so `parse` rejects it as trailing data.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Tuple

from ..errors import TruncatedInputError
from ..formats import FLACTag, ID3Tag, MP4Tag, OggTag
from ..models import Version
from ..reader import ByteReader
from .base import Tag

logger = logging.getLogger(__name__)

CHUNK_SIZE = 16


@dataclass(frozen=True)
class Overview(Tag, ID3Tag, FLACTag, MP4Tag, OggTag):
    NAME = "Serato Overview"
    FLAC_COMMENT = "SERATO_OVERVIEW"
    MP4_ATOM = "----:com.serato.dj:overview"
    OGG_COMMENT = "serato_overview"

    version: Version
    data: Tuple[bytes, ...]

    def __post_init__(self) -> None:
        if not self.data:
            raise ValueError("overview needs at least one chunk")
        for chunk in self.data:
            if len(chunk) != CHUNK_SIZE:
                raise ValueError(f"overview chunks must be {CHUNK_SIZE} bytes, got {len(chunk)}")

    @classmethod
    def take(cls, reader: ByteReader) -> "Overview":
        version = Version.take(reader)
        if reader.remaining < CHUNK_SIZE:
            raise TruncatedInputError(
                f"overview needs at least one {CHUNK_SIZE}-byte chunk, {reader.remaining} bytes left",
                reader.offset,
            )
        chunks = []
        while reader.remaining >= CHUNK_SIZE:
            chunks.append(reader.take(CHUNK_SIZE, "overview chunk"))
        logger.debug("Overview has %d chunks", len(chunks))
        return cls(version=version, data=tuple(chunks))

    def dump(self) -> bytes:
        return self.version.dump() + b"".join(self.data)
