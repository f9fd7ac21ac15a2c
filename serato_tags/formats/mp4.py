from __future__ import annotations

from typing import ClassVar

from . import envelope


class MP4Tag:
    """Stored in an MP4 freeform atom below `----:com.serato.dj`."""

    NAME: ClassVar[str]
    MP4_ATOM: ClassVar[str]

    @classmethod
    def parse_mp4(cls, data: bytes):
        return cls.parse(envelope.unwrap(cls.NAME, envelope.decode_base64(data)))

    def dump_mp4(self) -> bytes:
        return envelope.encode_base64(envelope.wrap(self.NAME, self.dump()))
