from __future__ import annotations

from typing import ClassVar

from . import envelope


class OggTag:
    """Stored in an Ogg Vorbis comment as plain base64, without an envelope."""

    NAME: ClassVar[str]
    OGG_COMMENT: ClassVar[str]

    @classmethod
    def parse_ogg(cls, data: str | bytes):
        return cls.parse(envelope.decode_base64(data))

    def dump_ogg(self) -> str:
        return envelope.encode_base64(self.dump()).decode("ascii")
