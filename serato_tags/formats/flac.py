from __future__ import annotations

from typing import ClassVar

from . import envelope


class FLACTag:
    """Stored in a FLAC Vorbis comment as a base64 encoded envelope."""

    NAME: ClassVar[str]
    FLAC_COMMENT: ClassVar[str]

    @classmethod
    def parse_flac(cls, data: str | bytes):
        return cls.parse(envelope.unwrap(cls.NAME, envelope.decode_base64(data)))

    def dump_flac(self) -> str:
        return envelope.encode_base64(envelope.wrap(self.NAME, self.dump())).decode("ascii")
