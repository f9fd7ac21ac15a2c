from __future__ import annotations

from typing import ClassVar


class ID3Tag:
    """Stored verbatim as the data of an ID3 `GEOB` frame.

    The frame is located by its description, which is the tag's `NAME`.
    """

    NAME: ClassVar[str]
    ID3_MIME_TYPE: ClassVar[str] = "application/octet-stream"

    @classmethod
    def id3_description(cls) -> str:
        return cls.NAME

    @classmethod
    def parse_id3(cls, data: bytes):
        return cls.parse(data)

    def dump_id3(self) -> bytes:
        return self.dump()
