from __future__ import annotations

import logging
from typing import ClassVar, Dict, Type, TypeVar

from ..models import serialize
from ..reader import ByteReader

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="Tag")


class Tag:
    """Common decode/encode entry points shared by every tag kind.

    Subclasses implement `take` (read the payload from a cursor) and `dump`.
    `parse` adds the exact-consumption check: a payload with bytes left over
    after the last modelled field is rejected.
    """

    NAME: ClassVar[str]

    @classmethod
    def parse(cls: Type[T], data: bytes) -> T:
        reader = ByteReader(data)
        tag = cls.take(reader)
        reader.finish(cls.NAME)
        logger.debug("Parsed %s (%d bytes)", cls.NAME, len(data))
        return tag

    @classmethod
    def take(cls: Type[T], reader: ByteReader) -> T:
        raise NotImplementedError

    def dump(self) -> bytes:
        raise NotImplementedError

    def to_record(self) -> Dict[str, object]:
        record = serialize(self)
        if not isinstance(record, dict):
            raise TypeError(f"{type(self).__name__} is not a dataclass")
        record["name"] = self.NAME
        return record
