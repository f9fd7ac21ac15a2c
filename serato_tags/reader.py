from __future__ import annotations

import struct

from .errors import FillerMismatchError, TrailingDataError, TruncatedInputError


class ByteReader:
    """Forward-only cursor over an immutable byte buffer."""

    def __init__(self, data: bytes, base_offset: int = 0) -> None:
        self._data = bytes(data)
        self._pos = 0
        self._base = base_offset

    @property
    def offset(self) -> int:
        return self._base + self._pos

    @property
    def remaining(self) -> int:
        return len(self._data) - self._pos

    def at_end(self) -> bool:
        return self._pos >= len(self._data)

    def take(self, size: int, what: str = "field") -> bytes:
        if size > self.remaining:
            raise TruncatedInputError(
                f"{what} needs {size} bytes, only {self.remaining} left", self.offset
            )
        chunk = self._data[self._pos : self._pos + size]
        self._pos += size
        return chunk

    def rest(self) -> bytes:
        return self.take(self.remaining)

    def u8(self, what: str = "byte") -> int:
        return self.take(1, what)[0]

    def be_u16(self, what: str = "u16") -> int:
        return struct.unpack(">H", self.take(2, what))[0]

    def be_u32(self, what: str = "u32") -> int:
        return struct.unpack(">I", self.take(4, what))[0]

    def be_f32(self, what: str = "f32") -> float:
        return struct.unpack(">f", self.take(4, what))[0]

    def cstring(self, what: str = "string") -> bytes:
        end = self._data.find(b"\x00", self._pos)
        if end < 0:
            raise TruncatedInputError(f"{what} is missing its NUL terminator", self.offset)
        value = self._data[self._pos : end]
        self._pos = end + 1
        return value

    def expect(self, literal: bytes, what: str = "filler") -> None:
        start = self.offset
        value = self.take(len(literal), what)
        if value != literal:
            raise FillerMismatchError(
                f"{what} must be {literal.hex(' ')}, got {value.hex(' ')}", start
            )

    def sub_reader(self, size: int, what: str = "block") -> "ByteReader":
        start = self.offset
        return ByteReader(self.take(size, what), base_offset=start)

    def finish(self, what: str = "payload") -> None:
        if self.remaining:
            raise TrailingDataError(
                f"{self.remaining} unexpected trailing bytes after {what}", self.offset
            )
