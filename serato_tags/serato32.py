"""Serato32: the 7-bit-safe packing used by `Serato Markers_`.

Four bytes carry 28 significant bits, most significant byte first, with the
top bit of every byte clear::

    value = (b0 << 21) | (b1 << 14) | (b2 << 7) | b3

Colors use the same group and keep the low 24 bits.
"""

from __future__ import annotations

from .errors import InvalidEncodingError, TruncatedInputError
from .models import Color
from .reader import ByteReader

MAX_VALUE = (1 << 28) - 1


def decode_u32(data: bytes, offset: int | None = None) -> int:
    if len(data) < 4:
        raise TruncatedInputError(f"Serato32 value needs 4 bytes, got {len(data)}", offset)
    if len(data) > 4:
        raise ValueError("Serato32 value must be exactly 4 bytes")
    value = 0
    for index, byte in enumerate(data):
        if byte & 0x80:
            where = None if offset is None else offset + index
            raise InvalidEncodingError(f"Serato32 byte 0x{byte:02x} has its top bit set", where)
        value = (value << 7) | byte
    return value


def encode_u32(value: int) -> bytes:
    if not 0 <= value <= MAX_VALUE:
        raise ValueError(f"{value} does not fit in 28 bits")
    return bytes(
        (
            (value >> 21) & 0x7F,
            (value >> 14) & 0x7F,
            (value >> 7) & 0x7F,
            value & 0x7F,
        )
    )


def decode_color(data: bytes, offset: int | None = None) -> Color:
    return Color.from_int(decode_u32(data, offset) & 0xFFFFFF)


def encode_color(color: Color) -> bytes:
    return encode_u32(color.to_int())


def take_u32(reader: ByteReader, what: str = "Serato32 value") -> int:
    start = reader.offset
    return decode_u32(reader.take(4, what), start)


def take_color(reader: ByteReader, what: str = "Serato32 color") -> Color:
    start = reader.offset
    return decode_color(reader.take(4, what), start)
