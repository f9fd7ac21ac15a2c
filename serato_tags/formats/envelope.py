"""Text-safety transforms used by the text-only containers.

FLAC comments and MP4 freeform atoms store the same GEOB-style envelope
Serato writes into ID3::

    application/octet-stream \\0  \\0  <tag name> \\0  <payload>

base64 encoded and wrapped every 72 characters. Ogg comments hold the bare
payload in base64.
"""

from __future__ import annotations

import base64
import binascii

from ..errors import InvalidEncodingError
from ..reader import ByteReader

MIME_TYPE = b"application/octet-stream"
LINE_LENGTH = 72


def encode_base64(data: bytes, *, line_length: int = LINE_LENGTH, padding: bool = True) -> bytes:
    encoded = base64.b64encode(data)
    if not padding:
        encoded = encoded.rstrip(b"=")
    if not line_length:
        return encoded
    return b"\n".join(
        encoded[index : index + line_length] for index in range(0, len(encoded), line_length)
    )


def decode_base64(data: str | bytes) -> bytes:
    if isinstance(data, str):
        try:
            data = data.encode("ascii")
        except UnicodeEncodeError as exc:
            raise InvalidEncodingError(f"base64 text contains non-ASCII characters: {exc}") from exc
    compact = b"".join(bytes(data).split()).rstrip(b"=")
    if len(compact) % 4 == 1:
        # Serato sometimes drops a whole trailing quantum; this is how it pads it back.
        compact += b"A=="
    else:
        compact += b"=" * (-len(compact) % 4)
    try:
        return base64.b64decode(compact, validate=True)
    except binascii.Error as exc:
        raise InvalidEncodingError(f"invalid base64 data: {exc}") from exc


def wrap(name: str, payload: bytes) -> bytes:
    return MIME_TYPE + b"\x00" + b"\x00" + name.encode("utf-8") + b"\x00" + payload


def unwrap(name: str, data: bytes) -> bytes:
    reader = ByteReader(data)
    reader.expect(MIME_TYPE + b"\x00", "envelope MIME type")
    reader.expect(b"\x00", "envelope filename")
    reader.expect(name.encode("utf-8") + b"\x00", "envelope tag name")
    return reader.rest()
