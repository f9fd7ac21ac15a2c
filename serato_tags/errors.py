from __future__ import annotations

from typing import Optional


class SeratoTagError(Exception):
    """Raised when a payload does not match its binary layout."""

    def __init__(self, message: str, offset: Optional[int] = None) -> None:
        if offset is not None:
            message = f"{message} (at byte {offset})"
        super().__init__(message)
        self.offset = offset


class TruncatedInputError(SeratoTagError):
    """Fewer bytes remain than a field requires."""


class InvalidDiscriminantError(SeratoTagError):
    """A control byte holds a value outside its defined set."""


class FillerMismatchError(SeratoTagError):
    """A reserved field does not hold its fixed literal value."""


class TrailingDataError(SeratoTagError):
    """Bytes remain after the payload was fully parsed."""


class InvalidEncodingError(SeratoTagError):
    """The payload's transport encoding (Serato32, base64, envelope) is broken."""


class CapabilityError(SeratoTagError, TypeError):
    """A tag type was used with a container it cannot be stored in."""
