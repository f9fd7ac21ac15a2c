"Decoder and encoder for the metadata tags Serato DJ writes into audio files."

from __future__ import annotations

from importlib import metadata

from .errors import (
    CapabilityError,
    FillerMismatchError,
    InvalidDiscriminantError,
    InvalidEncodingError,
    SeratoTagError,
    TrailingDataError,
    TruncatedInputError,
)
from .formats import Capability, capabilities, container_key, dump_container, parse_container
from .models import Color, Version
from .tags import TAG_KINDS, Tag, tag_class

__all__ = [
    "Capability",
    "CapabilityError",
    "Color",
    "FillerMismatchError",
    "InvalidDiscriminantError",
    "InvalidEncodingError",
    "SeratoTagError",
    "TAG_KINDS",
    "Tag",
    "TrailingDataError",
    "TruncatedInputError",
    "Version",
    "__version__",
    "capabilities",
    "container_key",
    "dump",
    "parse",
]


def parse(kind: str, data: str | bytes, capability: Capability | str = Capability.ID3) -> Tag:
    """Decode a tag payload of the given kind as stored in the given container."""
    return parse_container(tag_class(kind), capability, data)


def dump(tag: Tag, capability: Capability | str = Capability.ID3) -> str | bytes:
    return dump_container(tag, capability)


def __getattr__(name: str) -> str:
    if name == "__version__":
        try:
            return metadata.version("serato-tags")
        except metadata.PackageNotFoundError:  # pragma: no cover - during editable dev installs
            return "0.0.0"
    raise AttributeError(name)
