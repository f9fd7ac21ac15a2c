"""Routing of tag payloads into and out of host containers."""

from __future__ import annotations

from enum import Enum

from ..errors import CapabilityError
from .flac import FLACTag
from .id3 import ID3Tag
from .mp4 import MP4Tag
from .ogg import OggTag


class Capability(str, Enum):
    ID3 = "id3"
    FLAC = "flac"
    MP4 = "mp4"
    OGG = "ogg"


_MIXINS = {
    Capability.ID3: ID3Tag,
    Capability.FLAC: FLACTag,
    Capability.MP4: MP4Tag,
    Capability.OGG: OggTag,
}


def capabilities(tag_cls: type) -> list[Capability]:
    return [cap for cap, mixin in _MIXINS.items() if issubclass(tag_cls, mixin)]


def _require(tag_cls: type, capability: Capability | str) -> Capability:
    capability = Capability(capability)
    if not issubclass(tag_cls, _MIXINS[capability]):
        raise CapabilityError(f"{tag_cls.NAME} cannot be stored in {capability.value} containers")
    return capability


def container_key(tag_cls: type, capability: Capability | str) -> str:
    """Name under which the container stores the payload (frame, comment or atom)."""
    match _require(tag_cls, capability):
        case Capability.ID3:
            return tag_cls.id3_description()
        case Capability.FLAC:
            return tag_cls.FLAC_COMMENT
        case Capability.MP4:
            return tag_cls.MP4_ATOM
        case Capability.OGG:
            return tag_cls.OGG_COMMENT
    raise AssertionError(capability)


def parse_container(tag_cls: type, capability: Capability | str, data: str | bytes):
    match _require(tag_cls, capability):
        case Capability.ID3:
            if isinstance(data, str):
                raise TypeError("ID3 payloads are binary")
            return tag_cls.parse_id3(data)
        case Capability.FLAC:
            return tag_cls.parse_flac(data)
        case Capability.MP4:
            return tag_cls.parse_mp4(data)
        case Capability.OGG:
            return tag_cls.parse_ogg(data)
    raise AssertionError(capability)


def dump_container(tag: object, capability: Capability | str) -> str | bytes:
    match _require(type(tag), capability):
        case Capability.ID3:
            return tag.dump_id3()
        case Capability.FLAC:
            return tag.dump_flac()
        case Capability.MP4:
            return tag.dump_mp4()
        case Capability.OGG:
            return tag.dump_ogg()
    raise AssertionError(capability)


__all__ = [
    "Capability",
    "FLACTag",
    "ID3Tag",
    "MP4Tag",
    "OggTag",
    "capabilities",
    "container_key",
    "dump_container",
    "parse_container",
]
