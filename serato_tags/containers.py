"""Reading and writing tag payloads inside audio files via mutagen.

This is the only module that touches files; everything else works on the
payload bytes. The container is picked from the file extension.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Type

from mutagen.aiff import AIFF
from mutagen.flac import FLAC
from mutagen.id3 import GEOB, ID3, ID3NoHeaderError
from mutagen.mp4 import MP4, AtomDataType, MP4FreeForm
from mutagen.oggvorbis import OggVorbis
from mutagen.wave import WAVE

from .formats import Capability, container_key, dump_container, parse_container
from .tags import Tag

logger = logging.getLogger(__name__)

EXTENSION_CAPABILITIES = {
    ".mp3": Capability.ID3,
    ".aiff": Capability.ID3,
    ".aif": Capability.ID3,
    ".wav": Capability.ID3,
    ".flac": Capability.FLAC,
    ".m4a": Capability.MP4,
    ".mp4": Capability.MP4,
    ".ogg": Capability.OGG,
}

_ID3_CHUNK_FORMATS = {".aiff": AIFF, ".aif": AIFF, ".wav": WAVE}


def capability_for(path: Path) -> Capability:
    ext = Path(path).suffix.lower()
    try:
        return EXTENSION_CAPABILITIES[ext]
    except KeyError:
        raise ValueError(f"Unsupported audio file extension: {path}") from None


def read_payload(path: Path, tag_cls: Type[Tag]) -> Optional[str | bytes]:
    """Return the raw payload of `tag_cls` stored in `path`, or None when absent."""
    path = Path(path)
    capability = capability_for(path)
    key = container_key(tag_cls, capability)
    match capability:
        case Capability.ID3:
            tags = _load_id3(path)
            if tags is None:
                return None
            for frame in tags.getall("GEOB"):
                if frame.desc == key:
                    return frame.data
            return None
        case Capability.FLAC:
            return _first(FLAC(path).get(key))
        case Capability.MP4:
            audio = MP4(path)
            if audio.tags is None:
                return None
            value = _first(audio.tags.get(key))
            return None if value is None else bytes(value)
        case Capability.OGG:
            return _first(OggVorbis(path).get(key))
    raise AssertionError(capability)


def read_tag(path: Path, tag_cls: Type[Tag]) -> Optional[Tag]:
    payload = read_payload(path, tag_cls)
    if payload is None:
        logger.debug("No %s tag in %s", tag_cls.NAME, path)
        return None
    return parse_container(tag_cls, capability_for(path), payload)


def write_tag(path: Path, tag: Tag) -> None:
    path = Path(path)
    capability = capability_for(path)
    key = container_key(type(tag), capability)
    payload = dump_container(tag, capability)
    match capability:
        case Capability.ID3:
            _write_geob(path, key, payload)
        case Capability.FLAC:
            audio = FLAC(path)
            audio[key] = [payload]
            audio.save()
        case Capability.MP4:
            audio = MP4(path)
            if audio.tags is None:
                audio.add_tags()
            audio.tags[key] = [MP4FreeForm(payload, dataformat=AtomDataType.IMPLICIT)]
            audio.save()
        case Capability.OGG:
            audio = OggVorbis(path)
            audio[key] = [payload]
            audio.save()
    logger.debug("Wrote %s to %s", tag.NAME, path)


def _load_id3(path: Path) -> Optional[ID3]:
    chunk_format = _ID3_CHUNK_FORMATS.get(path.suffix.lower())
    if chunk_format is not None:
        return chunk_format(path).tags
    try:
        return ID3(path)
    except ID3NoHeaderError:
        return None


def _write_geob(path: Path, description: str, payload: bytes) -> None:
    frame = GEOB(
        encoding=0,
        mime="application/octet-stream",
        filename="",
        desc=description,
        data=payload,
    )
    chunk_format = _ID3_CHUNK_FORMATS.get(path.suffix.lower())
    if chunk_format is not None:
        audio = chunk_format(path)
        if audio.tags is None:
            audio.add_tags()
        audio.tags.delall(f"GEOB:{description}")
        audio.tags.add(frame)
        audio.save()
        return
    try:
        tags = ID3(path)
    except ID3NoHeaderError:
        tags = ID3()
    tags.delall(f"GEOB:{description}")
    tags.add(frame)
    tags.save(path)


def _first(values: object) -> object:
    if not values:
        return None
    return values[0]
