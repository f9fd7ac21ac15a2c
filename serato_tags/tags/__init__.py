from __future__ import annotations

from typing import Dict, Type

from .analysis import Analysis
from .autotags import Autotags
from .base import Tag
from .beatgrid import Beatgrid, NonTerminalMarker, TerminalMarker
from .markers import EntryType, Marker, Markers
from .markers2 import (
    BpmLockEntry,
    ColorEntry,
    CueEntry,
    LoopEntry,
    Markers2,
    UnknownEntry,
)
from .overview import Overview
from .relvolad import RelVolAd
from .vidassoc import VidAssoc

TAG_KINDS: Dict[str, Type[Tag]] = {
    "analysis": Analysis,
    "autotags": Autotags,
    "beatgrid": Beatgrid,
    "markers": Markers,
    "markers2": Markers2,
    "overview": Overview,
    "vidassoc": VidAssoc,
    "relvolad": RelVolAd,
}


def tag_class(kind: str) -> Type[Tag]:
    try:
        return TAG_KINDS[kind.lower()]
    except KeyError:
        raise ValueError(f"unknown tag kind {kind!r}; expected one of {', '.join(TAG_KINDS)}") from None


__all__ = [
    "Analysis",
    "Autotags",
    "Beatgrid",
    "BpmLockEntry",
    "ColorEntry",
    "CueEntry",
    "EntryType",
    "LoopEntry",
    "Marker",
    "Markers",
    "Markers2",
    "NonTerminalMarker",
    "Overview",
    "RelVolAd",
    "TAG_KINDS",
    "Tag",
    "TerminalMarker",
    "UnknownEntry",
    "VidAssoc",
    "tag_class",
]
