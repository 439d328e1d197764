"""Command objects for the timeline's single mutation path.

Every user action becomes one of these and is handed to
``Timeline.dispatch``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from .. import config
from .assets import Asset, MediaKind
from .reorder import RandomSource


@dataclass(frozen=True)
class PlaceAsset:
    asset: Asset


@dataclass(frozen=True)
class UpdateTrack:
    track_id: str
    changes: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class DeleteTrack:
    track_id: str


@dataclass(frozen=True)
class AddTrack:
    kind: MediaKind
    name: Optional[str] = None
    track_id: Optional[str] = None


@dataclass(frozen=True)
class Play:
    pass


@dataclass(frozen=True)
class Pause:
    pass


@dataclass(frozen=True)
class TogglePlayback:
    pass


@dataclass(frozen=True)
class Seek:
    time: float


@dataclass(frozen=True)
class Skip:
    delta: float = config.SKIP_SECONDS


@dataclass(frozen=True)
class Tick:
    delta: float = config.TICK_SECONDS


@dataclass(frozen=True)
class ReorderAudio:
    rng: Optional[RandomSource] = None


Command = Union[
    PlaceAsset,
    UpdateTrack,
    DeleteTrack,
    AddTrack,
    Play,
    Pause,
    TogglePlayback,
    Seek,
    Skip,
    Tick,
    ReorderAudio,
]

__all__ = [
    "Command",
    "PlaceAsset",
    "UpdateTrack",
    "DeleteTrack",
    "AddTrack",
    "Play",
    "Pause",
    "TogglePlayback",
    "Seek",
    "Skip",
    "Tick",
    "ReorderAudio",
]
