"""Track store: typed lanes of placed clips.

Placement is append-only: a new clip always starts where the last clip on its
track ends, so clips on a track stay end-to-end in sequence order. Locked
tracks refuse placement; flag updates and deletion still apply to them.
Missing tracks and refused placements are silent no-ops (``None``).
"""

from __future__ import annotations

import logging
import math
import uuid
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from .. import config
from .assets import Asset, MediaKind

logger = logging.getLogger(__name__)

# Track-level fields callers may change through update_track.
MUTABLE_TRACK_FIELDS = frozenset({"locked", "muted", "name"})


@dataclass
class Clip:
    asset_id: str
    track_id: str
    start_time: float  # seconds on the timeline
    duration: float  # seconds
    source_offset: float = 0.0  # seconds into the source media
    name: str = ""
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @property
    def end_time(self) -> float:
        return self.start_time + self.duration


@dataclass
class Track:
    id: str
    kind: MediaKind
    name: str
    items: List[Clip] = field(default_factory=list)
    locked: bool = False
    muted: bool = False

    @property
    def end_time(self) -> float:
        if not self.items:
            return 0.0
        last = self.items[-1]
        return last.start_time + last.duration

    def accepts(self, asset: Asset) -> bool:
        return asset.kind is self.kind and not self.locked


def default_track_name(kind: MediaKind, ordinal: int) -> str:
    """Seed-style lane names: VID_STREAM_01, AUD_CHANNEL_A, IMG_LAYER_01."""
    if kind is MediaKind.VIDEO:
        return f"VID_STREAM_{ordinal:02d}"
    if kind is MediaKind.AUDIO:
        # A..Z then AA, AB, ...
        letters = ""
        n = ordinal
        while n > 0:
            n, rem = divmod(n - 1, 26)
            letters = chr(ord("A") + rem) + letters
        return f"AUD_CHANNEL_{letters}"
    if kind is MediaKind.IMAGE:
        return f"IMG_LAYER_{ordinal:02d}"
    raise ValueError(f"unknown media kind {kind!r}")


class TrackStore:
    """Ordered collection of tracks owning their clips."""

    def __init__(self, tracks: Optional[List[Track]] = None):
        self.tracks: List[Track] = list(tracks or [])

    @classmethod
    def seeded(cls) -> "TrackStore":
        return cls(
            [
                Track(id=tid, kind=MediaKind(kind), name=name)
                for tid, kind, name in config.SEED_TRACKS
            ]
        )

    # --- Lookup ---
    def find_track(self, track_id: str) -> Optional[Track]:
        for track in self.tracks:
            if track.id == track_id:
                return track
        return None

    def first_track_of_kind(self, kind: MediaKind) -> Optional[Track]:
        for track in self.tracks:
            if track.kind is kind:
                return track
        return None

    def clip_count(self) -> int:
        return sum(len(t.items) for t in self.tracks)

    def end_time(self) -> float:
        return max((t.end_time for t in self.tracks), default=0.0)

    def __iter__(self) -> Iterator[Track]:
        return iter(self.tracks)

    def __len__(self) -> int:
        return len(self.tracks)

    # --- Mutation ---
    def place_on_track(self, asset: Asset) -> Optional[Clip]:
        """Append a clip for ``asset`` to the first track of the same kind.

        Only the first matching track is considered: if it is locked the asset
        is not routed to a later track. Returns the new clip, or None when
        nothing was placed.
        """
        track = self.first_track_of_kind(asset.kind)
        if track is None:
            logger.debug("No %s track for asset %s", asset.kind.value, asset.name)
            return None
        if not track.accepts(asset):
            logger.debug("Track %s is locked; %s not placed", track.id, asset.name)
            return None
        duration = asset.nominal_duration or config.DEFAULT_CLIP_DURATION
        if not (duration > 0 and math.isfinite(duration)):
            logger.debug("Refusing %s with duration %r", asset.name, duration)
            return None
        start = track.end_time
        clip = Clip(
            asset_id=asset.id,
            track_id=track.id,
            start_time=start,
            duration=duration,
            source_offset=0.0,
            name=asset.name,
        )
        track.items.append(clip)
        logger.debug(
            "Placed %s on %s at %.2fs for %.2fs", asset.name, track.id, start, duration
        )
        return clip

    def update_track(self, track_id: str, **changes) -> Optional[Track]:
        unknown = set(changes) - MUTABLE_TRACK_FIELDS
        if unknown:
            raise TypeError(f"not a mutable track field: {', '.join(sorted(unknown))}")
        track = self.find_track(track_id)
        if track is None:
            logger.debug("update_track: unknown track %s", track_id)
            return None
        for key, value in changes.items():
            setattr(track, key, value)
        return track

    def delete_track(self, track_id: str) -> Optional[Track]:
        track = self.find_track(track_id)
        if track is None:
            logger.debug("delete_track: unknown track %s", track_id)
            return None
        self.tracks.remove(track)
        logger.info("Deleted track %s (%d clips)", track.name, len(track.items))
        return track

    def add_track(
        self,
        kind: MediaKind,
        name: Optional[str] = None,
        track_id: Optional[str] = None,
    ) -> Track:
        kind = MediaKind(kind)
        if track_id is None:
            track_id = str(uuid.uuid4())
        elif self.find_track(track_id) is not None:
            raise ValueError(f"duplicate track id {track_id}")
        if name is None:
            ordinal = sum(1 for t in self.tracks if t.kind is kind) + 1
            name = default_track_name(kind, ordinal)
        track = Track(id=track_id, kind=kind, name=name)
        self.tracks.append(track)
        logger.info("Added %s track %s", kind.value, name)
        return track

    def replace_tracks(self, tracks: List[Track]) -> None:
        self.tracks = list(tracks)


__all__ = [
    "Clip",
    "Track",
    "TrackStore",
    "MUTABLE_TRACK_FIELDS",
    "default_track_name",
]
