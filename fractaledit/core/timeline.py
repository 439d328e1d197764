"""Timeline aggregate: tracks, transport and the single mutation path.

All mutations, including the transport timer's own ticks, are funnelled
through ``Timeline.dispatch`` which holds one mutex for the whole command, so
placement, flag changes, reorder and clock updates never interleave. The
mutex is recursive because slots connected to the clock's signals may
dispatch follow-up commands on the same thread.

Refused operations (unknown track, locked track, no matching kind) return
None and leave the snapshot unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Any, Dict, List, Optional, Tuple

from PySide6.QtCore import QObject, QRecursiveMutex, Signal

from .. import config
from ..media.transport import TransportClock, TransportState
from . import commands as cmd
from .assets import Asset, MediaKind
from .reorder import RandomSource, reorder
from .tracks import Clip, Track, TrackStore

logger = logging.getLogger(__name__)


class Timeline(QObject):
    """Owns the track store and the transport clock.

    Signals:
        tracksChanged()           # any track/clip structure or flag change
        positionChanged(float)    # proxied from the clock
        stateChanged(str)         # proxied from the clock
        durationChanged(float)    # proxied from the clock
    """

    tracksChanged = Signal()
    positionChanged = Signal(float)
    stateChanged = Signal(str)
    durationChanged = Signal(float)

    def __init__(
        self,
        tracks: Optional[List[Track]] = None,
        duration: float = config.DEFAULT_DURATION,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self._mutex = QRecursiveMutex()
        self._store = TrackStore(tracks) if tracks is not None else TrackStore.seeded()
        end = self._store.end_time()
        if end > duration:
            duration = end + config.DURATION_MARGIN
        self._clock = TransportClock(duration, self)
        self._clock.set_tick_target(lambda delta: self.dispatch(cmd.Tick(delta)))
        self._clock.positionChanged.connect(self.positionChanged.emit)
        self._clock.stateChanged.connect(self.stateChanged.emit)
        self._clock.durationChanged.connect(self.durationChanged.emit)

    # --- Read access ---
    @property
    def tracks(self) -> Tuple[Track, ...]:
        """Tracks in display order; change them through the mutation path."""
        return tuple(self._store.tracks)

    def find_track(self, track_id: str) -> Optional[Track]:
        return self._store.find_track(track_id)

    def clip_count(self) -> int:
        return self._store.clip_count()

    @property
    def duration(self) -> float:
        return self._clock.duration

    @property
    def current_time(self) -> float:
        return self._clock.current_time

    @property
    def state(self) -> TransportState:
        return self._clock.state

    @property
    def playing(self) -> bool:
        return self._clock.playing

    def snapshot(self) -> Dict[str, Any]:
        """Plain-data copy of the aggregate (no Qt objects, enums as strings)."""
        self._mutex.lock()
        try:
            tracks = []
            for track in self._store.tracks:
                data = asdict(track)
                data["kind"] = track.kind.value
                tracks.append(data)
            return {
                "tracks": tracks,
                "duration": self._clock.duration,
                "current_time": self._clock.current_time,
            }
        finally:
            self._mutex.unlock()

    # --- Mutation path ---
    def dispatch(self, command: cmd.Command) -> Any:
        self._mutex.lock()
        try:
            return self._apply(command)
        finally:
            self._mutex.unlock()

    def _apply(self, command: cmd.Command) -> Any:
        if isinstance(command, cmd.Tick):
            return self._clock.tick(command.delta)
        if isinstance(command, cmd.Seek):
            return self._clock.seek(command.time)
        if isinstance(command, cmd.Skip):
            return self._clock.skip(command.delta)
        if isinstance(command, cmd.Play):
            return self._clock.play()
        if isinstance(command, cmd.Pause):
            return self._clock.pause()
        if isinstance(command, cmd.TogglePlayback):
            return self._clock.toggle()
        if isinstance(command, cmd.PlaceAsset):
            return self._place(command.asset)
        if isinstance(command, cmd.UpdateTrack):
            track = self._store.update_track(command.track_id, **command.changes)
            if track is not None:
                self.tracksChanged.emit()
            return track
        if isinstance(command, cmd.DeleteTrack):
            track = self._store.delete_track(command.track_id)
            if track is not None:
                self.tracksChanged.emit()
            return track
        if isinstance(command, cmd.AddTrack):
            track = self._store.add_track(command.kind, command.name, command.track_id)
            self.tracksChanged.emit()
            return track
        if isinstance(command, cmd.ReorderAudio):
            self._store.replace_tracks(reorder(self._store.tracks, command.rng))
            self.tracksChanged.emit()
            return list(self._store.tracks)
        raise TypeError(f"unsupported timeline command {command!r}")

    def _place(self, asset: Asset) -> Optional[Clip]:
        clip = self._store.place_on_track(asset)
        if clip is None:
            return None
        if clip.end_time > self._clock.duration:
            self._clock.set_duration(clip.end_time + config.DURATION_MARGIN)
        self.tracksChanged.emit()
        return clip

    # --- Convenience entry points (each is one dispatched command) ---
    def place_on_track(self, asset: Asset) -> Optional[Clip]:
        return self.dispatch(cmd.PlaceAsset(asset))

    def update_track(self, track_id: str, **changes) -> Optional[Track]:
        return self.dispatch(cmd.UpdateTrack(track_id, changes))

    def delete_track(self, track_id: str) -> Optional[Track]:
        return self.dispatch(cmd.DeleteTrack(track_id))

    def add_track(self, kind: MediaKind, name: Optional[str] = None) -> Track:
        return self.dispatch(cmd.AddTrack(kind, name))

    def play(self) -> None:
        self.dispatch(cmd.Play())

    def pause(self) -> None:
        self.dispatch(cmd.Pause())

    def toggle(self) -> None:
        self.dispatch(cmd.TogglePlayback())

    def seek(self, t: float) -> float:
        return self.dispatch(cmd.Seek(t))

    def skip(self, delta: float) -> float:
        return self.dispatch(cmd.Skip(delta))

    def tick(self, delta: float = config.TICK_SECONDS) -> None:
        self.dispatch(cmd.Tick(delta))

    def reorder(self, rng: Optional[RandomSource] = None) -> List[Track]:
        return self.dispatch(cmd.ReorderAudio(rng))


__all__ = ["Timeline"]
