"""Transport clock: the timeline's logical playhead.

States:
    stopped   -- parked at current_time (initial state)
    playing   -- advanced by ticks

Transitions:
    play()      stopped -> playing (no-op when playing)
    pause()     playing -> stopped at the current time
    tick(dt)    playing only: advance; reaching the end rewinds to 0 and stops
    seek(t)     either state: clamp t into [0, duration], state unchanged
    skip(dt)    seek(current_time + dt)

Signals:
    positionChanged(float)   # current_time after any change
    stateChanged(str)        # 'playing' | 'stopped'
    durationChanged(float)

Timing: while playing a QTimer fires every TICK_INTERVAL_MS. Each timeout
measures the monotonic wall-clock time since the previous one and advances by
that amount, so a late timer does not make playback drift behind real time.
``tick(dt)`` with an explicit delta is the deterministic path used by tests and
by callers that drive the clock themselves.

The timer's ticks are handed to a tick target (``tick`` by default). The
Timeline aggregate installs its own dispatcher here so timer ticks are
serialized with every other mutation.
"""

from __future__ import annotations

import logging
import math
from enum import Enum
from time import perf_counter
from typing import Callable, Optional

from PySide6.QtCore import QObject, QTimer, Qt, Signal

from .. import config

logger = logging.getLogger(__name__)


class TransportState(str, Enum):
    STOPPED = "stopped"
    PLAYING = "playing"


class TransportClock(QObject):
    positionChanged = Signal(float)
    stateChanged = Signal(str)
    durationChanged = Signal(float)

    def __init__(
        self,
        duration: float = config.DEFAULT_DURATION,
        parent: Optional[QObject] = None,
        *,
        interval_ms: int = config.TICK_INTERVAL_MS,
        wall_clock: bool = True,
    ):
        super().__init__(parent)
        self._duration = max(0.0, float(duration))
        self._current_time = 0.0
        self._state = TransportState.STOPPED
        self._interval_ms = interval_ms
        # When disabled every timeout advances by exactly one nominal interval.
        self._wall_clock = wall_clock
        self._last_tick: Optional[float] = None
        self._tick_target: Callable[[float], object] = self.tick
        self._timer = QTimer(self)
        self._timer.setTimerType(Qt.TimerType.PreciseTimer)
        self._timer.timeout.connect(self._onTimeout)

    # --- Read-only state ---
    @property
    def current_time(self) -> float:
        return self._current_time

    @property
    def duration(self) -> float:
        return self._duration

    @property
    def state(self) -> TransportState:
        return self._state

    @property
    def playing(self) -> bool:
        return self._state is TransportState.PLAYING

    def set_tick_target(self, target: Optional[Callable[[float], object]]) -> None:
        self._tick_target = target if target is not None else self.tick

    # --- Transport controls ---
    def play(self) -> None:
        if self._state is TransportState.PLAYING:
            return
        self._state = TransportState.PLAYING
        self._last_tick = perf_counter()
        self._timer.start(self._interval_ms)
        logger.debug("Transport playing from %.2fs", self._current_time)
        self.stateChanged.emit(self._state.value)

    def pause(self) -> None:
        if self._state is TransportState.STOPPED:
            return
        self._stop()

    def toggle(self) -> None:
        if self.playing:
            self.pause()
        else:
            self.play()

    def tick(self, delta: float = config.TICK_SECONDS) -> None:
        if self._state is not TransportState.PLAYING:
            return
        if not math.isfinite(delta):
            return
        t = self._current_time + max(0.0, delta)
        if t >= self._duration:
            # End of timeline: rewind and stop rather than park at the end.
            self._current_time = 0.0
            self._stop()
            self.positionChanged.emit(self._current_time)
            return
        self._current_time = t
        self.positionChanged.emit(self._current_time)

    def seek(self, t: float) -> float:
        t = float(t)
        if math.isnan(t):
            t = 0.0
        self._current_time = min(max(t, 0.0), self._duration)
        self.positionChanged.emit(self._current_time)
        return self._current_time

    def skip(self, delta: float) -> float:
        return self.seek(self._current_time + delta)

    def set_duration(self, duration: float) -> None:
        duration = float(duration)
        if not math.isfinite(duration):
            raise ValueError(f"timeline duration must be finite, got {duration!r}")
        duration = max(0.0, duration)
        if duration == self._duration:
            return
        self._duration = duration
        self.durationChanged.emit(duration)
        if self._current_time > duration:
            self.seek(duration)

    # --- Internal ---
    def _stop(self) -> None:
        if self._timer.isActive():
            self._timer.stop()
        self._last_tick = None
        self._state = TransportState.STOPPED
        logger.debug("Transport stopped at %.2fs", self._current_time)
        self.stateChanged.emit(self._state.value)

    def _onTimeout(self) -> None:
        if self._state is not TransportState.PLAYING:
            self._timer.stop()
            return
        if self._wall_clock and self._last_tick is not None:
            now = perf_counter()
            delta = now - self._last_tick
            self._last_tick = now
        else:
            delta = self._interval_ms / 1000.0
        self._tick_target(delta)


__all__ = ["TransportClock", "TransportState"]
