"""Multi-track timeline widget.

Paints the ruler, one lane per track with its clips, and the playhead. All
horizontal placement goes through ``core.geometry`` so a click at x seeks to
exactly the time drawn at x. The widget never mutates the timeline itself; it
emits requests that the window turns into timeline commands. Hovering a clip
shows its name and mm:ss.mmm span as a tooltip.

Signals:
    seekRequested(float)                    # ruler or lane click, seconds
    trackUpdateRequested(str, object)       # track id, {"locked": ...} / {"muted": ...}
    trackDeleteRequested(str)               # track id (confirmation is the caller's job)
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple

from PySide6.QtCore import QEvent, QPointF, QRectF, QSize, Qt, Signal
from PySide6.QtGui import QBrush, QColor, QPainter, QPen
from PySide6.QtWidgets import QSizePolicy, QToolTip, QWidget

from ..core import geometry
from ..core.assets import MediaKind
from ..core.timeline import Timeline
from ..core.tracks import Clip, Track
from ..utils.timefmt import format_time

HEADER_WIDTH = 192
RULER_HEIGHT = 32
LANE_HEIGHT = 96
CLIP_MARGIN = 8
BUTTON_SIZE = 16

BACKGROUND = QColor("#050505")
PANEL = QColor("#0a0f0a")
GRID = QColor("#003b00")
ACCENT = QColor("#00ff41")
DIM_ACCENT = QColor("#008f11")
ALERT = QColor(239, 68, 68)

# (fill, border) per track kind
CLIP_COLORS: Dict[MediaKind, Tuple[QColor, QColor]] = {
    MediaKind.VIDEO: (QColor("#001a00"), QColor("#00ff41")),
    MediaKind.AUDIO: (QColor("#1a0f00"), QColor(249, 115, 22)),
    MediaKind.IMAGE: (QColor("#001a1a"), QColor(6, 182, 212)),
}

KIND_GLYPHS: Dict[MediaKind, str] = {
    MediaKind.VIDEO: "V",
    MediaKind.AUDIO: "A",
    MediaKind.IMAGE: "I",
}

HEADER_BUTTONS = ("lock", "mute", "delete")


def clip_colors(kind: MediaKind) -> Tuple[QColor, QColor]:
    try:
        return CLIP_COLORS[kind]
    except KeyError:
        raise ValueError(f"no clip colours for media kind {kind!r}") from None


class TimelineView(QWidget):
    seekRequested = Signal(float)
    trackUpdateRequested = Signal(str, object)
    trackDeleteRequested = Signal(str)

    def __init__(self, timeline: Timeline, parent: QWidget | None = None):
        super().__init__(parent)
        self._timeline = timeline
        self._pps = geometry.PIXELS_PER_SECOND
        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Preferred)
        timeline.tracksChanged.connect(self._onTracksChanged)
        timeline.positionChanged.connect(lambda _t: self.update())
        timeline.durationChanged.connect(lambda _d: self._onTracksChanged())

    # --- Geometry helpers (widget coordinates) ---
    def contentX(self, t: float) -> float:
        return HEADER_WIDTH + geometry.time_to_position(t, self._pps)

    def timeAt(self, x: float) -> float:
        return geometry.position_to_time(x - HEADER_WIDTH, self._pps)

    def laneRect(self, row: int) -> QRectF:
        return QRectF(
            HEADER_WIDTH,
            RULER_HEIGHT + row * LANE_HEIGHT,
            max(0, self.width() - HEADER_WIDTH),
            LANE_HEIGHT,
        )

    def headerButtonRect(self, row: int, button: str) -> QRectF:
        index = HEADER_BUTTONS.index(button)
        top = RULER_HEIGHT + row * LANE_HEIGHT + LANE_HEIGHT - BUTTON_SIZE - 8
        left = 12 + index * (BUTTON_SIZE + 12)
        return QRectF(left, top, BUTTON_SIZE, BUTTON_SIZE)

    def clipRect(self, row: int, clip: Clip) -> QRectF:
        x, w = geometry.clip_span(clip, self._pps)
        top = RULER_HEIGHT + row * LANE_HEIGHT + CLIP_MARGIN
        return QRectF(HEADER_WIDTH + x, top, w, LANE_HEIGHT - 2 * CLIP_MARGIN)

    def rowAt(self, y: float) -> Optional[int]:
        if y < RULER_HEIGHT:
            return None
        row = int((y - RULER_HEIGHT) // LANE_HEIGHT)
        if row >= len(self._timeline.tracks):
            return None
        return row

    def clipAt(self, x: float, y: float) -> Optional[Clip]:
        row = self.rowAt(y)
        if row is None or x < HEADER_WIDTH:
            return None
        point = QPointF(x, y)
        for clip in self._timeline.tracks[row].items:
            if self.clipRect(row, clip).contains(point):
                return clip
        return None

    def toolTipTextAt(self, x: float, y: float) -> Optional[str]:
        """Clip name and its timeline span, e.g. ``KICK.WAV\\n00:03.000 - 00:05.000``."""
        clip = self.clipAt(x, y)
        if clip is None:
            return None
        return f"{clip.name}\n{format_time(clip.start_time)} - {format_time(clip.end_time)}"

    def sizeHint(self):  # type: ignore[override]
        width = HEADER_WIDTH + int(geometry.timeline_width(self._timeline.duration, self._pps))
        height = RULER_HEIGHT + LANE_HEIGHT * max(1, len(self._timeline.tracks))
        return QSize(width, height)

    def minimumSizeHint(self):  # type: ignore[override]
        return self.sizeHint()

    # --- Input ---
    def event(self, event):  # type: ignore[override]
        if event.type() == QEvent.Type.ToolTip:
            pos = event.pos()
            text = self.toolTipTextAt(pos.x(), pos.y())
            if text:
                QToolTip.showText(event.globalPos(), text, self)
            else:
                QToolTip.hideText()
                event.ignore()
            return True
        return super().event(event)

    def mousePressEvent(self, event):  # type: ignore[override]
        if event.button() != Qt.MouseButton.LeftButton:
            super().mousePressEvent(event)
            return
        pos = event.position()
        x, y = pos.x(), pos.y()
        if x < HEADER_WIDTH:
            self._headerClicked(x, y)
            return
        self.seekRequested.emit(self.timeAt(x))

    def _headerClicked(self, x: float, y: float):
        row = self.rowAt(y)
        if row is None:
            return
        track = self._timeline.tracks[row]
        point = QPointF(x, y)
        if self.headerButtonRect(row, "lock").contains(point):
            self.trackUpdateRequested.emit(track.id, {"locked": not track.locked})
        elif self.headerButtonRect(row, "mute").contains(point):
            self.trackUpdateRequested.emit(track.id, {"muted": not track.muted})
        elif self.headerButtonRect(row, "delete").contains(point):
            self.trackDeleteRequested.emit(track.id)

    def _onTracksChanged(self):
        self.updateGeometry()
        self.update()

    # --- Painting ---
    def paintEvent(self, event):  # type: ignore[override]
        p = QPainter(self)
        p.fillRect(self.rect(), BACKGROUND)
        self._paintRuler(p)
        for row, track in enumerate(self._timeline.tracks):
            self._paintLane(p, row, track)
        self._paintPlayhead(p)
        p.end()

    def _paintRuler(self, p: QPainter):
        p.fillRect(QRectF(0, 0, self.width(), RULER_HEIGHT), PANEL)
        p.setPen(QPen(GRID, 1))
        p.drawLine(0, RULER_HEIGHT - 1, self.width(), RULER_HEIGHT - 1)
        for _seconds, x, label in geometry.ruler_ticks(self._timeline.duration, pixels_per_second=self._pps):
            sx = HEADER_WIDTH + x
            p.setPen(QPen(GRID, 1))
            p.drawLine(QPointF(sx, RULER_HEIGHT - 8), QPointF(sx, RULER_HEIGHT))
            p.setPen(DIM_ACCENT)
            p.drawText(QPointF(sx - 4, RULER_HEIGHT - 12), label)

    def _paintLane(self, p: QPainter, row: int, track: Track):
        lane = self.laneRect(row)
        header = QRectF(0, lane.top(), HEADER_WIDTH, LANE_HEIGHT)
        p.fillRect(header, PANEL)
        p.fillRect(lane, QColor("#000000") if track.muted else BACKGROUND)
        p.setPen(QPen(GRID, 1))
        p.drawLine(QPointF(0, lane.bottom()), QPointF(self.width(), lane.bottom()))
        p.drawLine(QPointF(HEADER_WIDTH - 1, lane.top()), QPointF(HEADER_WIDTH - 1, lane.bottom()))

        p.setPen(ACCENT)
        p.drawText(QPointF(12, lane.top() + 20), f"{KIND_GLYPHS[track.kind]}  {track.name}")
        self._paintHeaderButtons(p, row, track)

        fill, border = clip_colors(track.kind)
        p.setOpacity(0.3 if track.muted else 0.9)
        for clip in track.items:
            block = self.clipRect(row, clip)
            p.fillRect(block, fill)
            p.setPen(QPen(border, 1))
            p.drawRect(block)
            p.setPen(QColor(255, 255, 255))
            p.drawText(block.adjusted(6, 2, -2, 0), Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignTop, clip.name)
        p.setOpacity(1.0)

        if track.locked:
            p.fillRect(lane, QColor(0, 0, 0, 128))
            p.setPen(ACCENT)
            p.drawText(lane, Qt.AlignmentFlag.AlignCenter, "LOCKED")

    def _paintHeaderButtons(self, p: QPainter, row: int, track: Track):
        states = {
            "lock": ("L", track.locked),
            "mute": ("M", track.muted),
            "delete": ("X", False),
        }
        for name in HEADER_BUTTONS:
            glyph, active = states[name]
            rect = self.headerButtonRect(row, name)
            p.setPen(QPen(ALERT if active else DIM_ACCENT, 1))
            p.setBrush(QBrush(Qt.BrushStyle.NoBrush))
            p.drawRect(rect)
            p.drawText(rect, Qt.AlignmentFlag.AlignCenter, glyph)

    def _paintPlayhead(self, p: QPainter):
        x = self.contentX(self._timeline.current_time)
        p.setPen(QPen(ACCENT, 1))
        p.drawLine(QPointF(x, 0), QPointF(x, self.height()))


__all__ = ["TimelineView", "HEADER_WIDTH", "RULER_HEIGHT", "LANE_HEIGHT", "clip_colors"]
