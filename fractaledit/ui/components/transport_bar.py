"""Transport bar: skip back, play/pause, skip forward and a time readout.

The bar only emits requests; the window turns them into timeline commands
and pushes state back through ``setPlaying`` / ``setReadout``.

Signals:
    playToggled()          # play/pause button
    skipRequested(float)   # signed seconds (-SKIP_SECONDS / +SKIP_SECONDS)
"""

from __future__ import annotations

from PySide6.QtCore import Signal
from PySide6.QtWidgets import QHBoxLayout, QLabel, QPushButton, QWidget

from ... import config
from ...utils.timefmt import format_readout


class TransportBar(QWidget):
    playToggled = Signal()
    skipRequested = Signal(float)

    def __init__(self, parent=None, *, skip_seconds: float = config.SKIP_SECONDS):
        super().__init__(parent)
        self._skip_seconds = skip_seconds
        layout = QHBoxLayout()
        layout.setContentsMargins(2, 2, 2, 2)
        layout.setSpacing(4)
        self.btn_back = QPushButton("⏮")
        self.btn_play = QPushButton("▶")
        self.btn_fwd = QPushButton("⏭")
        self.btn_back.setToolTip(f"Back {skip_seconds:g}s")
        self.btn_fwd.setToolTip(f"Forward {skip_seconds:g}s")
        for b in (self.btn_back, self.btn_play, self.btn_fwd):
            b.setFixedHeight(24)
            b.setMinimumWidth(32)
            layout.addWidget(b)
        layout.addStretch(1)
        self.readout = QLabel(format_readout(0.0, 0.0))
        layout.addWidget(self.readout)
        self.setLayout(layout)

        self.btn_back.clicked.connect(lambda: self.skipRequested.emit(-self._skip_seconds))
        self.btn_fwd.clicked.connect(lambda: self.skipRequested.emit(self._skip_seconds))
        self.btn_play.clicked.connect(self.playToggled.emit)

    def setPlaying(self, playing: bool):
        self.btn_play.setText("⏸" if playing else "▶")

    def setReadout(self, current: float, duration: float):
        self.readout.setText(format_readout(current, duration))


__all__ = ["TransportBar"]
