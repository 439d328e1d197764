from __future__ import annotations

import logging
from typing import Iterable, Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QKeySequence, QShortcut
from PySide6.QtWidgets import (
    QFileDialog,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QMessageBox,
    QScrollArea,
    QSplitter,
    QVBoxLayout,
    QWidget,
)

from .. import config
from ..core.assets import Asset, AssetRegistry, MediaKind
from ..core.timeline import Timeline
from .components.transport_bar import TransportBar
from .timeline_view import TimelineView

logger = logging.getLogger(__name__)

REORDER_COMPLETE_MESSAGE = "ATOMIC REORDERING SEQUENCE COMPLETE."
DELETE_CONFIRM_MESSAGE = "CONFIRM DELETION OF TRACK PROTOCOL?"


class MainWindow(QMainWindow):
    """Editor window: asset bin, transport bar and the multi-track timeline.

    Every user action is translated into a single Timeline call; the window
    keeps no timeline state of its own.
    """

    def __init__(
        self,
        timeline: Optional[Timeline] = None,
        registry: Optional[AssetRegistry] = None,
    ):
        super().__init__()
        self.setWindowTitle("FractalEdit")
        self.setGeometry(100, 100, 1100, 700)
        self.timeline = timeline if timeline is not None else Timeline(parent=self)
        self.registry = registry if registry is not None else AssetRegistry()
        self._createMenuBar()
        self._createEditorLayout()
        self._createShortcuts()

    def _createMenuBar(self):
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("File")
        import_action = QAction("Import Media", self)
        import_action.triggered.connect(self._importMedia)
        file_menu.addAction(import_action)
        exit_action = QAction("Exit", self)
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        edit_menu = menu_bar.addMenu("Edit")
        add_menu = edit_menu.addMenu("Add Track")
        for kind in MediaKind:
            action = QAction(kind.value.title(), self)
            action.triggered.connect(lambda _checked=False, k=kind: self.timeline.add_track(k))
            add_menu.addAction(action)
        self.reorder_action = QAction("Reorder Audio", self)
        self.reorder_action.triggered.connect(self.reorderAudio)
        edit_menu.addAction(self.reorder_action)

        about_menu = menu_bar.addMenu("About")
        about_action = QAction("About FractalEdit", self)
        about_action.triggered.connect(self._showAboutDialog)
        about_menu.addAction(about_action)

    def _showAboutDialog(self):
        QMessageBox.about(
            self, "About FractalEdit", "FractalEdit\nMulti-track media timeline editor."
        )

    def _createEditorLayout(self):
        """Asset bin on the left; transport bar above the scrollable timeline."""
        splitter = QSplitter()
        splitter.setOrientation(Qt.Orientation.Horizontal)

        self.asset_bin = QListWidget()
        self.asset_bin.setSelectionMode(QListWidget.SelectionMode.SingleSelection)
        self.asset_bin.itemDoubleClicked.connect(self._onAssetActivated)
        splitter.addWidget(self.asset_bin)

        editor = QWidget()
        editor_layout = QVBoxLayout()
        editor_layout.setContentsMargins(0, 0, 0, 0)
        self.transport = TransportBar(self)
        editor_layout.addWidget(self.transport)
        self.timeline_view = TimelineView(self.timeline)
        self.timeline_scroll = QScrollArea()
        self.timeline_scroll.setWidget(self.timeline_view)
        self.timeline_scroll.setWidgetResizable(True)
        editor_layout.addWidget(self.timeline_scroll, stretch=1)
        self.status_label = QLabel("")
        editor_layout.addWidget(self.status_label)
        editor.setLayout(editor_layout)
        splitter.addWidget(editor)
        splitter.setStretchFactor(0, 1)
        splitter.setStretchFactor(1, 4)
        self.setCentralWidget(splitter)

        # View requests -> timeline commands
        self.transport.playToggled.connect(self.timeline.toggle)
        self.transport.skipRequested.connect(self.timeline.skip)
        self.timeline_view.seekRequested.connect(self.timeline.seek)
        self.timeline_view.trackUpdateRequested.connect(
            lambda track_id, changes: self.timeline.update_track(track_id, **changes)
        )
        self.timeline_view.trackDeleteRequested.connect(self.confirmDeleteTrack)

        # Timeline state -> transport readout
        self.timeline.positionChanged.connect(self._refreshReadout)
        self.timeline.durationChanged.connect(self._refreshReadout)
        self.timeline.stateChanged.connect(
            lambda state: self.transport.setPlaying(state == "playing")
        )
        self._refreshReadout()

    def _createShortcuts(self):
        QShortcut(QKeySequence(Qt.Key.Key_Space), self, activated=self.timeline.toggle)
        QShortcut(
            QKeySequence(Qt.Key.Key_Left),
            self,
            activated=lambda: self.timeline.skip(-config.SKIP_SECONDS),
        )
        QShortcut(
            QKeySequence(Qt.Key.Key_Right),
            self,
            activated=lambda: self.timeline.skip(config.SKIP_SECONDS),
        )

    def _refreshReadout(self, *_):
        self.transport.setReadout(self.timeline.current_time, self.timeline.duration)

    # --- Assets ---
    def _importMedia(self):
        paths, _ = QFileDialog.getOpenFileNames(
            self,
            "Import Media",
            "",
            "Media Files (*.mp4 *.mov *.avi *.mkv *.mp3 *.wav *.ogg *.png *.jpg *.jpeg *.gif)",
        )
        if paths:
            self.importPaths(paths)

    def importPaths(self, paths: Iterable[str]) -> list[Asset]:
        """Register files and list them in the asset bin.

        Probing reads the files, so it happens here rather than inside a
        timeline command.
        """
        imported = []
        for path in paths:
            asset = self.registry.import_file(path)
            self.addAssetToBin(asset)
            imported.append(asset)
        return imported

    def addAssetToBin(self, asset: Asset):
        duration = asset.nominal_duration or config.DEFAULT_CLIP_DURATION
        item = QListWidgetItem(f"[{asset.kind.value}] {asset.name} ({duration:.1f}s)")
        item.setData(Qt.ItemDataRole.UserRole, asset.id)
        self.asset_bin.addItem(item)

    def _onAssetActivated(self, item: QListWidgetItem):
        asset_id = item.data(Qt.ItemDataRole.UserRole)
        if asset_id:
            self.addToTimeline(asset_id)

    def addToTimeline(self, asset_id: str):
        asset = self.registry.get(asset_id)
        if asset is None:
            return None
        clip = self.timeline.place_on_track(asset)
        if clip is None:
            self.status_label.setText(f"No unlocked {asset.kind.value} track for {asset.name}")
        else:
            self.status_label.setText("")
        return clip

    # --- Track actions ---
    def _confirm(self, text: str) -> bool:
        answer = QMessageBox.question(
            self,
            "Delete Track",
            text,
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
        )
        return answer == QMessageBox.StandardButton.Yes

    def confirmDeleteTrack(self, track_id: str):
        if not self._confirm(DELETE_CONFIRM_MESSAGE):
            return None
        return self.timeline.delete_track(track_id)

    def reorderAudio(self):
        tracks = self.timeline.reorder()
        QMessageBox.information(self, "Reorder Audio", REORDER_COMPLETE_MESSAGE)
        # Back to the editing view.
        self.timeline_view.setFocus()
        return tracks


__all__ = ["MainWindow"]
