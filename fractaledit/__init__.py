"""Top-level package exports.

Public API surface (keep minimal):
 - Timeline (aggregate + mutation path), TrackStore, AssetRegistry
 - TransportClock (playhead)
 - MainWindow (UI entry point)

The model modules import no widgets; only ``MainWindow`` pulls in QtWidgets,
so it is imported lazily.
"""

from .core.assets import Asset, AssetRegistry, MediaKind  # noqa: F401
from .core.tracks import Clip, Track, TrackStore  # noqa: F401
from .core.timeline import Timeline  # noqa: F401
from .media.transport import TransportClock, TransportState  # noqa: F401

__version__ = "0.1.0"

__all__ = [
    "Asset",
    "AssetRegistry",
    "MediaKind",
    "Clip",
    "Track",
    "TrackStore",
    "Timeline",
    "TransportClock",
    "TransportState",
    "MainWindow",
]


def __getattr__(name):
    if name == "MainWindow":
        from .ui.main_window import MainWindow

        return MainWindow
    raise AttributeError(name)
