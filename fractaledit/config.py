"""Editor-wide constants.

Values mirror the behaviour of the shipped editor: a 20 px/s timeline, a
100 ms transport tick and a one minute starting timeline that grows with
placed clips. Set ``FRACTALEDIT_DEBUG=1`` for verbose logging.
"""

from __future__ import annotations

import os

DEBUG = os.environ.get("FRACTALEDIT_DEBUG", "").lower() in ("1", "true", "yes", "on")

# Geometry
PIXELS_PER_SECOND = 20.0
RULER_STEP = 5  # seconds between ruler ticks

# Transport
TICK_INTERVAL_MS = 100
TICK_SECONDS = TICK_INTERVAL_MS / 1000.0
SKIP_SECONDS = 5.0

# Timeline sizing
DEFAULT_DURATION = 60.0
DURATION_MARGIN = 10.0  # headroom added when a clip runs past the end

# Clips / assets
DEFAULT_CLIP_DURATION = 5.0  # used when an asset has no nominal duration
IMPORT_DURATION = 10.0  # fallback when an imported file cannot be probed

# (id, kind, name) for the tracks every new timeline starts with.
SEED_TRACKS = (
    ("t1", "VIDEO", "VID_STREAM_01"),
    ("t2", "VIDEO", "VID_STREAM_02"),
    ("t3", "AUDIO", "AUD_CHANNEL_A"),
)

__all__ = [
    "DEBUG",
    "PIXELS_PER_SECOND",
    "RULER_STEP",
    "TICK_INTERVAL_MS",
    "TICK_SECONDS",
    "SKIP_SECONDS",
    "DEFAULT_DURATION",
    "DURATION_MARGIN",
    "DEFAULT_CLIP_DURATION",
    "IMPORT_DURATION",
    "SEED_TRACKS",
]
