"""Duration probing for imported media files.

Opens the file with MoviePy just long enough to read its duration; frames are
never decoded. Probing is I/O and must happen before a placement command is
dispatched to the timeline.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

from moviepy import AudioFileClip, VideoFileClip

from ..core.assets import MediaKind

logger = logging.getLogger(__name__)


def probe_duration(path: str, kind: MediaKind) -> Optional[float]:
    """Return the file's duration in seconds, or None when unknown.

    Images have no intrinsic duration. Unreadable files are logged and
    reported as None so the caller can fall back to a default.
    """
    if kind is MediaKind.IMAGE:
        return None
    opener = VideoFileClip if kind is MediaKind.VIDEO else AudioFileClip
    try:
        clip = opener(path)
    except (OSError, KeyError, ValueError) as e:
        logger.warning("Could not probe %s as %s: %s", path, kind.value, e)
        return None
    try:
        duration = float(getattr(clip, "duration", 0.0) or 0.0)
    finally:
        clip.close()
    return duration if duration > 0 and math.isfinite(duration) else None


__all__ = ["probe_duration"]
