"""Time <-> horizontal position mapping for the timeline view.

Pure functions; the view and pointer handling both go through these so that a
click at x always seeks to the time drawn at x.

The round trip ``position_to_time(time_to_position(t)) == t`` is exact when
``t * pixels_per_second`` is itself a float, e.g. any multiple of 1/1024 s
below 2**30 s at 20 px/s. Other times come back within one ulp:
multiplying by 20 can round two neighbouring floats onto the same position.
"""

from __future__ import annotations

import math
from typing import List, Tuple

from .. import config
from .tracks import Clip

PIXELS_PER_SECOND = config.PIXELS_PER_SECOND


def time_to_position(t: float, pixels_per_second: float = PIXELS_PER_SECOND) -> float:
    return t * pixels_per_second


def position_to_time(x: float, pixels_per_second: float = PIXELS_PER_SECOND) -> float:
    """Inverse of time_to_position; positions left of the origin map to 0."""
    return max(0.0, x / pixels_per_second)


def clip_span(
    clip: Clip, pixels_per_second: float = PIXELS_PER_SECOND
) -> Tuple[float, float]:
    """(x, width) of a clip's rendered block."""
    return (
        time_to_position(clip.start_time, pixels_per_second),
        time_to_position(clip.duration, pixels_per_second),
    )


def timeline_width(duration: float, pixels_per_second: float = PIXELS_PER_SECOND) -> float:
    return time_to_position(max(0.0, duration), pixels_per_second)


def ruler_ticks(
    duration: float,
    step: int = config.RULER_STEP,
    pixels_per_second: float = PIXELS_PER_SECOND,
) -> List[Tuple[float, float, str]]:
    """(seconds, x, label) for each ruler mark, one every ``step`` seconds from 0."""
    if duration <= 0 or step <= 0:
        return []
    count = math.ceil(duration / step)
    return [
        (float(i * step), time_to_position(i * step, pixels_per_second), f"{i * step}s")
        for i in range(count)
    ]


__all__ = [
    "PIXELS_PER_SECOND",
    "time_to_position",
    "position_to_time",
    "clip_span",
    "timeline_width",
    "ruler_ticks",
]
