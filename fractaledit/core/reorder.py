"""Bulk reorder: shuffle every unlocked audio track and re-pack it from t=0.

The shuffle is Fisher-Yates driven by an injectable random source, so every
ordering of a track's clips is equally likely and tests can seed it. Input
tracks are never mutated; the result is a complete replacement list that the
caller commits in one step.
"""

from __future__ import annotations

import logging
import random
from dataclasses import replace
from typing import List, MutableSequence, Optional, Protocol, Sequence, TypeVar

from .assets import MediaKind
from .tracks import Clip, Track

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RandomSource(Protocol):
    def randrange(self, stop: int) -> int: ...


def fisher_yates(items: MutableSequence[T], rng: RandomSource) -> None:
    """Shuffle ``items`` in place, uniformly over all permutations."""
    for i in range(len(items) - 1, 0, -1):
        j = rng.randrange(i + 1)
        items[i], items[j] = items[j], items[i]


def repack(items: Sequence[Clip]) -> List[Clip]:
    """Lay clips end-to-end from 0 in their current order."""
    packed: List[Clip] = []
    cursor = 0.0
    for clip in items:
        packed.append(replace(clip, start_time=cursor))
        cursor += clip.duration
    return packed


def is_reorderable(track: Track) -> bool:
    return track.kind is MediaKind.AUDIO and not track.locked


def reorder(tracks: Sequence[Track], rng: Optional[RandomSource] = None) -> List[Track]:
    if rng is None:
        rng = random.Random()
    result: List[Track] = []
    shuffled = 0
    for track in tracks:
        if not is_reorderable(track):
            result.append(track)
            continue
        items = list(track.items)
        fisher_yates(items, rng)
        result.append(replace(track, items=repack(items)))
        shuffled += 1
    logger.info("Reordered %d audio track(s)", shuffled)
    return result


__all__ = ["RandomSource", "fisher_yates", "repack", "is_reorderable", "reorder"]
