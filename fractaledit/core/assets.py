"""Asset registry: imported and generated media available for placement.

Assets are immutable descriptors. The registry only ever grows; clips on the
timeline refer to assets by id and are unaffected by registry membership.
"""

from __future__ import annotations

import logging
import math
import mimetypes
import uuid
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional

from .. import config

logger = logging.getLogger(__name__)


class MediaKind(str, Enum):
    VIDEO = "VIDEO"
    AUDIO = "AUDIO"
    IMAGE = "IMAGE"

    @classmethod
    def from_mime(cls, mime: Optional[str]) -> "MediaKind":
        """video/* and audio/* map directly; everything else is treated as an image."""
        if mime:
            if mime.startswith("video"):
                return cls.VIDEO
            if mime.startswith("audio"):
                return cls.AUDIO
        return cls.IMAGE


def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class Asset:
    name: str
    kind: MediaKind
    source: str
    nominal_duration: Optional[float] = None  # seconds
    id: str = field(default_factory=_new_id)
    thumbnail: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.kind, MediaKind):
            # accept the plain string tag, reject anything outside the enum
            object.__setattr__(self, "kind", MediaKind(self.kind))
        d = self.nominal_duration
        if d is not None and not (d > 0 and math.isfinite(d)):
            raise ValueError(
                f"asset duration must be positive and finite, got {self.nominal_duration!r}"
            )


class AssetRegistry:
    """Ordered, append-only collection of assets keyed by id."""

    def __init__(self, assets: Optional[List[Asset]] = None):
        self._assets: Dict[str, Asset] = {}
        for asset in assets or []:
            self.add(asset)

    def add(self, asset: Asset) -> Asset:
        if asset.id in self._assets:
            raise ValueError(f"duplicate asset id {asset.id}")
        self._assets[asset.id] = asset
        return asset

    def get(self, asset_id: str) -> Optional[Asset]:
        return self._assets.get(asset_id)

    def by_kind(self, kind: MediaKind) -> List[Asset]:
        return [a for a in self._assets.values() if a.kind is kind]

    def import_file(
        self,
        path: str | Path,
        prober: Optional[Callable[[str, MediaKind], Optional[float]]] = None,
    ) -> Asset:
        """Register a local media file.

        The kind comes from the file's MIME type and the duration from probing
        the file; when probing yields nothing the import duration default is
        used.
        """
        if prober is None:
            from ..media.probe import probe_duration as prober
        p = Path(path)
        mime, _ = mimetypes.guess_type(p.name)
        kind = MediaKind.from_mime(mime)
        duration = prober(str(p), kind) or config.IMPORT_DURATION
        asset = Asset(
            name=p.name.upper(),
            kind=kind,
            source=str(p),
            nominal_duration=duration,
        )
        logger.info("Imported %s as %s (%.2fs)", asset.name, kind.value, duration)
        return self.add(asset)

    def register_generated(
        self,
        name: str,
        kind: MediaKind,
        source: str,
        duration: Optional[float] = None,
    ) -> Asset:
        """Register media produced by an external generator (no probing)."""
        asset = Asset(name=name, kind=kind, source=source, nominal_duration=duration)
        logger.info("Registered generated asset %s (%s)", name, asset.kind.value)
        return self.add(asset)

    def __iter__(self) -> Iterator[Asset]:
        return iter(list(self._assets.values()))

    def __len__(self) -> int:
        return len(self._assets)

    def __contains__(self, asset_id: object) -> bool:
        return asset_id in self._assets


__all__ = ["MediaKind", "Asset", "AssetRegistry"]
