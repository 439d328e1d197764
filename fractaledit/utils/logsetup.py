"""Logging bootstrap for the editor.

Modules log through ``logging.getLogger(__name__)``; this only attaches a
stdout handler to the package logger once.
"""

from __future__ import annotations

import logging
import sys

from .. import config

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: int | None = None) -> logging.Logger:
    logger = logging.getLogger("fractaledit")
    if level is None:
        level = logging.DEBUG if config.DEBUG else logging.INFO
    logger.setLevel(level)
    if not any(getattr(h, "_fractaledit", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._fractaledit = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger


__all__ = ["setup_logging"]
