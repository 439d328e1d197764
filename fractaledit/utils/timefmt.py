"""Time formatting utilities for transport labels.

`format_time` renders mm:ss.mmm for clip tooltips; `format_readout` renders the
transport counter ("12.30s / 60.00s").
"""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP

__all__ = ["format_time", "format_seconds", "format_readout"]


def _round_half_up(value: float, places: str) -> Decimal:
    return Decimal(str(value)).quantize(Decimal(places), rounding=ROUND_HALF_UP)


def format_time(seconds: float) -> str:
    """Return mm:ss.mmm, clamping negatives to zero.

    Milliseconds use ROUND_HALF_UP so 1.2345 renders as 00:01.235.
    """
    if seconds < 0:
        seconds = 0.0
    ms_total = int(_round_half_up(seconds, "0.001") * 1000)
    m, rem = divmod(ms_total, 60000)
    s, ms = divmod(rem, 1000)
    return f"{m:02d}:{s:02d}.{ms:03d}"


def format_seconds(seconds: float) -> str:
    if seconds < 0:
        seconds = 0.0
    return f"{_round_half_up(seconds, '0.01')}s"


def format_readout(current: float, duration: float) -> str:
    return f"{format_seconds(current)} / {format_seconds(duration)}"
