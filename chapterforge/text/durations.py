"""Narration duration estimates."""

from __future__ import annotations

import math
from fractions import Fraction

# Narrators average 150-160 words per minute at ~5 characters per word.
CHARS_PER_SECOND = Fraction(25, 2)


def estimate_duration_seconds(character_count: int) -> int:
    """Return `ceil(character_count / 12.5)` using exact rational arithmetic."""

    if character_count < 0:
        raise ValueError("`character_count` must not be negative.")
    return math.ceil(Fraction(character_count) / CHARS_PER_SECOND)


def format_duration(seconds: int) -> str:
    """Format seconds as `1h 5m`, `3m 20s`, or `45s`."""

    hours, remainder = divmod(max(0, int(seconds)), 3600)
    minutes, secs = divmod(remainder, 60)
    if hours > 0:
        return f"{hours}h {minutes}m"
    if minutes > 0:
        return f"{minutes}m {secs}s"
    return f"{secs}s"
