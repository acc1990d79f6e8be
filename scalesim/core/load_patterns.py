from __future__ import annotations

import math
from typing import List

from .models import LOAD_PATTERNS


MAX_POINTS = 300


def load_at(pattern: str, base_rps: float, duration: float, time: float) -> float:
    """Request rate of ``pattern`` at ``time`` seconds into a run of ``duration``."""
    if duration <= 0:
        return base_rps

    if pattern == "spike":
        if duration * 0.3 < time < duration * 0.7:
            return base_rps * 3
        return base_rps
    if pattern == "ramp":
        return base_rps * (time / duration)
    if pattern == "wave":
        return base_rps * (1 + 0.5 * math.sin(2 * math.pi * time / (duration / 3)))
    return base_rps


def sample_times(duration: float) -> List[float]:
    if not math.isfinite(duration) or duration <= 0:
        return []
    limit = min(duration, MAX_POINTS)
    interval = duration / limit
    return [i * interval for i in range(math.ceil(limit))]


def generate_load_pattern(pattern: str, base_rps: float, duration: float) -> List[float]:
    """Evenly spaced request-rate samples over ``[0, duration)``.

    One sample per second for runs up to five minutes, capped at
    ``MAX_POINTS`` samples for longer runs. Unknown patterns are constant.
    """
    if pattern not in LOAD_PATTERNS:
        pattern = "constant"
    return [load_at(pattern, base_rps, duration, time) for time in sample_times(duration)]
