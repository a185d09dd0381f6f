"""Hit point arithmetic: pure calculations, no I/O."""
from __future__ import annotations

from enum import Enum

SHORT_REST_FRACTION = 0.25


class HealthBand(str, Enum):
    HEALTHY = "healthy"
    WOUNDED = "wounded"
    CRITICAL = "critical"


def clamp_hp(hp: int, max_hp: int) -> int:
    """Clamp HP between 0 and max."""
    return max(0, min(hp, max_hp))


def short_rest_recovery(max_hp: int) -> int:
    """HP regained on a short rest: a quarter of max, rounded down."""
    return int(max_hp * SHORT_REST_FRACTION)


def health_band(hp: int, max_hp: int) -> HealthBand:
    """Bucket current HP for display: above half, above a quarter, or worse."""
    if max_hp <= 0:
        return HealthBand.CRITICAL
    if hp > max_hp * 0.5:
        return HealthBand.HEALTHY
    if hp > max_hp * 0.25:
        return HealthBand.WOUNDED
    return HealthBand.CRITICAL
