"""Status labels the tracker treats specially: pure data, no I/O."""
from __future__ import annotations

from enum import Enum


class Status(str, Enum):
    DEAD = "Dead"
    POISONED = "Poisoned"
    STUNNED = "Stunned"
    BLESSED = "Blessed"


DEAD = Status.DEAD.value
POISONED = Status.POISONED.value
STUNNED = Status.STUNNED.value
BLESSED = Status.BLESSED.value

# A short rest shakes these off; everything else stays.
SHORT_REST_CLEARS: tuple[str, ...] = (POISONED, STUNNED)

# One-click statuses offered next to every combatant.
QUICK_STATUSES: tuple[str, ...] = (BLESSED, POISONED)


def normalize_label(label) -> str | None:
    """Strip a free-text status label; None if nothing is left."""
    if label is None:
        return None
    text = str(label).strip()
    return text or None


def is_dead(status_effects: list[str]) -> bool:
    return DEAD in status_effects


def after_short_rest(status_effects: list[str]) -> list[str]:
    """Statuses that survive a short rest, order kept."""
    return [s for s in status_effects if s not in SHORT_REST_CLEARS]
