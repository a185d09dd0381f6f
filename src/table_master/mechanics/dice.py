"""Dice rolling: pure math, no I/O."""
from __future__ import annotations

import random
from dataclasses import dataclass

# The dice the master console offers.
STANDARD_DICE: tuple[int, ...] = (4, 6, 8, 10, 12, 20)

INITIATIVE_DIE = 20


@dataclass
class DiceRoll:
    sides: int
    result: int
    is_critical: bool = False
    is_fumble: bool = False

    @property
    def label(self) -> str:
        if self.is_critical:
            return "Critical success"
        if self.is_fumble:
            return "Critical failure"
        return "Result"


def roll(sides: int, rng: random.Random | None = None) -> DiceRoll:
    """Roll a single die with the given number of sides.

    Criticals and fumbles only exist on a d20: a natural 20 is critical, a
    natural 1 is a fumble.
    """
    if sides < 1:
        raise ValueError(f"A die needs at least one side, got {sides}")
    result = (rng or random).randint(1, sides)
    return DiceRoll(
        sides=sides,
        result=result,
        is_critical=sides == 20 and result == 20,
        is_fumble=sides == 20 and result == 1,
    )


def roll_initiative(rng: random.Random | None = None) -> int:
    """Convenience: a bare d20 with no modifier."""
    return roll(INITIATIVE_DIE, rng).result
