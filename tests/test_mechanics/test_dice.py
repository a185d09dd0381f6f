"""Tests for src/table_master/mechanics/dice.py."""
from __future__ import annotations

import random

import pytest

from table_master.mechanics.dice import STANDARD_DICE, DiceRoll, roll, roll_initiative


class _FixedRandom(random.Random):
    """Random source whose randint always returns one value."""

    def __init__(self, value: int):
        super().__init__()
        self.value = value

    def randint(self, a, b):
        return self.value


class TestRollRange:
    @pytest.mark.parametrize("sides", STANDARD_DICE)
    def test_result_within_range(self, sides, seeded_rng):
        for _ in range(100):
            result = roll(sides)
            assert isinstance(result, DiceRoll)
            assert result.sides == sides
            assert 1 <= result.result <= sides

    def test_d1_always_one(self):
        assert roll(1).result == 1

    @pytest.mark.parametrize("sides", [0, -6])
    def test_no_sides_rejected(self, sides):
        with pytest.raises(ValueError):
            roll(sides)

    def test_uses_given_rng(self):
        assert roll(12, _FixedRandom(9)).result == 9


class TestCriticalAndFumble:
    def test_natural_20_is_critical(self):
        result = roll(20, _FixedRandom(20))
        assert result.is_critical is True
        assert result.is_fumble is False
        assert result.label == "Critical success"

    def test_natural_1_is_fumble(self):
        result = roll(20, _FixedRandom(1))
        assert result.is_fumble is True
        assert result.is_critical is False
        assert result.label == "Critical failure"

    def test_middle_roll_is_plain(self):
        result = roll(20, _FixedRandom(11))
        assert not result.is_critical
        assert not result.is_fumble
        assert result.label == "Result"

    @pytest.mark.parametrize("sides", [4, 6, 8, 10, 12])
    def test_only_d20_can_crit(self, sides):
        top = roll(sides, _FixedRandom(sides))
        bottom = roll(sides, _FixedRandom(1))
        assert not top.is_critical
        assert not bottom.is_fumble


class TestRollInitiative:
    def test_range(self, seeded_rng):
        for _ in range(100):
            assert 1 <= roll_initiative() <= 20

    def test_fixed(self):
        assert roll_initiative(_FixedRandom(17)) == 17
