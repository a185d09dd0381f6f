"""Tests for src/table_master/mechanics/conditions.py."""
from __future__ import annotations

import pytest

from table_master.mechanics.conditions import (
    BLESSED,
    DEAD,
    POISONED,
    QUICK_STATUSES,
    SHORT_REST_CLEARS,
    STUNNED,
    after_short_rest,
    is_dead,
    normalize_label,
)


class TestNormalizeLabel:
    @pytest.mark.parametrize("raw, expected", [
        ("Poisoned", "Poisoned"),
        ("  Blessed ", "Blessed"),
        ("", None),
        ("   ", None),
        (None, None),
    ])
    def test_normalize(self, raw, expected):
        assert normalize_label(raw) == expected


class TestShortRest:
    def test_clears_only_poisoned_and_stunned(self):
        assert set(SHORT_REST_CLEARS) == {POISONED, STUNNED}

    def test_keeps_order_of_survivors(self):
        statuses = [BLESSED, POISONED, DEAD, STUNNED, "Prone", POISONED]
        assert after_short_rest(statuses) == [BLESSED, DEAD, "Prone"]

    def test_case_sensitive(self):
        assert after_short_rest(["poisoned"]) == ["poisoned"]

    def test_empty(self):
        assert after_short_rest([]) == []


class TestIsDead:
    def test_dead(self):
        assert is_dead([BLESSED, DEAD]) is True

    def test_alive(self):
        assert is_dead([BLESSED]) is False


def test_quick_statuses():
    assert QUICK_STATUSES == (BLESSED, POISONED)
