"""Shared fixtures for the tracker test suite."""
from __future__ import annotations

import random

import pytest

from table_master.engine.tracker import InitiativeTracker
from table_master.models.combat import CombatantKind
from table_master.models.roster import Roster, RosterEntry


@pytest.fixture
def sample_roster() -> Roster:
    return Roster(
        players=[
            RosterEntry(id="p1", name="Aria", hp=30),
            RosterEntry(id="p2", name="Borin"),
        ],
        monsters=[
            RosterEntry(id="m1", name="Goblin", hp="7"),
            RosterEntry(id="m2", name="Bugbear", hp="27"),
            RosterEntry(id="m3", name="Ogre", hp="unknown"),
        ],
    )


@pytest.fixture
def tracker() -> InitiativeTracker:
    """A tracker with combat already started and nobody in it."""
    t = InitiativeTracker()
    t.start_combat()
    return t


@pytest.fixture
def party_tracker(tracker) -> InitiativeTracker:
    """Started tracker holding Aria (15), Goblin (10) and Bugbear (5)."""
    tracker.add_combatant("p1", "Aria", CombatantKind.PLAYER, 15, 30)
    tracker.add_combatant("m1", "Goblin", CombatantKind.MONSTER, 10, 7)
    tracker.add_combatant("m2", "Bugbear", CombatantKind.MONSTER, 5, 27)
    return tracker


@pytest.fixture
def seeded_rng():
    state = random.getstate()
    random.seed(42)
    yield
    random.setstate(state)
