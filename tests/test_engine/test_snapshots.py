"""Tests for src/table_master/engine/snapshots.py."""
from __future__ import annotations

import json

from table_master.engine.snapshots import CombatSnapshot, Viewer, take_snapshot
from table_master.engine.tracker import InitiativeTracker
from table_master.mechanics.conditions import DEAD, POISONED
from table_master.mechanics.health import HealthBand


class TestMasterView:
    def test_order_and_cursor(self, party_tracker):
        party_tracker.advance_turn()
        snap = take_snapshot(party_tracker)
        assert snap.viewer == Viewer.MASTER
        assert snap.active is True
        assert [e.entity_id for e in snap.entries] == ["p1", "m1", "m2"]
        assert [e.position for e in snap.entries] == [0, 1, 2]
        assert snap.active_entry.entity_id == "m1"
        assert sum(e.is_active_turn for e in snap.entries) == 1

    def test_hidden_details_visible_to_master(self, party_tracker):
        party_tracker.toggle_hidden("m1")
        party_tracker.add_status("m1", POISONED)
        goblin = take_snapshot(party_tracker, Viewer.MASTER).entries[1]
        assert goblin.hidden is True
        assert goblin.hp == 7
        assert goblin.status_effects == [POISONED]

    def test_health_band_and_dead(self, party_tracker):
        party_tracker.adjust_hp("p1", -25)
        party_tracker.toggle_death("m2")
        entries = {e.entity_id: e for e in take_snapshot(party_tracker).entries}
        assert entries["p1"].health_band == HealthBand.CRITICAL
        assert entries["m1"].health_band == HealthBand.HEALTHY
        assert entries["m2"].is_dead is True
        assert entries["m2"].status_effects == [DEAD]


class TestPlayerView:
    def test_hidden_details_withheld(self, party_tracker):
        party_tracker.toggle_hidden("m1")
        party_tracker.add_status("m1", POISONED)
        goblin = take_snapshot(party_tracker, Viewer.PLAYER).entries[1]
        assert goblin.name == "Goblin"
        assert goblin.initiative == 10
        assert goblin.redacted
        assert goblin.hp is None
        assert goblin.max_hp is None
        assert goblin.health_band is None
        assert goblin.status_effects is None

    def test_visible_details_shown(self, party_tracker):
        aria = take_snapshot(party_tracker, "player").entries[0]
        assert aria.hp == 30
        assert aria.status_effects == []
        assert not aria.redacted

    def test_snapshot_does_not_alias_state(self, party_tracker):
        party_tracker.add_status("p1", POISONED)
        snap = take_snapshot(party_tracker, Viewer.PLAYER)
        snap.entries[0].status_effects.append("Tampered")
        assert party_tracker.get("p1").status_effects == [POISONED]


class TestSerialisation:
    def test_json_round_trip(self, party_tracker):
        party_tracker.toggle_hidden("m2")
        snap = take_snapshot(party_tracker, Viewer.PLAYER)
        data = json.loads(snap.model_dump_json())
        assert data["viewer"] == "player"
        assert data["entries"][2]["hp"] is None
        assert CombatSnapshot.model_validate(data).entries[2].name == "Bugbear"

    def test_idle_tracker(self):
        snap = take_snapshot(InitiativeTracker())
        assert snap.active is False
        assert snap.entries == []
        assert snap.active_entry is None
