"""Tests for the initiative board and dice rendering."""
from __future__ import annotations

import io

import pytest
from rich.console import Console

from table_master.cli.combat_display import CombatDisplay
from table_master.engine.snapshots import Viewer, take_snapshot
from table_master.engine.tracker import InitiativeTracker
from table_master.mechanics.dice import DiceRoll
from table_master.mechanics.health import HealthBand
from table_master.models.outcome import TrackerOutcome


@pytest.fixture
def recorder():
    return Console(file=io.StringIO(), record=True, width=120, color_system=None)


@pytest.fixture
def display(recorder):
    return CombatDisplay(console_override=recorder)


class TestInitiativeBoard:
    def test_idle(self, display, recorder):
        display.show_initiative_order(take_snapshot(InitiativeTracker()))
        assert "No combat in progress" in recorder.export_text()

    def test_empty_order(self, display, recorder, tracker):
        display.show_initiative_order(take_snapshot(tracker))
        assert "Initiative order is empty" in recorder.export_text()

    def test_rows_in_order(self, display, recorder, party_tracker):
        display.show_initiative_order(take_snapshot(party_tracker))
        text = recorder.export_text()
        assert "Initiative Order" in text
        assert text.index("Aria") < text.index("Goblin") < text.index("Bugbear")
        assert "30/30" in text
        assert "27/27" in text

    def test_active_marker(self, display, recorder, party_tracker):
        party_tracker.advance_turn()
        display.show_initiative_order(take_snapshot(party_tracker))
        goblin_line = next(line for line in recorder.export_text().splitlines() if "Goblin" in line)
        assert ">" in goblin_line

    def test_master_sees_hidden_flag(self, display, recorder, party_tracker):
        party_tracker.toggle_hidden("m1")
        display.show_initiative_order(take_snapshot(party_tracker, Viewer.MASTER))
        text = recorder.export_text()
        assert "(hidden)" in text
        assert "7/7" in text

    def test_player_view_redacts(self, display, recorder, party_tracker):
        party_tracker.toggle_hidden("m1")
        party_tracker.add_status("m1", "Poisoned")
        display.show_initiative_order(take_snapshot(party_tracker, Viewer.PLAYER))
        text = recorder.export_text()
        assert "Goblin" in text
        assert "???" in text
        assert "(hidden)" not in text
        assert "7/7" not in text
        assert "Poisoned" not in text

    def test_markup_in_names_is_escaped(self, display, recorder, tracker):
        tracker.add_combatant("m1", "[bold]Boss[/bold]", "monster", 10, 10)
        tracker.add_status("m1", "[red]Cursed")
        display.show_initiative_order(take_snapshot(tracker))
        text = recorder.export_text()
        assert "[bold]Boss[/bold]" in text
        assert "[red]Cursed" in text


class TestHpBar:
    def test_half(self):
        bar = CombatDisplay.hp_bar(15, 30, HealthBand.WOUNDED, width=10)
        assert bar == "[yellow]█████[/yellow][dim]░░░░░[/dim] 15/30"

    def test_full(self):
        assert CombatDisplay.hp_bar(7, 7, HealthBand.HEALTHY, width=4).startswith("[green]████[/green]")

    def test_zero_max(self):
        bar = CombatDisplay.hp_bar(0, 0, HealthBand.CRITICAL, width=4)
        assert bar == "[red][/red][dim]░░░░[/dim] 0/0"


class TestDiceAndOutcomes:
    def test_critical(self, display, recorder):
        display.show_dice_roll(DiceRoll(sides=20, result=20, is_critical=True))
        text = recorder.export_text()
        assert "Critical success" in text
        assert "NATURAL 20" in text

    def test_fumble(self, display, recorder):
        display.show_dice_roll(DiceRoll(sides=20, result=1, is_fumble=True))
        assert "Critical failure" in recorder.export_text()

    def test_plain(self, display, recorder):
        display.show_dice_roll(DiceRoll(sides=6, result=4))
        text = recorder.export_text()
        assert "d6" in text
        assert "Result" in text
        assert "NATURAL 20" not in text

    def test_applied_outcome(self, display, recorder):
        display.show_outcome(TrackerOutcome(operation="advance_turn", applied=True, description="Goblin's turn."))
        assert "Goblin's turn." in recorder.export_text()

    def test_ignored_outcome(self, display, recorder):
        display.show_outcome(TrackerOutcome(operation="adjust_hp", description="No combatant 'zz'.", reason="unknown_combatant"))
        assert "Ignored: No combatant 'zz'." in recorder.export_text()
