"""Snapshot builder: the ordered view of a combat handed to renderers.

The master sees everything. Players see the order and names of every
combatant, but hit points and statuses of hidden combatants are withheld.
"""
from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel, Field

from table_master.mechanics.health import HealthBand, health_band
from table_master.models.combat import Combatant, CombatantKind

if TYPE_CHECKING:
    from table_master.engine.tracker import InitiativeTracker


class Viewer(str, Enum):
    MASTER = "master"
    PLAYER = "player"


class SnapshotEntry(BaseModel):
    position: int
    entity_id: str
    name: str
    kind: CombatantKind
    initiative: int
    is_active_turn: bool = False
    is_dead: bool = False
    hidden: bool = False
    hp: Optional[int] = None
    max_hp: Optional[int] = None
    health_band: Optional[HealthBand] = None
    status_effects: Optional[list[str]] = None

    @property
    def redacted(self) -> bool:
        return self.hp is None


class CombatSnapshot(BaseModel):
    viewer: Viewer
    active: bool
    active_turn_index: int
    entries: list[SnapshotEntry] = Field(default_factory=list)
    captured_at: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    @property
    def active_entry(self) -> SnapshotEntry | None:
        for entry in self.entries:
            if entry.is_active_turn:
                return entry
        return None


def _entry(position: int, combatant: Combatant, is_active_turn: bool, viewer: Viewer) -> SnapshotEntry:
    entry = SnapshotEntry(
        position=position,
        entity_id=combatant.entity_id,
        name=combatant.name,
        kind=combatant.kind,
        initiative=combatant.initiative,
        is_active_turn=is_active_turn,
        is_dead=combatant.is_dead,
        hidden=combatant.hidden,
    )
    if combatant.hidden and viewer == Viewer.PLAYER:
        return entry
    entry.hp = combatant.hp
    entry.max_hp = combatant.max_hp
    entry.health_band = health_band(combatant.hp, combatant.max_hp)
    entry.status_effects = list(combatant.status_effects)
    return entry


def take_snapshot(tracker: InitiativeTracker, viewer: Viewer = Viewer.MASTER) -> CombatSnapshot:
    """Capture the tracker's order, cursor and per-combatant details."""
    viewer = Viewer(viewer)
    index = tracker.active_turn_index
    entries = [
        _entry(i, c, i == index, viewer)
        for i, c in enumerate(tracker.combatants)
    ]
    return CombatSnapshot(
        viewer=viewer,
        active=tracker.active,
        active_turn_index=index,
        entries=entries,
    )
