"""Player and monster roster handed to the tracker by the campaign side."""
from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator

from table_master.models.combat import CombatantKind
from table_master.utils import normalize_id, parse_int

DEFAULT_MAX_HP = 100


class RosterEntry(BaseModel):
    id: str
    name: str
    # Raw HP field as the campaign store keeps it, e.g. "7" or "22 (5d8)".
    hp: Optional[Union[int, str]] = None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        ident = normalize_id(value)
        if ident is None:
            raise ValueError("roster entries need an id")
        return ident

    def max_hp(self, default: int = DEFAULT_MAX_HP) -> int:
        """Parsed HP, or default when missing, unreadable or not positive."""
        parsed = parse_int(self.hp)
        if parsed is None or parsed <= 0:
            return default
        return parsed


class Roster(BaseModel):
    players: list[RosterEntry] = Field(default_factory=list)
    monsters: list[RosterEntry] = Field(default_factory=list)

    def find(self, entity_id) -> tuple[RosterEntry, CombatantKind] | None:
        """Look an id up among players first, then monsters."""
        ident = normalize_id(entity_id)
        if ident is None:
            return None
        for entry in self.players:
            if entry.id == ident:
                return entry, CombatantKind.PLAYER
        for entry in self.monsters:
            if entry.id == ident:
                return entry, CombatantKind.MONSTER
        return None
