from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from table_master.mechanics.conditions import is_dead


class CombatantKind(str, Enum):
    PLAYER = "player"
    MONSTER = "monster"


class Combatant(BaseModel):
    entity_id: str
    name: str
    kind: CombatantKind
    initiative: int
    hp: int
    max_hp: int
    status_effects: list[str] = Field(default_factory=list)
    hidden: bool = False

    @property
    def is_dead(self) -> bool:
        return is_dead(self.status_effects)


class CombatState(BaseModel):
    active: bool = False
    active_turn_index: int = 0
    combatants: list[Combatant] = Field(default_factory=list)
