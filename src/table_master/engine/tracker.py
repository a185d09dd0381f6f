"""Initiative tracker: turn order, hit points and statuses for one encounter.

The tracker is the single owner of combat state. Every public operation
returns a TrackerOutcome and never raises: bad input (unknown ids,
unparseable numbers, duplicate entries, calls outside a running combat)
leaves the state exactly as it was and comes back as an ignored outcome.
"""
from __future__ import annotations

import functools
import logging
import random
from typing import Any, Iterable

from pydantic import ValidationError

from table_master.errors import (
    DuplicateCombatant,
    DuplicateStatus,
    EmptySession,
    InactiveSession,
    InvalidArgument,
    InvalidInitiative,
    TrackerError,
    UnknownCombatant,
    UnknownStatus,
)
from table_master.mechanics.conditions import DEAD, after_short_rest, normalize_label
from table_master.mechanics.dice import roll_initiative
from table_master.mechanics.health import clamp_hp, short_rest_recovery
from table_master.models.combat import Combatant, CombatantKind, CombatState
from table_master.models.outcome import TrackerOutcome
from table_master.models.roster import DEFAULT_MAX_HP, Roster, RosterEntry
from table_master.utils import normalize_id, parse_int

logger = logging.getLogger(__name__)


def _operation(func):
    """Wrap a tracker operation so rejections become ignored outcomes.

    Operations validate everything before their first mutation and return a
    short description on success.
    """

    @functools.wraps(func)
    def wrapper(self: InitiativeTracker, *args: Any, **kwargs: Any) -> TrackerOutcome:
        name = func.__name__
        try:
            description = func(self, *args, **kwargs)
        except TrackerError as e:
            logger.info(f"{name} ignored ({e.code}): {e}")
            return TrackerOutcome(
                operation=name,
                applied=False,
                description=str(e),
                reason=e.code,
                error=e,
                combatants=[c.model_copy(deep=True) for c in self._state.combatants],
            )
        logger.debug(f"{name}: {description}")
        return TrackerOutcome(
            operation=name,
            applied=True,
            description=description,
            combatants=[c.model_copy(deep=True) for c in self._state.combatants],
        )

    return wrapper


class InitiativeTracker:
    """Ordered initiative queue with an active-turn cursor.

    Args:
        status_stacking: when True, adding a status the combatant already has
            appends another copy; when False the call is ignored.
        keep_turn_on_insert: when True, inserting combatants moves the cursor
            so it stays on whoever had the turn; when False the cursor keeps
            its position and a warning is logged if the turn changed hands.
        default_max_hp: max HP for roster entries whose HP cannot be read.
        rng: random source for initiative rolls; the random module if None.
    """

    def __init__(
        self,
        *,
        status_stacking: bool = True,
        keep_turn_on_insert: bool = False,
        default_max_hp: int = DEFAULT_MAX_HP,
        rng: random.Random | None = None,
    ):
        self.status_stacking = status_stacking
        self.keep_turn_on_insert = keep_turn_on_insert
        self.default_max_hp = default_max_hp
        self._rng = rng
        self._state = CombatState()

    # -- Reads --

    @property
    def state(self) -> CombatState:
        """Deep copy of the current state."""
        return self._state.model_copy(deep=True)

    @property
    def active(self) -> bool:
        return self._state.active

    @property
    def active_turn_index(self) -> int:
        return self._state.active_turn_index

    @property
    def combatants(self) -> list[Combatant]:
        return list(self._state.combatants)

    @property
    def active_combatant(self) -> Combatant | None:
        if not self._state.combatants:
            return None
        return self._state.combatants[self._state.active_turn_index]

    def get(self, entity_id) -> Combatant | None:
        ident = normalize_id(entity_id)
        if ident is None:
            return None
        return self._find(ident)

    def __len__(self) -> int:
        return len(self._state.combatants)

    # -- Lifecycle --

    @_operation
    def start_combat(self) -> str:
        # An existing list is kept; only end_combat clears it.
        self._state.active = True
        self._state.active_turn_index = 0
        return "Combat started."

    @_operation
    def end_combat(self) -> str:
        self._state.active = False
        self._state.combatants = []
        self._state.active_turn_index = 0
        return "Combat ended."

    # -- Joining the initiative order --

    @_operation
    def add_combatant(self, entity_id, name, kind, initiative, max_hp) -> str:
        self._require_active()
        ident = self._require_id(entity_id)
        init = self._require_initiative(initiative)
        combatant_kind = self._require_kind(kind)
        hp = parse_int(max_hp)
        if hp is None or hp < 1:
            raise InvalidArgument(f"Max HP must be a positive integer, got {max_hp!r}")
        label = (str(name).strip() if name is not None else "") or ident
        return self._add(ident, label, combatant_kind, init, hp)

    @_operation
    def add_from_roster(self, entity_id, initiative, roster: Roster) -> str:
        """Add a roster entry by id; players are searched before monsters."""
        self._require_active()
        ident = self._require_id(entity_id)
        init = self._require_initiative(initiative)
        if not isinstance(roster, Roster):
            raise InvalidArgument(f"A roster is required, got {type(roster).__name__}")
        found = roster.find(ident)
        if found is None:
            raise UnknownCombatant(f"'{ident}' is not on the roster")
        entry, kind = found
        return self._add(ident, entry.name, kind, init, entry.max_hp(self.default_max_hp))

    @_operation
    def roll_for_monsters(self, monsters: Roster | Iterable[RosterEntry | dict]) -> str:
        """Roll a d20 for every monster not yet in the order and merge them in.

        Monsters already present keep their initiative; repeated ids in the
        roster itself are only added once.
        """
        self._require_active()
        if isinstance(monsters, Roster):
            monsters = monsters.monsters
        if monsters is None:
            raise InvalidArgument("A monster list is required")
        try:
            monsters = list(monsters)
        except TypeError:
            raise InvalidArgument(f"Monsters must be a list, got {type(monsters).__name__}") from None

        present = {c.entity_id for c in self._state.combatants}
        joined: list[Combatant] = []
        for raw in monsters:
            try:
                entry = raw if isinstance(raw, RosterEntry) else RosterEntry.model_validate(raw)
            except ValidationError as e:
                logger.warning(f"Skipping unreadable roster entry {raw!r}: {e}")
                continue
            if entry.id in present:
                continue
            present.add(entry.id)
            max_hp = entry.max_hp(self.default_max_hp)
            joined.append(Combatant(
                entity_id=entry.id,
                name=entry.name,
                kind=CombatantKind.MONSTER,
                initiative=roll_initiative(self._rng),
                hp=max_hp,
                max_hp=max_hp,
            ))

        if not joined:
            return "Every monster already has initiative."
        self._insert(joined)
        rolled = ", ".join(f"{c.name} ({c.initiative})" for c in joined)
        return f"Rolled initiative: {rolled}."

    # -- Turn cursor --

    @_operation
    def advance_turn(self) -> str:
        self._require_combatants()
        count = len(self._state.combatants)
        self._state.active_turn_index = (self._state.active_turn_index + 1) % count
        return f"{self.active_combatant.name}'s turn."

    @_operation
    def rewind_turn(self) -> str:
        self._require_combatants()
        count = len(self._state.combatants)
        self._state.active_turn_index = (self._state.active_turn_index - 1 + count) % count
        return f"{self.active_combatant.name}'s turn."

    # -- Hit points and statuses --

    @_operation
    def adjust_hp(self, entity_id, delta) -> str:
        """Heal (positive delta) or damage (negative delta), clamped to [0, max].

        Reaching 0 HP does not mark the combatant dead; that is toggle_death.
        """
        combatant = self._require_combatant(entity_id)
        amount = parse_int(delta)
        if amount is None:
            raise InvalidArgument(f"HP change must be an integer, got {delta!r}")
        combatant.hp = clamp_hp(combatant.hp + amount, combatant.max_hp)
        return f"{combatant.name}: {combatant.hp}/{combatant.max_hp} HP."

    @_operation
    def toggle_death(self, entity_id) -> str:
        combatant = self._require_combatant(entity_id)
        if DEAD in combatant.status_effects:
            combatant.status_effects = [s for s in combatant.status_effects if s != DEAD]
            combatant.hp = clamp_hp(1, combatant.max_hp)
            return f"{combatant.name} is back on their feet."
        combatant.status_effects = [*combatant.status_effects, DEAD]
        combatant.hp = 0
        return f"{combatant.name} is dead."

    @_operation
    def add_status(self, entity_id, label) -> str:
        combatant = self._require_combatant(entity_id)
        text = self._require_label(label)
        if not self.status_stacking and text in combatant.status_effects:
            raise DuplicateStatus(f"{combatant.name} is already {text}")
        combatant.status_effects.append(text)
        return f"{combatant.name} is {text}."

    @_operation
    def remove_status(self, entity_id, label) -> str:
        """Remove the first matching label; other copies stay."""
        combatant = self._require_combatant(entity_id)
        text = self._require_label(label)
        if text not in combatant.status_effects:
            raise UnknownStatus(f"{combatant.name} is not {text}")
        combatant.status_effects.remove(text)
        return f"{combatant.name} is no longer {text}."

    @_operation
    def toggle_hidden(self, entity_id) -> str:
        combatant = self._require_combatant(entity_id)
        combatant.hidden = not combatant.hidden
        state = "hidden from" if combatant.hidden else "shown to"
        return f"{combatant.name}'s details are {state} players."

    # -- Rests --

    @_operation
    def short_rest(self) -> str:
        self._require_combatants()
        for c in self._state.combatants:
            c.hp = clamp_hp(c.hp + short_rest_recovery(c.max_hp), c.max_hp)
            c.status_effects = after_short_rest(c.status_effects)
        return "Short rest: everyone recovers a quarter of their HP."

    @_operation
    def long_rest(self) -> str:
        self._require_combatants()
        for c in self._state.combatants:
            c.hp = c.max_hp
            c.status_effects = []
        return "Long rest: everyone is fully restored."

    # -- Internals --

    def _find(self, ident: str) -> Combatant | None:
        for c in self._state.combatants:
            if c.entity_id == ident:
                return c
        return None

    def _add(self, ident: str, name: str, kind: CombatantKind, initiative: int, max_hp: int) -> str:
        if self._find(ident) is not None:
            raise DuplicateCombatant(f"'{ident}' is already in the initiative order")
        combatant = Combatant(
            entity_id=ident,
            name=name,
            kind=kind,
            initiative=initiative,
            hp=max_hp,
            max_hp=max_hp,
        )
        self._insert([combatant])
        return f"{combatant.name} joins at initiative {initiative}."

    def _insert(self, joined: list[Combatant]) -> None:
        """Append and re-sort descending by initiative; ties keep arrival order."""
        combatants = self._state.combatants
        current = combatants[self._state.active_turn_index] if combatants else None

        combatants.extend(joined)
        combatants.sort(key=lambda c: c.initiative, reverse=True)

        if current is None:
            return
        position = next(i for i, c in enumerate(combatants) if c is current)
        if position == self._state.active_turn_index:
            return
        if self.keep_turn_on_insert:
            self._state.active_turn_index = position
            return
        now = combatants[self._state.active_turn_index]
        logger.warning(
            f"Turn moved from {current.name} to {now.name}: "
            f"combatants joined ahead of the active turn"
        )

    def _require_active(self) -> None:
        if not self._state.active:
            raise InactiveSession("Combat has not started")

    def _require_combatants(self) -> None:
        if not self._state.combatants:
            raise EmptySession("No combatants in the initiative order")

    def _require_id(self, entity_id) -> str:
        ident = normalize_id(entity_id)
        if ident is None:
            raise InvalidArgument("An entity id is required")
        return ident

    def _require_initiative(self, initiative) -> int:
        value = parse_int(initiative)
        if value is None:
            raise InvalidInitiative(f"Initiative must be an integer, got {initiative!r}")
        return value

    def _require_kind(self, kind) -> CombatantKind:
        if isinstance(kind, CombatantKind):
            return kind
        try:
            return CombatantKind(str(kind).strip().lower())
        except ValueError:
            raise InvalidArgument(f"Unknown combatant kind {kind!r}") from None

    def _require_combatant(self, entity_id) -> Combatant:
        ident = normalize_id(entity_id)
        combatant = self._find(ident) if ident is not None else None
        if combatant is None:
            raise UnknownCombatant(f"'{entity_id}' is not in the initiative order")
        return combatant

    def _require_label(self, label) -> str:
        text = normalize_label(label)
        if text is None:
            raise InvalidArgument("A status label is required")
        return text
