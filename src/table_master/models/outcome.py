from __future__ import annotations

from dataclasses import dataclass, field

from table_master.errors import TrackerError
from table_master.models.combat import Combatant


@dataclass
class TrackerOutcome:
    operation: str = ""
    applied: bool = False
    description: str = ""
    reason: str | None = None
    error: TrackerError | None = None
    combatants: list[Combatant] = field(default_factory=list)

    @property
    def ignored(self) -> bool:
        return not self.applied

    def raise_for_error(self) -> None:
        """Re-raise the rejection for callers that want strict behaviour."""
        if self.error is not None:
            raise self.error
