from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from table_master.errors import RosterLoadError
from table_master.models.roster import Roster

logger = logging.getLogger(__name__)

CONTENT_DIR = Path(__file__).parent
DEFAULT_ROSTER = CONTENT_DIR / "rosters" / "sample.toml"


def load_toml(filepath: Path) -> dict[str, Any]:
    with open(filepath, "rb") as f:
        return tomllib.load(f)


def load_roster(filepath: Path | str) -> Roster:
    """Load a roster from a TOML file with [[players]] and [[monsters]] tables.

    Each entry needs an id and a name; hp is optional and kept raw so the
    tracker can apply its own fallback.
    """
    path = Path(filepath)
    try:
        data = load_toml(path)
    except FileNotFoundError:
        raise RosterLoadError(f"Roster file not found: {path}") from None
    except tomllib.TOMLDecodeError as e:
        raise RosterLoadError(f"Roster file {path} is not valid TOML: {e}") from e

    try:
        roster = Roster.model_validate({
            "players": data.get("players", []),
            "monsters": data.get("monsters", []),
        })
    except ValidationError as e:
        logger.error(f"Invalid roster in {path}: {e}")
        raise RosterLoadError(f"Roster file {path} has invalid entries") from e

    logger.info(f"Loaded roster {path.name}: {len(roster.players)} players, {len(roster.monsters)} monsters")
    return roster


def load_default_roster() -> Roster:
    return load_roster(DEFAULT_ROSTER)
