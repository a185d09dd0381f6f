"""Master console bootstrap: wires config, roster, tracker and display together."""
from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from table_master.engine.snapshots import Viewer, take_snapshot
from table_master.errors import ConfigError
from table_master.mechanics.dice import DiceRoll, roll
from table_master.models.outcome import TrackerOutcome

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config.toml"


def _load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load config.toml from the given path or the project root."""
    path = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH
    if not path.exists():
        if config_path is not None:
            logger.warning(f"Config file {path} not found, using defaults")
        return {}
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Config file {path} is not valid TOML: {e}") from e


def _config_int(section: dict[str, Any], table: str, key: str, default: int) -> int:
    """Read a positive integer setting, raising ConfigError otherwise."""
    value = section.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigError(f"[{table}] {key} must be a positive integer, got {value!r}")
    return value


def _config_bool(section: dict[str, Any], table: str, key: str, default: bool) -> bool:
    value = section.get(key, default)
    if not isinstance(value, bool):
        raise ConfigError(f"[{table}] {key} must be true or false, got {value!r}")
    return value


class TrackerApp:
    """Interactive master console around one InitiativeTracker."""

    def __init__(self, config_path: Path | None = None, roster_path: Path | None = None):
        self.config = _load_config(config_path)
        self.roster_path = roster_path

        console_cfg = self.config.get("console", {})
        tracker_cfg = self.config.get("tracker", {})
        self.hp_step = _config_int(console_cfg, "console", "hp_step", 5)
        view = console_cfg.get("view", Viewer.MASTER.value)
        try:
            self.viewer = Viewer(view)
        except ValueError:
            raise ConfigError(f"[console] view must be 'master' or 'player', got {view!r}") from None
        self.tracker_options = {
            "status_stacking": _config_bool(tracker_cfg, "tracker", "status_stacking", True),
            "keep_turn_on_insert": _config_bool(tracker_cfg, "tracker", "keep_turn_on_insert", False),
            "default_max_hp": _config_int(tracker_cfg, "tracker", "default_max_hp", 100),
        }

        # Lazy-initialized components
        self._tracker = None
        self._roster = None
        self._display = None
        self._combat_display = None
        self._input_handler = None

    # -- Component initialization (lazy) --

    @property
    def tracker(self):
        if self._tracker is None:
            from table_master.engine.tracker import InitiativeTracker

            self._tracker = InitiativeTracker(**self.tracker_options)
        return self._tracker

    @property
    def roster(self):
        if self._roster is None:
            from table_master.content.loader import load_default_roster, load_roster

            path = self.roster_path or self.config.get("roster", {}).get("path") or None
            self._roster = load_roster(path) if path else load_default_roster()
        return self._roster

    @property
    def display(self):
        if self._display is None:
            from table_master.cli.display import Display

            self._display = Display()
        return self._display

    @property
    def combat_display(self):
        if self._combat_display is None:
            from table_master.cli.combat_display import CombatDisplay

            self._combat_display = CombatDisplay()
        return self._combat_display

    @property
    def input_handler(self):
        if self._input_handler is None:
            from table_master.cli.input_handler import InputHandler

            self._input_handler = InputHandler()
        return self._input_handler

    # -- Commands --

    def handle_command(self, raw_input: str) -> TrackerOutcome | DiceRoll | str | None:
        """Classify and dispatch one line of console input."""
        return self.dispatch(self.input_handler.classify(raw_input))

    def dispatch(self, classified: dict) -> TrackerOutcome | DiceRoll | str | None:
        """Run a classified command against the tracker or the dice roller.

        Returns None for commands the console handles itself (meta commands)
        and for unrecognized input.
        """
        command = classified.get("command")
        target = classified.get("target")
        params = classified.get("parameters", {})
        tracker = self.tracker

        if command == "start":
            return tracker.start_combat()
        if command == "end":
            return tracker.end_combat()
        if command == "next":
            return tracker.advance_turn()
        if command == "prev":
            return tracker.rewind_turn()
        if command == "add":
            return tracker.add_from_roster(target, params.get("initiative"), self.roster)
        if command == "monsters":
            return tracker.roll_for_monsters(self.roster)
        if command == "hp":
            return tracker.adjust_hp(target, params.get("delta"))
        if command in ("damage", "heal"):
            amount = params.get("amount")
            if amount is None:
                amount = self.hp_step
            if command == "damage":
                amount = -amount if isinstance(amount, int) else f"-{amount}"
            return tracker.adjust_hp(target, amount)
        if command == "dead":
            return tracker.toggle_death(target)
        if command == "status":
            return tracker.add_status(target, params.get("label"))
        if command == "unstatus":
            return tracker.remove_status(target, params.get("label"))
        if command == "hide":
            return tracker.toggle_hidden(target)
        if command == "rest":
            if params.get("rest_type") == "long":
                return tracker.long_rest()
            return tracker.short_rest()
        if command == "roll":
            return roll(params["sides"])
        if command == "view":
            self.viewer = Viewer(target)
            return f"Board now drawn for the {self.viewer.value}."
        return None

    # -- Main loop --

    def run(self) -> None:
        """Read commands until quit, redrawing the board after each one."""
        self.display.show_title_screen()
        while True:
            self.combat_display.show_initiative_order(take_snapshot(self.tracker, self.viewer))
            prompt = "\n[Combat] > " if self.tracker.active else "\n> "
            raw_input = self.display.get_input(prompt)
            if not raw_input:
                continue

            classified = self.input_handler.classify(raw_input)
            if classified.get("command") is None:
                self.display.show_error(f"Unknown command '{raw_input}'. Type 'help' for a list.")
                continue
            if classified.get("is_meta"):
                if self._handle_meta(classified) == "break":
                    break
                continue

            self._show_result(self.dispatch(classified))

    # -- Helpers --

    def _handle_meta(self, classified: dict) -> str | None:
        """Handle a meta command. Returns 'break' to leave the loop."""
        command = classified["command"]
        if command == "quit":
            self.display.show_info("Combat state is not saved. Farewell!")
            return "break"
        if command == "help":
            self.display.show_help(self.input_handler.help_lines())
        elif command == "roster":
            self.display.show_roster(self.roster, self.tracker.default_max_hp)
        return None

    def _show_result(self, result: TrackerOutcome | DiceRoll | str | None) -> None:
        if isinstance(result, TrackerOutcome):
            self.combat_display.show_outcome(result)
        elif isinstance(result, DiceRoll):
            self.combat_display.show_dice_roll(result)
        elif result:
            self.display.show_info(result)
