"""Typer CLI application."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from table_master.errors import ConfigError, RosterLoadError

app = typer.Typer(
    name="table-master",
    help="Initiative tracker for the tabletop RPG master",
    no_args_is_help=False,
)


@app.command()
def run(
    roster: Optional[Path] = typer.Option(None, "--roster", "-r", help="Roster TOML file"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Config TOML file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show tracker logging"),
) -> None:
    """Open the master console."""
    from table_master.app import TrackerApp
    from table_master.log import setup_logging

    setup_logging(logging.DEBUG if verbose else logging.WARNING)
    try:
        tracker_app = TrackerApp(config_path=config, roster_path=roster)
        tracker_app.run()
    except (ConfigError, RosterLoadError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


@app.command("roll")
def roll_dice(
    sides: int = typer.Argument(20, help="Number of sides"),
    count: int = typer.Option(1, "--count", "-n", help="How many dice to roll"),
) -> None:
    """Roll one or more dice."""
    from table_master.cli.combat_display import CombatDisplay
    from table_master.mechanics.dice import roll

    if sides < 1:
        raise typer.BadParameter("a die needs at least one side", param_hint="SIDES")
    display = CombatDisplay()
    for _ in range(max(count, 1)):
        display.show_dice_roll(roll(sides))


@app.command()
def roster(
    path: Optional[Path] = typer.Argument(None, help="Roster TOML file (bundled sample if omitted)"),
) -> None:
    """List the players and monsters in a roster."""
    from table_master.cli.display import Display
    from table_master.content.loader import load_default_roster, load_roster

    try:
        loaded = load_roster(path) if path else load_default_roster()
    except RosterLoadError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    Display().show_roster(loaded)


if __name__ == "__main__":
    app()
