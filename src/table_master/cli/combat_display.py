"""Combat-specific display helpers: initiative board and dice results."""
from __future__ import annotations

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from table_master.engine.snapshots import CombatSnapshot, SnapshotEntry, Viewer
from table_master.mechanics.dice import DiceRoll
from table_master.mechanics.health import HealthBand
from table_master.models.combat import CombatantKind
from table_master.models.outcome import TrackerOutcome

console = Console()

BAND_COLORS = {
    HealthBand.HEALTHY: "green",
    HealthBand.WOUNDED: "yellow",
    HealthBand.CRITICAL: "red",
}

STATUS_COLORS = {
    "dead": "bold red",
    "poisoned": "green",
    "stunned": "yellow",
    "blessed": "bright_cyan",
}


class CombatDisplay:
    def __init__(self, console_override: Console | None = None) -> None:
        self.console = console_override or console

    def show_initiative_order(self, snapshot: CombatSnapshot) -> None:
        """Show the initiative board, active turn marked, dead rows dimmed."""
        if not snapshot.active:
            self.console.print("[dim]No combat in progress. Type 'start' to begin.[/dim]")
            return
        if not snapshot.entries:
            self.console.print("[dim]Initiative order is empty. Use 'add' or 'monsters'.[/dim]")
            return

        view = "Master view" if snapshot.viewer == Viewer.MASTER else "Player view"
        table = Table(title=f"Initiative Order [dim]({view})[/dim]", box=box.ROUNDED, show_lines=False)
        table.add_column("", width=1)
        table.add_column("Init", justify="right", style="bold yellow")
        table.add_column("Name")
        table.add_column("Kind")
        table.add_column("HP", min_width=20)
        table.add_column("Status")

        for entry in snapshot.entries:
            marker = "[bold yellow]>[/bold yellow]" if entry.is_active_turn else ""
            name = f"[bold]{escape(entry.name)}[/bold]" if entry.is_active_turn else escape(entry.name)
            if entry.hidden and snapshot.viewer == Viewer.MASTER:
                name += " [dim](hidden)[/dim]"
            kind = "[green]Player[/green]" if entry.kind == CombatantKind.PLAYER else "[red]Monster[/red]"
            table.add_row(
                marker,
                str(entry.initiative),
                name,
                kind,
                self._hp_cell(entry),
                self._status_cell(entry),
                style="dim" if entry.is_dead else None,
            )
        self.console.print(table)

    def show_dice_roll(self, result: DiceRoll) -> None:
        if result.is_critical:
            border, style = "yellow", "bold yellow"
        elif result.is_fumble:
            border, style = "red", "bold red"
        else:
            border, style = "blue", "bold white"

        content = Text(justify="center")
        content.append(f"{result.label}\n", style="dim")
        content.append(str(result.result), style=style)
        if result.is_critical:
            content.append("\nNATURAL 20", style="bold black on yellow")
        self.console.print(Panel(
            content,
            title=f"d{result.sides}",
            border_style=border,
            box=box.HEAVY if result.is_critical or result.is_fumble else box.ROUNDED,
            width=24,
        ))

    def show_outcome(self, outcome: TrackerOutcome) -> None:
        if outcome.applied:
            self.console.print(f"[green]{escape(outcome.description)}[/green]")
        else:
            self.console.print(f"[yellow]Ignored:[/yellow] {escape(outcome.description)}")

    @staticmethod
    def hp_bar(hp: int, max_hp: int, band: HealthBand, width: int = 12) -> str:
        pct = max(0.0, hp / max_hp) if max_hp > 0 else 0.0
        filled = int(pct * width)
        color = BAND_COLORS.get(band, "red")
        return f"[{color}]{'█' * filled}[/{color}][dim]{'░' * (width - filled)}[/dim] {hp}/{max_hp}"

    def _hp_cell(self, entry: SnapshotEntry) -> str:
        if entry.redacted:
            return "[dim]???[/dim]"
        return self.hp_bar(entry.hp, entry.max_hp, entry.health_band)

    @staticmethod
    def _status_cell(entry: SnapshotEntry) -> str:
        if entry.status_effects is None:
            return "[dim]???[/dim]"
        tags = []
        for status in entry.status_effects:
            color = STATUS_COLORS.get(status.lower(), "magenta")
            tags.append(f"[{color}]{escape(status)}[/{color}]")
        return " ".join(tags)
