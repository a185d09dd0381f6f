"""Rich terminal display manager."""
from __future__ import annotations

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from table_master.mechanics.conditions import QUICK_STATUSES
from table_master.mechanics.dice import STANDARD_DICE
from table_master.models.roster import DEFAULT_MAX_HP, Roster

console = Console()


class Display:
    def __init__(self, console_override: Console | None = None):
        self.console = console_override or console

    def show_title_screen(self) -> None:
        title = Text()
        title.append("Table Master\n", style="bold cyan")
        title.append("Initiative, hit points and statuses for the master's table", style="dim")
        self.console.print(Panel(title, border_style="cyan", box=box.DOUBLE))

    def show_help(self, lines: list[tuple[str, str]]) -> None:
        table = Table(box=box.SIMPLE, show_header=False)
        table.add_column("Command", style="cyan")
        table.add_column("Effect")
        for command, effect in lines:
            table.add_row(escape(command), effect)
        self.console.print(table)
        quick = ", ".join(QUICK_STATUSES)
        dice = " ".join(f"d{s}" for s in STANDARD_DICE)
        self.console.print(f"[dim]Quick statuses: {quick}. Dice: {dice}.[/dim]")

    def show_roster(self, roster: Roster, default_max_hp: int = DEFAULT_MAX_HP) -> None:
        table = Table(title="Roster", box=box.ROUNDED)
        table.add_column("Id", style="cyan")
        table.add_column("Name")
        table.add_column("Kind")
        table.add_column("Max HP", justify="right")
        for entry in roster.players:
            table.add_row(escape(entry.id), escape(entry.name), "[green]Player[/green]", str(entry.max_hp(default_max_hp)))
        for entry in roster.monsters:
            table.add_row(escape(entry.id), escape(entry.name), "[red]Monster[/red]", str(entry.max_hp(default_max_hp)))
        self.console.print(table)

    def show_info(self, message: str) -> None:
        self.console.print(f"[cyan]{escape(message)}[/cyan]")

    def show_error(self, message: str) -> None:
        self.console.print(f"[bold red]{escape(message)}[/bold red]")

    def get_input(self, prompt: str = "> ") -> str:
        try:
            return self.console.input(f"[bold cyan]{escape(prompt)}[/bold cyan]").strip()
        except EOFError:
            return "quit"
