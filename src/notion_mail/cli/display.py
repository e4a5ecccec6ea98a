"""Shell display: welcome banner, help table and goodbye."""

from typing import Optional

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from notion_mail.utils.console import get_console

from .constants import COMMAND_DESCRIPTIONS, UserMessages


class ShellDisplay:
    """Coordinates the static output of the shell."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or get_console()

    def show_welcome(self) -> None:
        self.console.print(Panel(
            Align.center(f"[bold cyan]{UserMessages.WELCOME}[/bold cyan]"),
            border_style="dim cyan",
            padding=(1, 2),
        ))

    def show_help(self) -> None:
        """Print the command summary."""
        table = Table(title="Please select an option:", expand=True, show_lines=True)
        table.add_column("Command", style="green", no_wrap=True)
        table.add_column("Description", style="magenta")
        for command, description in COMMAND_DESCRIPTIONS.items():
            table.add_row(command.value, description)

        self.console.print(table)

    def show_goodbye(self) -> None:
        self.console.print(Panel(
            Align.center(UserMessages.GOODBYE),
            border_style="dim cyan",
            padding=(1, 2),
        ))
