"""Browse display coordinator."""

from typing import Optional

from rich.console import Console
from rich.markup import escape

from notion_mail.core.models import BACK, LOAD_MORE, MessageRecord
from notion_mail.utils.console import get_console, print_error


class BrowseDisplay:
    """Formats choice labels and notices for the pagination browser."""

    LOAD_MORE_LABEL = "[green]Load more messages[/green]"
    BACK_LABEL = "[red]Back[/red]"

    def __init__(self, console: Optional[Console] = None):
        self.console = console or get_console()

    @staticmethod
    def record_label(record: MessageRecord) -> str:
        """Label shown for a message: sender and date, then the body."""
        return (
            f"from: [blue]{escape(record.sender)}[/blue], "
            f"date: [blue]{escape(record.created_at)}[/blue]\n"
            f"[bright_blue]{escape(record.message)}[/bright_blue]"
        )

    def control_choices(self, has_more: bool) -> list:
        """Control entries appended after the records."""
        controls = [(self.LOAD_MORE_LABEL, LOAD_MORE)] if has_more else []
        controls.append((self.BACK_LABEL, BACK))
        return controls

    def show_read_error(self) -> None:
        print_error("Error reading messages", self.console)

    def show_empty(self, recipient: str) -> None:
        print_error(f"{escape(recipient)} has no messages", self.console)
