"""User prompt capability: text input and selection from a list."""

from pathlib import Path
from typing import Iterable, Optional, Protocol, Sequence, Tuple, TypeVar

from prompt_toolkit import PromptSession
from prompt_toolkit.auto_suggest import AutoSuggestFromHistory
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.history import FileHistory
from prompt_toolkit.validation import Validator
from rich.console import Console
from rich.table import Table

from notion_mail.utils.console import get_console
from notion_mail.utils.errors import FileSystemError
from notion_mail.utils.logging import get_logger
from notion_mail.utils.paths import SHELL_HISTORY_PATH

logger = get_logger(__name__)

T = TypeVar("T")


class Prompter(Protocol):
    """The two interactions the mail client needs from a user."""

    async def prompt_text(
        self,
        label: str,
        validator: Optional[Validator] = None,
        completions: Optional[Iterable[str]] = None,
    ) -> str:
        ...

    async def prompt_select(self, label: str, choices: Sequence[Tuple[str, T]]) -> T:
        ...


def selection_validator(count: int) -> Validator:
    """Accept only a number between 1 and ``count``."""

    def is_choice(text: str) -> bool:
        text = text.strip()
        return text.isdigit() and 1 <= int(text) <= count

    return Validator.from_callable(
        is_choice,
        error_message=f"Enter a number between 1 and {count}",
        move_cursor_to_end=True,
    )


class TerminalPrompter:
    """Prompter for an interactive terminal.

    Command prompts (those given ``completions``) keep a file-backed history;
    field prompts such as message bodies do not.
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        history_path: Path = SHELL_HISTORY_PATH,
    ):
        self.console = console or get_console()

        try:
            history_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileSystemError(f"Failed to create history directory: {history_path.parent}") from e

        self.command_session = PromptSession(
            history=FileHistory(str(history_path)),
            auto_suggest=AutoSuggestFromHistory(),
        )
        self.field_session = PromptSession()

    async def prompt_text(
        self,
        label: str,
        validator: Optional[Validator] = None,
        completions: Optional[Iterable[str]] = None,
    ) -> str:
        if completions is not None:
            return await self.command_session.prompt_async(
                f"{label} ",
                validator=validator,
                validate_while_typing=False,
                completer=WordCompleter(sorted(completions)),
            )

        return await self.field_session.prompt_async(
            f"{label} ",
            validator=validator,
            validate_while_typing=False,
        )

    async def prompt_select(self, label: str, choices: Sequence[Tuple[str, T]]) -> T:
        """Show numbered choices and return the value of the one picked."""

        if not choices:
            raise ValueError("prompt_select requires at least one choice")

        table = Table(title=label, expand=True, show_lines=True, show_header=False)
        table.add_column("#", style="cyan", no_wrap=True, justify="right")
        table.add_column("Choice")
        for index, (choice_label, _) in enumerate(choices, start=1):
            table.add_row(str(index), choice_label)

        self.console.print(table)

        answer = await self.field_session.prompt_async(
            f"Choose [1-{len(choices)}]: ",
            validator=selection_validator(len(choices)),
            validate_while_typing=False,
        )
        selected = choices[int(answer.strip()) - 1]
        logger.debug(f"Selected choice {answer.strip()} of {len(choices)}")
        return selected[1]
