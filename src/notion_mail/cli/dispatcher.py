"""Command dispatch for the interactive shell."""

from typing import Awaitable, Callable, Dict, Optional

from rich.console import Console
from rich.markup import escape

from notion_mail.core.operations import MessageOperations
from notion_mail.features.browse import PaginationBrowser
from notion_mail.utils.console import get_console, print_error, print_success
from notion_mail.utils.errors import ErrorHandler, format_error_message
from notion_mail.utils.logging import async_log_call, get_logger

from .constants import CommandPrompts, UserMessages
from .display import ShellDisplay
from .inputs import get_message, get_recipient, get_sender
from .prompts import Prompter
from .sanitize import Command

logger = get_logger(__name__)


class CommandDispatcher:
    """Runs one command per call and reports whether the shell should exit."""

    def __init__(
        self,
        operations: MessageOperations,
        browser: PaginationBrowser,
        prompter: Prompter,
        console: Optional[Console] = None,
    ):
        self.operations = operations
        self.browser = browser
        self.prompter = prompter
        self.console = console or get_console()
        self.display = ShellDisplay(self.console)
        self._handlers: Dict[Command, Callable[[], Awaitable[None]]] = {
            Command.SEND: self.handle_send,
            Command.READ: self.handle_read,
            Command.DELETE: self.handle_delete,
            Command.HELP: self.handle_help,
        }

    @async_log_call
    async def dispatch(self, command: str) -> bool:
        """Run a cleaned, validated command.

        Returns:
            True if the shell should exit, False otherwise
        """
        try:
            token = Command(command)
        except ValueError:
            logger.warning(f"Unknown command reached dispatcher: {command!r}")
            print_error(UserMessages.UNKNOWN_COMMAND, self.console)
            return False

        if token is Command.EXIT:
            return True

        try:
            await self._handlers[token]()

        except Exception as e:
            ErrorHandler.handle(e, context=f"Command '{token.value}'")
            print_error(escape(format_error_message(e)), self.console)

        return False

    async def handle_send(self) -> None:
        """Prompt for the message fields and create the record."""
        sender = await get_sender(self.prompter)
        recipient = await get_recipient(self.prompter)
        message = await get_message(self.prompter)

        if await self.operations.send(sender, recipient, message):
            print_success(UserMessages.SEND_SUCCESS, self.console)
        else:
            print_error(UserMessages.SEND_FAILURE, self.console)

    async def handle_read(self) -> None:
        recipient = await get_recipient(self.prompter)
        await self.browser.browse(recipient, CommandPrompts.READ_MESSAGES)

    async def handle_delete(self) -> None:
        """Let the user pick a message and archive it."""
        recipient = await get_recipient(self.prompter)
        record_id = await self.browser.browse(recipient, CommandPrompts.DELETE_MESSAGES)

        # user backed out, mailbox was empty or the read failed
        if record_id is None:
            return

        if await self.operations.delete(record_id):
            print_success(UserMessages.DELETE_SUCCESS, self.console)
        else:
            print_error(UserMessages.DELETE_FAILURE, self.console)

    async def handle_help(self) -> None:
        self.display.show_help()
