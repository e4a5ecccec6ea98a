"""Interactive shell for NotionMail."""

from __future__ import annotations

import asyncio
import sys
from typing import Optional

from rich.console import Console
from rich.markup import escape

from notion_mail.core.operations import MessageOperations
from notion_mail.core.schema import MESSAGE_SCHEMA
from notion_mail.core.store import NotionRecordStore, create_notion_client
from notion_mail.features.browse import PaginationBrowser
from notion_mail.utils.config import ConfigManager
from notion_mail.utils.console import get_console, print_error, print_warning
from notion_mail.utils.errors import NotionMailError
from notion_mail.utils.logging import get_logger, init_logging

from .constants import UserMessages
from .dispatcher import CommandDispatcher
from .display import ShellDisplay
from .inputs import get_command
from .prompts import Prompter, TerminalPrompter
from .sanitize import Command

logger = get_logger(__name__)


class MailShell:
    """Interactive REPL: prompt for a command, dispatch it, repeat until exit."""

    def __init__(
        self,
        dispatcher: CommandDispatcher,
        prompter: Prompter,
        console: Optional[Console] = None,
    ) -> None:
        self.dispatcher = dispatcher
        self.prompter = prompter
        self.console = console or get_console()
        self.display = ShellDisplay(self.console)

    async def read_command(self) -> str:
        """Read one validated command. Closed input counts as ``exit``."""
        try:
            return await get_command(self.prompter)
        except EOFError:
            logger.info("Input closed, exiting")
            return Command.EXIT.value

    async def run(self) -> int:
        """Run the interactive shell.

        Returns:
            Exit code (0 for success)
        """
        self.display.show_welcome()
        self.display.show_help()

        while True:
            try:
                command = await self.read_command()
            except KeyboardInterrupt:
                self.console.print("")
                continue

            try:
                should_exit = await self.dispatcher.dispatch(command)
            except KeyboardInterrupt:
                logger.info("Command cancelled by user")
                print_warning(UserMessages.CANCELLED, self.console)
                continue

            if should_exit:
                break

        self.display.show_goodbye()
        return 0


def build_shell(
    config_manager: ConfigManager, console: Optional[Console] = None
) -> tuple[MailShell, NotionRecordStore]:
    """Wire the shell and its collaborators together.

    This is the only place the Notion client is constructed.
    """
    console = console or get_console()
    notion_config = config_manager.notion

    store = NotionRecordStore(
        create_notion_client(notion_config),
        notion_config.database_id,
        MESSAGE_SCHEMA,
    )
    operations = MessageOperations(store, MESSAGE_SCHEMA)
    prompter = TerminalPrompter(console)
    browser = PaginationBrowser(
        operations, prompter, page_size=notion_config.page_size, console=console
    )
    dispatcher = CommandDispatcher(operations, browser, prompter, console)

    return MailShell(dispatcher, prompter, console), store


async def _run_shell(shell: MailShell, store: NotionRecordStore) -> int:
    try:
        return await shell.run()
    finally:
        await store.aclose()


def main() -> int:
    """Main entry point for NotionMail.

    Returns:
        Exit code (0 for success, >0 for errors)
    """
    console = get_console()

    try:
        init_logging()
        config_manager = ConfigManager()
        init_logging(config_manager.get_logging_config()["log_level"])
        MESSAGE_SCHEMA.validate()
        shell, store = build_shell(config_manager, console)

    except NotionMailError as e:
        logger.info(f"Startup failed: {e.message}")
        print_error(f"Configuration error: {escape(e.message)}", console)
        return 1

    try:
        return asyncio.run(_run_shell(shell, store))

    except KeyboardInterrupt:
        logger.warning("Application interrupted by user")
        console.print("\n[yellow]Interrupted by user[/yellow]")
        return 130  # Standard SIGINT exit code


if __name__ == "__main__":
    sys.exit(main())
