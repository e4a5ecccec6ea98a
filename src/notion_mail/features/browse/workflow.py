"""Paginated message browsing."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from rich.console import Console

from notion_mail.core.models import BACK, Back, Choice, LoadMore, MessageRecord, RecordChoice
from notion_mail.core.operations import MessageOperations
from notion_mail.core.store import DEFAULT_PAGE_SIZE
from notion_mail.cli.prompts import Prompter
from notion_mail.utils.logging import async_log_call, get_logger, log_event

from .display import BrowseDisplay

logger = get_logger(__name__)


class BrowseState(Enum):
    FETCHING = "fetching"
    PRESENTING = "presenting"
    DONE = "done"


@dataclass
class BrowseSession:
    """State of one browse invocation.

    Records are only ever appended, in the order they were fetched. The cursor
    belongs to this session's recipient filter and is never shared.
    """

    recipient: str
    records: List[MessageRecord] = field(default_factory=list)
    cursor: Optional[str] = None
    state: BrowseState = BrowseState.FETCHING
    selection: Optional[str] = None
    pages_fetched: int = 0

    def finish(self, selection: Optional[str] = None) -> None:
        self.selection = selection
        self.state = BrowseState.DONE


class PaginationBrowser:
    """Lets the user page through a recipient's messages and pick one."""

    def __init__(
        self,
        operations: MessageOperations,
        prompter: Prompter,
        page_size: int = DEFAULT_PAGE_SIZE,
        console: Optional[Console] = None,
    ):
        self.operations = operations
        self.prompter = prompter
        self.page_size = page_size
        self.display = BrowseDisplay(console)

    @async_log_call
    async def browse(self, recipient: str, prompt_label: str) -> Optional[str]:
        """Run a browse session for ``recipient``.

        Returns:
            The id of the selected message, or None if the user went back,
            the mailbox was empty, or a query failed.
        """
        session = BrowseSession(recipient=recipient)

        while session.state is not BrowseState.DONE:
            if session.state is BrowseState.FETCHING:
                await self._fetch(session)
            else:
                await self._present(session, prompt_label)

        log_event(
            "browse_finished",
            f"Browse finished for {recipient}",
            pages=session.pages_fetched,
            records=len(session.records),
            selected=session.selection is not None,
        )
        return session.selection

    async def _fetch(self, session: BrowseSession) -> None:
        requested_cursor = session.cursor

        page = await self.operations.read(
            session.recipient, cursor=requested_cursor, page_size=self.page_size
        )

        if page is None:
            self.display.show_read_error()
            session.finish()
            return

        session.pages_fetched += 1

        if not page.records and requested_cursor is None:
            self.display.show_empty(session.recipient)
            session.finish()
            return

        session.cursor = page.continuation
        session.records.extend(page.records)
        session.state = BrowseState.PRESENTING

    async def _present(self, session: BrowseSession, prompt_label: str) -> None:
        choices = [
            (self.display.record_label(record), RecordChoice(record.id))
            for record in session.records
        ]
        choices.extend(self.display.control_choices(has_more=session.cursor is not None))

        try:
            selected: Choice = await self.prompter.prompt_select(prompt_label, choices)
        except KeyboardInterrupt:
            logger.info("Browse cancelled by user")
            selected = BACK

        if isinstance(selected, LoadMore):
            session.state = BrowseState.FETCHING
        elif isinstance(selected, Back):
            session.finish()
        else:
            session.finish(selected.record_id)
