"""Message operations (business logic).

Each operation is a boundary: store failures are logged and reduced to a
``False``/``None`` result so callers never see an exception.
"""

from typing import Optional

from notion_mail.utils.errors import ErrorHandler
from notion_mail.utils.logging import async_log_call, get_logger, log_event

from .models import Page
from .query import build_create_payload, build_equality_filter
from .schema import MESSAGE, MESSAGE_SCHEMA, RECIPIENT, SENDER, Schema
from .store import DEFAULT_PAGE_SIZE, RecordStore

logger = get_logger(__name__)


class MessageOperations:
    """Send, read and delete messages through a RecordStore."""

    def __init__(self, store: RecordStore, schema: Schema = MESSAGE_SCHEMA):
        self.store = store
        self.schema = schema

    @async_log_call
    async def send(self, sender: str, recipient: str, message: str) -> bool:
        """Create a message record.

        Returns:
            True if the record was created
        """
        if not recipient:
            logger.warning("Refusing to send a message without a recipient")
            return False

        try:
            properties = build_create_payload(
                self.schema,
                {SENDER: sender, RECIPIENT: recipient, MESSAGE: message},
            )
            await self.store.create(properties)

        except Exception as e:
            ErrorHandler.handle(e, context="Sending message", log_traceback=False)
            return False

        logger.info(f"Sent message from {sender} to {recipient}")
        log_event("message_sent", "Message sent", sender=sender, recipient=recipient)
        return True

    @async_log_call
    async def read(
        self,
        recipient: str,
        cursor: Optional[str] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> Optional[Page]:
        """Fetch one page of messages addressed to ``recipient``.

        Returns:
            The page, or None if the query failed. An empty page is not a failure.
        """
        try:
            query_filter = build_equality_filter(
                self.schema.column(RECIPIENT), "equals", recipient
            )
            return await self.store.query(query_filter, cursor=cursor, page_size=page_size)

        except Exception as e:
            ErrorHandler.handle(e, context="Reading messages", log_traceback=False)
            return None

    @async_log_call
    async def delete(self, record_id: str) -> bool:
        """Archive a message record.

        Returns:
            True if the record was archived
        """
        try:
            await self.store.archive(record_id)

        except Exception as e:
            ErrorHandler.handle(e, context="Deleting message", log_traceback=False)
            return False

        logger.info(f"Deleted message {record_id}")
        log_event("message_deleted", "Message deleted", record_id=record_id)
        return True
