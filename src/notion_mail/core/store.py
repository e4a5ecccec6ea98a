"""Record store backed by a Notion database."""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional, Protocol

import httpx
from notion_client import APIResponseError, AsyncClient
from notion_client.errors import HTTPResponseError, RequestTimeoutError

from notion_mail.utils.config import NotionConfig
from notion_mail.utils.errors import (
    BackendRejectedError,
    NetworkError,
    NetworkTimeoutError,
)
from notion_mail.utils.logging import async_log_call, get_logger

from .models import MessageRecord, Page
from .schema import MESSAGE_SCHEMA, Schema

logger = get_logger(__name__)

DEFAULT_PAGE_SIZE = 5


class RecordStore(Protocol):
    """Operations the mail client needs from the message table."""

    async def create(self, properties: Dict[str, Any]) -> Dict[str, Any]:
        ...

    async def query(
        self,
        filter: Dict[str, Any],
        cursor: Optional[str] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> Page:
        ...

    async def archive(self, record_id: str) -> None:
        ...


def create_notion_client(config: NotionConfig) -> AsyncClient:
    """Create the Notion client used for the whole session."""

    return AsyncClient(
        auth=config.api_key.get_secret_value(),
        timeout_ms=config.timeout_ms,
        logger=get_logger("notion_client"),
        log_level=logging.WARNING,
    )


@asynccontextmanager
async def translate_errors(operation: str) -> AsyncIterator[None]:
    """Map notion-client and httpx failures onto the NotionMail error types."""

    try:
        yield

    except APIResponseError as e:
        raise BackendRejectedError(
            f"Notion rejected {operation}: {e}",
            details={
                "operation": operation,
                "status": e.status,
                "code": getattr(e.code, "value", e.code),
            },
        ) from e

    except (RequestTimeoutError, httpx.TimeoutException) as e:
        raise NetworkTimeoutError(
            f"Timed out during {operation}", details={"operation": operation}
        ) from e

    except HTTPResponseError as e:
        raise NetworkError(
            f"Unexpected HTTP response during {operation}: {e}",
            details={"operation": operation, "status": e.status},
        ) from e

    except httpx.HTTPError as e:
        raise NetworkError(
            f"No response received during {operation}: {e}",
            details={"operation": operation},
        ) from e


class NotionRecordStore:
    """RecordStore implementation over the Notion database API."""

    def __init__(
        self,
        client: AsyncClient,
        database_id: str,
        schema: Schema = MESSAGE_SCHEMA,
    ):
        self.client = client
        self.database_id = database_id
        self.schema = schema

    @async_log_call
    async def create(self, properties: Dict[str, Any]) -> Dict[str, Any]:
        """Create a page in the database with the given properties."""

        async with translate_errors("page create"):
            page = await self.client.pages.create(
                parent={"database_id": self.database_id},
                properties=properties,
            )

        logger.debug(f"Created page {page.get('id')}")
        return page

    @async_log_call
    async def query(
        self,
        filter: Dict[str, Any],
        cursor: Optional[str] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> Page:
        """Fetch one page of results, continuing from ``cursor`` if given."""

        request: Dict[str, Any] = {
            "database_id": self.database_id,
            "filter": filter,
            "page_size": page_size,
        }
        if cursor:
            request["start_cursor"] = cursor

        async with translate_errors("database query"):
            response = await self.client.databases.query(**request)

        records = [
            MessageRecord.from_page(result, self.schema)
            for result in response.get("results", [])
        ]
        logger.debug(
            f"Query returned {len(records)} record(s), has_more={response.get('has_more')}"
        )

        return Page(
            records=records,
            has_more=bool(response.get("has_more")),
            next_cursor=response.get("next_cursor"),
        )

    @async_log_call
    async def archive(self, record_id: str) -> None:
        """Archive (soft delete) a page."""

        async with translate_errors("page archive"):
            await self.client.pages.update(page_id=record_id, archived=True)

        logger.debug(f"Archived page {record_id}")

    async def aclose(self) -> None:
        await self.client.aclose()
