"""
Tests for the Notion record store adapter

Tests cover:
- Request construction for create, query and archive
- Decoding query responses into pages of records
- Translation of client and transport errors
- Message operations returning sentinels on failure
"""
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from notion_client.errors import RequestTimeoutError

from notion_mail.core.operations import MessageOperations
from notion_mail.core.store import NotionRecordStore, create_notion_client
from notion_mail.utils.config import NotionConfig
from notion_mail.utils.errors import (
    BackendRejectedError,
    NetworkError,
    NetworkTimeoutError,
)

from .test_helpers import FakeRecordStore, RecordTestHelper, make_api_error, make_page


def make_client():
    client = MagicMock()
    client.pages.create = AsyncMock(return_value={"object": "page", "id": "new-page"})
    client.pages.update = AsyncMock(return_value={"object": "page", "archived": True})
    client.databases.query = AsyncMock(return_value={"results": [], "has_more": False, "next_cursor": None})
    client.aclose = AsyncMock()
    return client


@pytest.fixture
def client():
    return make_client()


@pytest.fixture
def notion_store(client):
    return NotionRecordStore(client, "db-123")


class TestRequests:
    """Tests for request construction"""

    @pytest.mark.asyncio
    async def test_create(self, notion_store, client):
        properties = {"Sender": {"rich_text": [{"text": {"content": "alice"}}]}}

        page = await notion_store.create(properties)

        assert page["id"] == "new-page"
        client.pages.create.assert_awaited_once_with(
            parent={"database_id": "db-123"}, properties=properties
        )

    @pytest.mark.asyncio
    async def test_first_query_has_no_start_cursor(self, notion_store, client):
        query_filter = {"property": "Recipient", "rich_text": {"equals": "bob"}}

        await notion_store.query(query_filter, page_size=5)

        client.databases.query.assert_awaited_once_with(
            database_id="db-123", filter=query_filter, page_size=5
        )

    @pytest.mark.asyncio
    async def test_query_with_cursor(self, notion_store, client):
        await notion_store.query({}, cursor="C1", page_size=3)

        kwargs = client.databases.query.await_args.kwargs
        assert kwargs["start_cursor"] == "C1"
        assert kwargs["page_size"] == 3

    @pytest.mark.asyncio
    async def test_query_decodes_results(self, notion_store, client):
        client.databases.query.return_value = {
            "results": [
                RecordTestHelper.create_notion_page("p1", "alice", "bob", "hi"),
                RecordTestHelper.create_notion_page("p2", "carol", "bob", "yo"),
            ],
            "has_more": True,
            "next_cursor": "C1",
        }

        page = await notion_store.query({})

        assert [r.id for r in page.records] == ["p1", "p2"]
        assert [r.sender for r in page.records] == ["alice", "carol"]
        assert page.has_more is True
        assert page.next_cursor == "C1"
        assert page.continuation == "C1"

    @pytest.mark.asyncio
    async def test_archive(self, notion_store, client):
        await notion_store.archive("p1")

        client.pages.update.assert_awaited_once_with(page_id="p1", archived=True)

    @pytest.mark.asyncio
    async def test_aclose(self, notion_store, client):
        await notion_store.aclose()

        client.aclose.assert_awaited_once()


class TestErrorTranslation:
    """Tests for mapping client errors onto NotionMail errors"""

    @pytest.mark.asyncio
    async def test_api_error_becomes_backend_rejected(self, notion_store, client):
        client.pages.create.side_effect = make_api_error(status=400, code="validation_error")

        with pytest.raises(BackendRejectedError) as exc_info:
            await notion_store.create({})

        assert exc_info.value.status == 400
        assert exc_info.value.code == "validation_error"

    @pytest.mark.asyncio
    async def test_client_timeout_becomes_timeout_error(self, notion_store, client):
        client.databases.query.side_effect = RequestTimeoutError()

        with pytest.raises(NetworkTimeoutError):
            await notion_store.query({})

    @pytest.mark.asyncio
    async def test_httpx_timeout_becomes_timeout_error(self, notion_store, client):
        client.databases.query.side_effect = httpx.ReadTimeout("read timed out")

        with pytest.raises(NetworkTimeoutError):
            await notion_store.query({})

    @pytest.mark.asyncio
    async def test_transport_error_becomes_network_error(self, notion_store, client):
        client.pages.update.side_effect = httpx.ConnectError("connection refused")

        with pytest.raises(NetworkError) as exc_info:
            await notion_store.archive("p1")

        assert not isinstance(exc_info.value, NetworkTimeoutError)


class TestMessageOperations:
    """Tests for the boundary operations"""

    @pytest.mark.asyncio
    async def test_send_returns_false_on_failure(self):
        ops = MessageOperations(FakeRecordStore(create_error=NetworkError()))

        assert await ops.send("alice", "bob", "hi") is False

    @pytest.mark.asyncio
    async def test_send_without_recipient_creates_nothing(self):
        store = FakeRecordStore()
        ops = MessageOperations(store)

        assert await ops.send("alice", "", "hi") is False
        assert store.created == []

    @pytest.mark.asyncio
    async def test_read_returns_none_on_failure(self):
        ops = MessageOperations(FakeRecordStore(pages=[BackendRejectedError()]))

        assert await ops.read("bob") is None

    @pytest.mark.asyncio
    async def test_read_passes_cursor_and_page_size(self):
        store = FakeRecordStore(pages=[make_page([])])
        ops = MessageOperations(store)

        await ops.read("bob", cursor="C9", page_size=7)

        assert store.queries == [{
            "filter": {"property": "Recipient", "rich_text": {"equals": "bob"}},
            "cursor": "C9",
            "page_size": 7,
        }]

    @pytest.mark.asyncio
    async def test_delete_returns_false_on_failure(self):
        ops = MessageOperations(FakeRecordStore(archive_error=RuntimeError("boom")))

        assert await ops.delete("p1") is False

    @pytest.mark.asyncio
    async def test_delete_archives(self):
        store = FakeRecordStore()
        ops = MessageOperations(store)

        assert await ops.delete("p1") is True
        assert store.archived == ["p1"]


class TestClientFactory:
    """Tests for create_notion_client()"""

    def test_client_uses_configured_auth_and_timeout(self, monkeypatch):
        captured = {}

        class FakeAsyncClient:
            def __init__(self, **kwargs):
                captured.update(kwargs)

        monkeypatch.setattr("notion_mail.core.store.AsyncClient", FakeAsyncClient)
        config = NotionConfig(api_key="secret_abc", database_id="db-1", timeout_ms=1500)

        create_notion_client(config)

        assert captured["auth"] == "secret_abc"
        assert captured["timeout_ms"] == 1500
