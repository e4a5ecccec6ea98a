"""
Shared test fixtures and configuration for pytest
"""
import os
import tempfile

# Keep logs and prompt history out of the real home directory. This must run
# before any notion_mail module is imported.
os.environ["NOTION_MAIL_HOME"] = tempfile.mkdtemp(prefix="notion_mail_tests_")

import pytest  # noqa: E402

from notion_mail.core.operations import MessageOperations  # noqa: E402
from notion_mail.features.browse import PaginationBrowser  # noqa: E402

from .test_helpers import ConsoleTestHelper, FakeRecordStore, ScriptedPrompter  # noqa: E402


@pytest.fixture
def console():
    """Console writing to an in-memory buffer"""
    return ConsoleTestHelper.create_console()


@pytest.fixture
def store():
    """Empty fake record store; tests script its pages"""
    return FakeRecordStore()


@pytest.fixture
def prompter():
    """Scripted prompter with no answers; tests append what they need"""
    return ScriptedPrompter()


@pytest.fixture
def operations(store):
    return MessageOperations(store)


@pytest.fixture
def browser(operations, prompter, console):
    return PaginationBrowser(operations, prompter, page_size=2, console=console)


@pytest.fixture(autouse=True)
def clear_env_vars():
    """Clear NotionMail environment variables before each test"""
    env_vars = [
        'NOTION_API_KEY', 'NOTION_DATABASE_ID', 'NOTION_PAGE_SIZE',
        'NOTION_TIMEOUT_MS', 'NOTION_MAIL_LOG_LEVEL',
    ]
    original = {}
    for var in env_vars:
        original[var] = os.environ.get(var)
        if var in os.environ:
            del os.environ[var]

    yield

    # Restore original environment
    for var, value in original.items():
        if value is not None:
            os.environ[var] = value
        elif var in os.environ:
            del os.environ[var]
