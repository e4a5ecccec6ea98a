"""Message domain models"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from .schema import MESSAGE, MESSAGE_SCHEMA, RECIPIENT, SENDER, Schema


def _text_content(properties: Dict[str, Any], column: Optional[str], kind: Optional[str]) -> str:
    """Read the first text span of a property, or "" when it is missing."""
    if not column or not kind:
        return ""

    spans = (properties.get(column) or {}).get(kind) or []
    if not spans:
        return ""

    span = spans[0] or {}
    text = (span.get("text") or {}).get("content")
    if text is None:
        text = span.get("plain_text", "")
    return text or ""


@dataclass(frozen=True)
class MessageRecord:
    """A message stored as a page in the Notion database.

    The id is assigned by Notion and treated as an opaque string.
    """

    id: str
    sender: str = ""
    recipient: str = ""
    message: str = ""
    created_at: str = ""

    @classmethod
    def from_page(cls, page: Dict[str, Any], schema: Schema = MESSAGE_SCHEMA) -> "MessageRecord":
        """Create a MessageRecord from a Notion page object."""
        properties = page.get("properties") or {}

        def read(name: str) -> str:
            schema_field = schema.get(name)
            if schema_field is None:
                return ""
            return _text_content(properties, schema_field.column, schema_field.kind)

        return cls(
            id=page["id"],
            sender=read(SENDER),
            recipient=read(RECIPIENT),
            message=read(MESSAGE),
            created_at=page.get("created_time", ""),
        )


@dataclass(frozen=True)
class Page:
    """One page of query results and the cursor to continue from."""

    records: List[MessageRecord] = field(default_factory=list)
    has_more: bool = False
    next_cursor: Optional[str] = None

    @property
    def continuation(self) -> Optional[str]:
        """Cursor for the next request, or None once results are exhausted."""
        return (self.next_cursor or None) if self.has_more else None


## Selection choices


@dataclass(frozen=True)
class RecordChoice:
    """A real message selected by the user."""

    record_id: str


@dataclass(frozen=True)
class LoadMore:
    """Control entry asking for the next page."""


@dataclass(frozen=True)
class Back:
    """Control entry leaving the browser without a selection."""


Choice = Union[RecordChoice, LoadMore, Back]

LOAD_MORE = LoadMore()
BACK = Back()
