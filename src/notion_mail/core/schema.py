"""Message table schema: logical fields mapped to Notion columns."""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Tuple

from notion_mail.utils.errors import SchemaError


class ValueKind(str, Enum):
    """Notion property types used by the message table."""

    RICH_TEXT = "rich_text"
    TITLE = "title"


@dataclass(frozen=True)
class SchemaField:
    """One logical field with its storage column and value kind."""

    name: str
    column: Optional[str]
    value_kind: Optional[str]

    @property
    def is_complete(self) -> bool:
        return bool(self.column) and bool(self.value_kind)

    @property
    def kind(self) -> Optional[str]:
        """Value kind as a plain wire string."""
        if isinstance(self.value_kind, ValueKind):
            return self.value_kind.value
        return self.value_kind


@dataclass(frozen=True)
class Schema:
    """Ordered, directly iterable collection of schema fields."""

    fields: Tuple[SchemaField, ...]

    def __iter__(self) -> Iterator[SchemaField]:
        return iter(self.fields)

    def get(self, name: str) -> Optional[SchemaField]:
        for schema_field in self.fields:
            if schema_field.name == name:
                return schema_field
        return None

    def column(self, name: str) -> str:
        """Return the storage column for a logical field.

        Raises:
            SchemaError: If the field is unknown or has no column
        """
        schema_field = self.get(name)
        if schema_field is None or not schema_field.column:
            raise SchemaError(
                f"No column defined for field '{name}'", details={"field": name}
            )
        return schema_field.column

    def incomplete_fields(self) -> list[str]:
        return [f.name for f in self.fields if not f.is_complete]

    def validate(self) -> None:
        """Fail fast when any field is missing its column or value kind."""
        incomplete = self.incomplete_fields()
        if incomplete:
            raise SchemaError(
                f"Schema fields missing a column or value kind: {', '.join(incomplete)}",
                details={"fields": incomplete},
            )


SENDER = "sender"
RECIPIENT = "recipient"
MESSAGE = "message"

MESSAGE_SCHEMA = Schema(
    fields=(
        SchemaField(SENDER, "Sender", ValueKind.RICH_TEXT),
        SchemaField(RECIPIENT, "Recipient", ValueKind.RICH_TEXT),
        SchemaField(MESSAGE, "Message", ValueKind.TITLE),
    )
)
