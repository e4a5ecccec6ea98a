"""Translate schema fields and values into Notion request bodies."""

from typing import Any, Dict, Mapping, Optional, Union

from notion_mail.utils.logging import get_logger

from .schema import Schema, ValueKind

logger = get_logger(__name__)

TEXT_FILTER_KIND = ValueKind.RICH_TEXT.value


def build_create_payload(
    schema: Schema, field_values: Mapping[str, Optional[str]]
) -> Dict[str, Any]:
    """Build the ``properties`` object for a page create request.

    Args:
        schema: Schema describing the target columns
        field_values: Values keyed by logical field name

    Returns:
        Properties keyed by column name. Fields that are absent or empty in
        ``field_values`` are left out, as are schema fields without a column
        or value kind.
    """
    properties: Dict[str, Any] = {}

    for schema_field in schema:
        if not schema_field.is_complete:
            logger.debug(f"Skipping incomplete schema field '{schema_field.name}'")
            continue

        value = field_values.get(schema_field.name)
        if not value:
            continue

        properties[schema_field.column] = {
            schema_field.kind: [{"text": {"content": value}}]
        }

    return properties


def build_equality_filter(
    column: str,
    operator: str,
    value: Union[str, int, float],
    kind: str = TEXT_FILTER_KIND,
) -> Dict[str, Any]:
    """Build a single-predicate filter for a database query.

    The operator is passed through unchecked (``equals``, ``contains``, ...);
    Notion rejects operators it does not support.
    """
    return {
        "property": column,
        kind: {operator: value},
    }
