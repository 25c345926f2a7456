"""Cursor (keyset) pagination links.

Instead of page numbers, navigation links carry range filters on the sort
fields of the collection, taken from the first item of the page for
``prev`` and from the last item for ``next``::

    /books?id%5Bgt%5D=20
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any, Literal, Sequence

from pydantic import BaseModel, ConfigDict, field_validator

from jsonapi_collection.utils.iri import ParsedIri, UrlGenerationStrategy, create_iri
from jsonapi_collection.utils.property_access import PropertyReader

from .base import PaginationConfig, has_next_page, has_previous_page

FORWARD = 1
BACKWARD = -1


class CursorField(BaseModel):
    """One ordering key of a cursor-paginated collection."""

    model_config = ConfigDict(frozen=True)

    field: str
    direction: Literal["asc", "desc"] = "asc"

    @field_validator("direction", mode="before")
    @classmethod
    def _lower_direction(cls, value: Any) -> Any:
        return value.lower() if isinstance(value, str) else value


def stringify_cursor_value(value: Any) -> str:
    """Render a boundary value the way it is written into a query string."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def cursor_pagination_fields(
    fields: Sequence[CursorField],
    direction: int,
    obj: Any,
    property_reader: PropertyReader,
) -> dict[str, dict[str, str]]:
    """Return the range filters that move the cursor past ``obj``.

    Moving forward on an ascending field means ``gt``, on a descending one
    ``lt``; moving backward inverts both. Fields whose boundary value is
    ``None`` are left out, since a null cannot be compared against.
    """
    filters: dict[str, dict[str, str]] = {}
    for cursor_field in fields:
        value = property_reader.get_value(obj, cursor_field.field)
        if value is None:
            continue
        forward_operator = "lt" if cursor_field.direction == "desc" else "gt"
        backward_operator = "lt" if forward_operator == "gt" else "gt"
        operator = forward_operator if direction > 0 else backward_operator
        filters[cursor_field.field] = {operator: stringify_cursor_value(value)}
    return filters


def build_cursor_links(
    parsed: ParsedIri,
    config: PaginationConfig,
    cursor_fields: Sequence[CursorField],
    first_item: Any,
    last_item: Any,
    *,
    property_reader: PropertyReader,
    url_generation_strategy: UrlGenerationStrategy = UrlGenerationStrategy.ABS_PATH,
) -> dict[str, str]:
    """Build ``self``/``prev``/``next`` links for a keyset-paginated page.

    ``first_item`` and ``last_item`` are ``None`` for an empty page, in which
    case no navigation link is produced. ``prev`` does not check for a
    known total, only that the current page is not the first one.
    """

    def cursor_link(filters: dict[str, dict[str, str]] | None = None) -> str:
        parameters = {**parsed.parameters, **(filters or {})}
        return create_iri(parsed.parts, parameters, url_generation_strategy=url_generation_strategy)

    links = {"self": cursor_link()}
    if first_item is not None and has_previous_page(config):
        links["prev"] = cursor_link(
            cursor_pagination_fields(cursor_fields, BACKWARD, first_item, property_reader)
        )
    if last_item is not None and has_next_page(config):
        links["next"] = cursor_link(
            cursor_pagination_fields(cursor_fields, FORWARD, last_item, property_reader)
        )
    return links
