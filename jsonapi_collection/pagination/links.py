"""Select a pagination mode and build the ``links`` and ``meta`` members."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Sequence, Union

from jsonapi_collection.utils.iri import ParsedIri, UrlGenerationStrategy
from jsonapi_collection.utils.property_access import PropertyReader

from .base import PaginationConfig
from .cursor import CursorField, build_cursor_links
from .offset import build_offset_links

if TYPE_CHECKING:
    from jsonapi_collection.metadata.resource import ResourceMetadata

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OffsetMode:
    """Navigate with page numbers."""


@dataclass(frozen=True)
class CursorMode:
    """Navigate with range filters on ``fields``, primary key first."""

    fields: tuple[CursorField, ...]


PaginationMode = Union[OffsetMode, CursorMode]


def resolve_pagination_mode(
    metadata: ResourceMetadata | None, operation_name: str | None = None
) -> PaginationMode:
    """Return CursorMode when the operation declares cursor fields."""
    if metadata is None:
        return OffsetMode()
    cursor_fields = metadata.get_cursor_fields(operation_name)
    if not cursor_fields:
        return OffsetMode()
    return CursorMode(tuple(cursor_fields))


def build_meta(config: PaginationConfig) -> dict[str, int]:
    """Build ``meta`` from whatever the pagination config knows."""
    meta: dict[str, int] = {}
    if config.total_items is not None:
        meta["totalItems"] = int(config.total_items)
    if config.is_paginator:
        meta["itemsPerPage"] = int(config.items_per_page)
        meta["currentPage"] = int(config.current_page)
    return meta


def build_pagination_data(
    mode: PaginationMode,
    parsed: ParsedIri,
    config: PaginationConfig,
    *,
    page_parameter_name: str,
    url_generation_strategy: UrlGenerationStrategy = UrlGenerationStrategy.ABS_PATH,
    items: Sequence[Any] = (),
    property_reader: PropertyReader | None = None,
) -> dict[str, Any]:
    """Return ``{"links": ..., "meta": ...}`` for one page.

    Cursor links are only built for paginated collections; everything else
    falls back to page-number links. ``items`` is the materialized page and
    is only read for its first and last element.
    """
    if isinstance(mode, CursorMode) and config.is_paginated:
        logger.debug("Building cursor links on %s", [field.field for field in mode.fields])
        links = build_cursor_links(
            parsed,
            config,
            mode.fields,
            items[0] if items else None,
            items[-1] if items else None,
            property_reader=property_reader or PropertyReader(),
            url_generation_strategy=url_generation_strategy,
        )
    else:
        links = build_offset_links(parsed, page_parameter_name, config, url_generation_strategy)

    data: dict[str, Any] = {"links": links}
    meta = build_meta(config)
    if meta:
        data["meta"] = meta
    return data
