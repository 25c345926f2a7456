"""Pagination inspection and JSON:API link building."""

from .base import PaginationConfig, has_next_page, has_previous_page
from .cursor import CursorField, build_cursor_links, cursor_pagination_fields
from .inspector import get_pagination_config
from .links import (
    CursorMode,
    OffsetMode,
    PaginationMode,
    build_meta,
    build_pagination_data,
    resolve_pagination_mode,
)
from .offset import build_offset_links
from .paginators import ArrayPaginator, Page, Paginator, PartialPage, PartialPaginator

__all__ = [
    "ArrayPaginator",
    "CursorField",
    "CursorMode",
    "OffsetMode",
    "Page",
    "PaginationConfig",
    "PaginationMode",
    "Paginator",
    "PartialPage",
    "PartialPaginator",
    "build_cursor_links",
    "build_meta",
    "build_offset_links",
    "build_pagination_data",
    "cursor_pagination_fields",
    "get_pagination_config",
    "has_next_page",
    "has_previous_page",
    "resolve_pagination_mode",
]
