"""Pagination state shared by the link builders."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PaginationConfig:
    """What is known about the page being rendered.

    ``last_page`` and ``total_items`` are ``None`` when the total is unknown,
    ``page_item_count`` is only known for partial paginators.
    """

    is_paginator: bool = False
    is_paginated: bool = False
    current_page: float | None = None
    items_per_page: float | None = None
    last_page: float | None = None
    page_item_count: float | None = None
    total_items: float | None = None


def has_previous_page(config: PaginationConfig) -> bool:
    """Return True unless the current page is the first one."""
    return config.current_page != 1.0


def has_next_page(config: PaginationConfig) -> bool:
    """Return True when there is evidence of data past the current page.

    With a known last page the current page must differ from it. Without
    one, a full page is taken as a sign that more items follow.
    """
    if config.last_page is not None:
        return config.current_page != config.last_page
    if config.page_item_count is None or config.items_per_page is None:
        return False
    return config.page_item_count >= config.items_per_page
