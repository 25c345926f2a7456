"""Derive a PaginationConfig from a collection."""

from __future__ import annotations

from collections.abc import Mapping, Sized
from typing import Any

from .base import PaginationConfig
from .paginators import Paginator, PartialPaginator


def get_pagination_config(collection: Any) -> PaginationConfig:
    """Inspect ``collection`` and report what is known about its pagination.

    Full paginators know their last page and total; a collection spanning a
    single page is reported as not paginated. Partial paginators only know
    how many items the current page holds. Any other sized collection is
    treated as one unpaginated page whose length is the total.
    """
    if isinstance(collection, PartialPaginator):
        current_page = float(collection.current_page)
        items_per_page = float(collection.items_per_page)
        if isinstance(collection, Paginator):
            last_page = float(collection.last_page)
            return PaginationConfig(
                is_paginator=True,
                is_paginated=last_page != 1.0,
                current_page=current_page,
                items_per_page=items_per_page,
                last_page=last_page,
                total_items=float(collection.total_items),
            )
        return PaginationConfig(
            is_paginator=True,
            is_paginated=True,
            current_page=current_page,
            items_per_page=items_per_page,
            page_item_count=float(len(collection)),
        )

    if isinstance(collection, Sized) and not isinstance(collection, (str, bytes, Mapping)):
        return PaginationConfig(total_items=float(len(collection)))

    return PaginationConfig()
