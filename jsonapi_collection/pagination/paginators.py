"""Paginator types understood by the pagination inspector."""

from __future__ import annotations

import math
from typing import Any, Iterable, Iterator, Sequence


class PartialPaginator:
    """A page of results whose total size is unknown."""

    @property
    def current_page(self) -> float:
        raise NotImplementedError

    @property
    def items_per_page(self) -> float:
        raise NotImplementedError

    def __iter__(self) -> Iterator[Any]:
        raise NotImplementedError

    def __len__(self) -> int:
        raise NotImplementedError


class Paginator(PartialPaginator):
    """A page of results whose total size is known."""

    @property
    def last_page(self) -> float:
        raise NotImplementedError

    @property
    def total_items(self) -> float:
        raise NotImplementedError


class PartialPage(PartialPaginator):
    """Materialized page of items without a total count."""

    def __init__(self, items: Iterable[Any], current_page: float, items_per_page: float) -> None:
        self._items = list(items)
        self._current_page = float(current_page)
        self._items_per_page = float(items_per_page)

    @property
    def current_page(self) -> float:
        return self._current_page

    @property
    def items_per_page(self) -> float:
        return self._items_per_page

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(items={len(self._items)}, "
            f"current_page={self._current_page:g}, items_per_page={self._items_per_page:g})"
        )


class Page(PartialPage, Paginator):
    """Materialized page of items with a known total count."""

    def __init__(
        self,
        items: Iterable[Any],
        current_page: float,
        items_per_page: float,
        total_items: float,
    ) -> None:
        super().__init__(items, current_page, items_per_page)
        self._total_items = float(total_items)

    @property
    def total_items(self) -> float:
        return self._total_items

    @property
    def last_page(self) -> float:
        if self._items_per_page <= 0:
            return 1.0
        return float(max(math.ceil(self._total_items / self._items_per_page), 1))


class ArrayPaginator(Page):
    """Paginate an in-memory sequence from a first result offset."""

    def __init__(self, results: Sequence[Any], first_result: int, max_results: int) -> None:
        if first_result < 0:
            raise ValueError("first_result must be >= 0")
        if max_results < 0:
            raise ValueError("max_results must be >= 0")
        if max_results > 0:
            items = results[first_result : first_result + max_results]
            current_page = first_result // max_results + 1
        else:
            items = []
            current_page = 1
        super().__init__(items, current_page, max_results, len(results))
