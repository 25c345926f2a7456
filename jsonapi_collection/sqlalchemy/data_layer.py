"""SQLAlchemy data layer returning paginators for the collection normalizer."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from jsonapi_collection.pagination.cursor import CursorField
from jsonapi_collection.pagination.paginators import Page, PartialPage
from jsonapi_collection.settings import settings

from .helpers import SQLAlchemyQueryHelper

logger = logging.getLogger(__name__)


class SQLAlchemyDataLayer:
    """Fetch one page of a SQLAlchemy model, by page number or by cursor."""

    def __init__(
        self,
        *,
        model: Any,
        session: Session | AsyncSession,
        query_helper: SQLAlchemyQueryHelper | None = None,
    ) -> None:
        self.model = model
        self.session = session
        self.query_helper = query_helper or SQLAlchemyQueryHelper(model=model)

    async def _execute(self, statement: Any) -> Any:
        logger.debug("Executing %s", statement)
        if isinstance(self.session, AsyncSession):
            return await self.session.execute(statement)
        return self.session.execute(statement)

    def _items_per_page(self, items_per_page: int | None) -> int:
        if items_per_page is None:
            items_per_page = settings.items_per_page
        if items_per_page < 1:
            raise ValueError("items_per_page must be >= 1")
        if settings.maximum_items_per_page is not None:
            items_per_page = min(items_per_page, settings.maximum_items_per_page)
        return items_per_page

    async def list(
        self,
        *,
        params: Mapping[str, Any] | None = None,
        page: int = 1,
        items_per_page: int | None = None,
        cursor_fields: Sequence[CursorField] | None = None,
        partial: bool = False,
    ) -> Page | PartialPage:
        """Return one page of model instances.

        With ``cursor_fields`` the range filters found in ``params`` are
        applied in place of an offset and the rows are ordered by those
        fields. Such pages, and any page requested with ``partial=True``,
        skip the count query and come back as a PartialPage; ``page`` then
        only sets the reported current page.
        """
        if page < 1:
            raise ValueError("page must be >= 1")
        params = params or {}
        items_per_page = self._items_per_page(items_per_page)

        statement = select(self.model)
        if cursor_fields:
            statement = self.query_helper.apply_cursor_filters(statement, params, cursor_fields)
            statement = self.query_helper.apply_sorting(statement, cursor_fields)
            page_statement = statement.limit(items_per_page)
        else:
            page_statement = statement.offset((page - 1) * items_per_page).limit(items_per_page)

        result = await self._execute(page_statement)
        items = list(result.scalars().all())
        if partial or cursor_fields:
            return PartialPage(items, page, items_per_page)

        count_statement = select(func.count()).select_from(statement.order_by(None).subquery())
        total = (await self._execute(count_statement)).scalar_one()
        return Page(items, page, items_per_page, total)
