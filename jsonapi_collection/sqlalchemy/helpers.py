"""Apply cursor filters and ordering to SQLAlchemy statements."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Callable, Mapping, Sequence

from sqlalchemy import and_, asc, desc
from sqlalchemy.inspection import inspect

from jsonapi_collection.core.errors import InvalidFilterError
from jsonapi_collection.pagination.cursor import CursorField

# Operators cursor links may carry.
RANGE_OPERATORS: dict[str, Callable[[Any, Any], Any]] = {
    "gt": lambda col, val: col > val,
    "gte": lambda col, val: col >= val,
    "lt": lambda col, val: col < val,
    "lte": lambda col, val: col <= val,
}


class SQLAlchemyQueryHelper:
    """Turn cursor query parameters into keyset conditions on a model."""

    def __init__(self, *, model: Any) -> None:
        self.model = model

    def _resolve_column(self, field: str) -> tuple[Any, Any]:
        columns = inspect(self.model).columns
        if field not in columns:
            raise InvalidFilterError(
                f'Unknown cursor field "{field}" on {self.model.__name__}.'
            )
        return getattr(self.model, field), columns[field].type

    def _coerce(self, column_type: Any, value: Any) -> Any:
        """Convert a query string value to the column's Python type."""
        try:
            python_type = column_type.python_type
        except NotImplementedError:
            return value
        if not isinstance(value, str) or python_type is str:
            return value
        try:
            if python_type is bool:
                return value.lower() in ("1", "true")
            if python_type in (datetime, date):
                return python_type.fromisoformat(value)
            return python_type(value)
        except (TypeError, ValueError, ArithmeticError) as exc:
            raise InvalidFilterError(
                f'Cannot convert "{value}" to {python_type.__name__}.'
            ) from exc

    def apply_sorting(self, query: Any, cursor_fields: Sequence[CursorField]) -> Any:
        """Order the query by the cursor fields, primary key first."""
        for cursor_field in cursor_fields:
            column, _ = self._resolve_column(cursor_field.field)
            if cursor_field.direction == "desc":
                query = query.order_by(desc(column))
            else:
                query = query.order_by(asc(column))
        return query

    def apply_cursor_filters(
        self,
        query: Any,
        parameters: Mapping[str, Any],
        cursor_fields: Sequence[CursorField],
    ) -> Any:
        """AND together the ``{field: {op: value}}`` filters of the cursor fields.

        Parameters that are not cursor fields are left alone.
        """
        expressions = []
        for cursor_field in cursor_fields:
            condition = parameters.get(cursor_field.field)
            if not isinstance(condition, Mapping):
                continue
            column, column_type = self._resolve_column(cursor_field.field)
            for op, raw_value in condition.items():
                operator_func = RANGE_OPERATORS.get(op)
                if operator_func is None:
                    raise InvalidFilterError(
                        f'Unsupported cursor operator "{op}" for "{cursor_field.field}".'
                    )
                expressions.append(operator_func(column, self._coerce(column_type, raw_value)))
        if expressions:
            query = query.where(and_(*expressions))
        return query
