"""SQLAlchemy helpers for JSON:API collections."""

from .data_layer import SQLAlchemyDataLayer
from .helpers import RANGE_OPERATORS, SQLAlchemyQueryHelper

__all__ = ["RANGE_OPERATORS", "SQLAlchemyDataLayer", "SQLAlchemyQueryHelper"]
