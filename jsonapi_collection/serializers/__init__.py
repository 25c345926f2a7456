"""Serializers and normalizers for JSON:API collections."""

from .base import JSONAPISerializer
from .collection import FORMAT, JSONAPICollectionNormalizer, aggregate_items
from .item import JSONAPIItemNormalizer

__all__ = [
    "FORMAT",
    "JSONAPICollectionNormalizer",
    "JSONAPIItemNormalizer",
    "JSONAPISerializer",
    "aggregate_items",
]
