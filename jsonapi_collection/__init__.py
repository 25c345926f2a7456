"""JSON:API collection normalization with offset and cursor pagination."""

from .core.document import JSONAPIDocumentBuilder
from .core.errors import JSONAPIErrorBuilder, MalformedItemError
from .metadata.resource import OperationMetadata, ResourceMetadata, ResourceMetadataFactory
from .pagination.cursor import CursorField
from .serializers.base import JSONAPISerializer
from .serializers.collection import JSONAPICollectionNormalizer
from .serializers.item import JSONAPIItemNormalizer

__all__ = [
    "CursorField",
    "JSONAPICollectionNormalizer",
    "JSONAPIDocumentBuilder",
    "JSONAPIErrorBuilder",
    "JSONAPIItemNormalizer",
    "JSONAPISerializer",
    "MalformedItemError",
    "OperationMetadata",
    "ResourceMetadata",
    "ResourceMetadataFactory",
]
