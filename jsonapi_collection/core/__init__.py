"""Core JSON:API document and error helpers."""

from .document import JSONAPIDocumentBuilder
from .errors import (
    InvalidFilterError,
    InvalidIriError,
    JSONAPIError,
    JSONAPIErrorBuilder,
    MalformedItemError,
    PropertyAccessError,
    ResourceClassNotFoundError,
)

__all__ = [
    "InvalidFilterError",
    "InvalidIriError",
    "JSONAPIDocumentBuilder",
    "JSONAPIError",
    "JSONAPIErrorBuilder",
    "MalformedItemError",
    "PropertyAccessError",
    "ResourceClassNotFoundError",
]
