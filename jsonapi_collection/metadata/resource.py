"""Resource and operation metadata consulted while normalizing collections."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field

from jsonapi_collection.core.errors import ResourceClassNotFoundError
from jsonapi_collection.pagination.cursor import CursorField
from jsonapi_collection.utils.iri import UrlGenerationStrategy

logger = logging.getLogger(__name__)


class OperationMetadata(BaseModel):
    """Collection operation attributes; unset ones fall back to the resource."""

    model_config = ConfigDict(frozen=True)

    name: str
    url_generation_strategy: Optional[UrlGenerationStrategy] = None
    pagination_via_cursor: Optional[list[CursorField]] = None


class ResourceMetadata(BaseModel):
    """Pagination and link settings of a resource class."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    resource_class: Any
    short_name: Optional[str] = None
    url_generation_strategy: UrlGenerationStrategy = UrlGenerationStrategy.ABS_PATH
    pagination_via_cursor: Optional[list[CursorField]] = None
    collection_operations: dict[str, OperationMetadata] = Field(default_factory=dict)

    def get_collection_operation_attribute(
        self,
        operation_name: str | None,
        attribute: str,
        default: Any = None,
        fallback_to_resource: bool = True,
    ) -> Any:
        """Return ``attribute`` of an operation, or of the resource if unset."""
        operation = self.collection_operations.get(operation_name) if operation_name else None
        if operation is not None:
            value = getattr(operation, attribute, None)
            if value is not None:
                return value
        if fallback_to_resource:
            value = getattr(self, attribute, None)
            if value is not None:
                return value
        return default

    def get_url_generation_strategy(self, operation_name: str | None = None) -> UrlGenerationStrategy:
        return self.get_collection_operation_attribute(
            operation_name, "url_generation_strategy", UrlGenerationStrategy.ABS_PATH
        )

    def get_cursor_fields(self, operation_name: str | None = None) -> list[CursorField] | None:
        return self.get_collection_operation_attribute(operation_name, "pagination_via_cursor")


class ResourceMetadataFactory:
    """Registry of ResourceMetadata keyed by resource class."""

    def __init__(self, resources: Iterable[ResourceMetadata] = ()) -> None:
        self._registry: dict[Any, ResourceMetadata] = {}
        for metadata in resources:
            self.register(metadata)

    def register(self, metadata: ResourceMetadata) -> None:
        """Add or replace the metadata of ``metadata.resource_class``."""
        logger.debug("Registering resource metadata for %r", metadata.resource_class)
        self._registry[metadata.resource_class] = metadata

    def create(self, resource_class: Any) -> ResourceMetadata:
        """Return the metadata registered for ``resource_class``."""
        try:
            return self._registry[resource_class]
        except KeyError:
            raise ResourceClassNotFoundError(
                f"No resource metadata registered for {resource_class!r}."
            ) from None
