"""Normalize collections into JSON:API documents.

A top-level collection becomes::

    {
        "links": {"self": ..., "first": ..., "last": ..., "prev": ..., "next": ...},
        "meta": {"totalItems": ..., "itemsPerPage": ..., "currentPage": ...},
        "data": [...],
        "included": [...],
    }

Collections nested inside another resource (``api_sub_level`` in the
context, or no ``resource_class``) are normalized into a plain list.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Callable, Protocol

from jsonapi_collection.core.document import JSONAPIDocumentBuilder
from jsonapi_collection.core.errors import MalformedItemError
from jsonapi_collection.metadata.resource import ResourceMetadataFactory
from jsonapi_collection.pagination.inspector import get_pagination_config
from jsonapi_collection.pagination.links import build_pagination_data, resolve_pagination_mode
from jsonapi_collection.settings import settings
from jsonapi_collection.utils.iri import parse_iri
from jsonapi_collection.utils.property_access import PropertyReader

logger = logging.getLogger(__name__)

FORMAT = "jsonapi"


class ItemNormalizer(Protocol):
    def normalize(
        self, instance: Any, format: str | None = None, context: Mapping[str, Any] | None = None
    ) -> Any: ...


def _freeze(value: Any) -> Any:
    """Return a hashable stand-in that compares equal for equal JSON values."""
    if isinstance(value, Mapping):
        return frozenset((key, _freeze(child)) for key, child in value.items())
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(child) for child in value)
    return value


def aggregate_items(
    collection: Iterable[Any], normalize: Callable[[Any], Any]
) -> dict[str, list[Any]]:
    """Normalize every element and merge the fragments.

    ``data`` keeps the iteration order. ``included`` entries are
    de-duplicated by value, first occurrence wins, and the member only
    exists if at least one fragment carried it.
    """
    data: list[Any] = []
    included: list[Any] | None = None
    seen: set[Any] = set()

    for element in collection:
        fragment = normalize(element)
        if not isinstance(fragment, Mapping):
            logger.warning("Item normalizer returned %s instead of a mapping", type(fragment).__name__)
            raise MalformedItemError("Expected item to be a mapping.")
        if "data" not in fragment:
            logger.warning("Item normalizer returned a fragment without data: %s", sorted(fragment))
            raise MalformedItemError('The JSON:API document must contain a "data" key.')

        data.append(fragment["data"])

        if fragment.get("included") is not None:
            if included is None:
                included = []
            for entry in fragment["included"]:
                try:
                    key = _freeze(entry)
                    duplicate = key in seen
                except TypeError:
                    # Unhashable leaf (a set, a mutable model): compare by equality.
                    if entry not in included:
                        included.append(entry)
                    continue
                if not duplicate:
                    seen.add(key)
                    included.append(entry)

    items: dict[str, list[Any]] = {"data": data}
    if included is not None:
        items["included"] = included
    return items


class JSONAPICollectionNormalizer:
    """Normalize collections of resources in the JSON:API format."""

    format = FORMAT

    def __init__(
        self,
        item_normalizer: ItemNormalizer,
        resource_metadata_factory: ResourceMetadataFactory | None = None,
        *,
        page_parameter_name: str | None = None,
        property_reader: PropertyReader | None = None,
        document_builder: JSONAPIDocumentBuilder | None = None,
    ) -> None:
        self.item_normalizer = item_normalizer
        self.resource_metadata_factory = resource_metadata_factory
        self.page_parameter_name = page_parameter_name or settings.page_parameter_name
        self.property_reader = property_reader or PropertyReader()
        self.document_builder = document_builder or JSONAPIDocumentBuilder()

    def supports_normalization(self, data: Any, format: str | None = None) -> bool:
        return (
            format == self.format
            and isinstance(data, Iterable)
            and not isinstance(data, (str, bytes, Mapping))
        )

    def normalize(
        self,
        collection: Iterable[Any],
        format: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> dict[str, Any] | list[Any]:
        """Return the JSON:API document of ``collection``.

        Context keys: ``uri`` (the request IRI), ``resource_class``,
        ``operation_name`` and ``api_sub_level``.
        """
        context = dict(context or {})
        if context.get("resource_class") is None or context.get("api_sub_level"):
            return self.normalize_raw_collection(collection, format, context)

        # Cursor links need the first and the last item, so the page is
        # materialized once and shared by both stages.
        items = list(collection)
        pagination_data = self.get_pagination_data(collection, context, items)
        items_data = self.get_items_data(items, format, {**context, "api_sub_level": True})

        return self.document_builder.build_collection(
            items_data["data"],
            included=items_data.get("included"),
            links=pagination_data["links"],
            meta=pagination_data.get("meta"),
        )

    def normalize_raw_collection(
        self, collection: Iterable[Any], format: str | None = None, context: Mapping[str, Any] | None = None
    ) -> list[Any]:
        return [self.item_normalizer.normalize(item, format, context) for item in collection]

    def get_pagination_data(
        self, collection: Any, context: Mapping[str, Any], items: list[Any]
    ) -> dict[str, Any]:
        """Return the ``links`` and ``meta`` members for ``collection``."""
        config = get_pagination_config(collection)
        parsed = parse_iri(context.get("uri") or "/", self.page_parameter_name)

        operation_name = context.get("operation_name")
        metadata = None
        url_generation_strategy = settings.url_generation_strategy
        if self.resource_metadata_factory is not None:
            metadata = self.resource_metadata_factory.create(context["resource_class"])
            url_generation_strategy = metadata.get_url_generation_strategy(operation_name)

        mode = resolve_pagination_mode(metadata, operation_name)
        logger.debug("Paginating %r with %s", context["resource_class"], type(mode).__name__)
        return build_pagination_data(
            mode,
            parsed,
            config,
            page_parameter_name=self.page_parameter_name,
            url_generation_strategy=url_generation_strategy,
            items=items,
            property_reader=self.property_reader,
        )

    def get_items_data(
        self, items: Iterable[Any], format: str | None = None, context: Mapping[str, Any] | None = None
    ) -> dict[str, list[Any]]:
        return aggregate_items(
            items, lambda item: self.item_normalizer.normalize(item, format, context)
        )
