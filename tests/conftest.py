"""Shared fixtures for the collection normalizer tests."""

from typing import Any, Mapping

import pytest

from jsonapi_collection import (
    CursorField,
    JSONAPICollectionNormalizer,
    ResourceMetadata,
    ResourceMetadataFactory,
)


class BookFragmentNormalizer:
    """Item normalizer for ``{"id": ...}`` mappings, recording its calls."""

    def __init__(self) -> None:
        self.contexts: list[Mapping[str, Any]] = []

    def normalize(self, instance: Any, format: str | None = None, context: Mapping[str, Any] | None = None) -> dict:
        self.contexts.append(dict(context or {}))
        return {"data": {"type": "books", "id": str(instance["id"])}}


@pytest.fixture
def item_normalizer():
    return BookFragmentNormalizer()


@pytest.fixture
def metadata_factory():
    return ResourceMetadataFactory(
        [
            ResourceMetadata(resource_class="books", short_name="Book"),
            ResourceMetadata(
                resource_class="events",
                short_name="Event",
                pagination_via_cursor=[CursorField(field="id", direction="asc")],
            ),
        ]
    )


@pytest.fixture
def collection_normalizer(item_normalizer, metadata_factory):
    return JSONAPICollectionNormalizer(item_normalizer, metadata_factory, page_parameter_name="page")
