import pytest

from jsonapi_collection import (
    JSONAPICollectionNormalizer,
    JSONAPIItemNormalizer,
    JSONAPISerializer,
    ResourceMetadata,
    ResourceMetadataFactory,
)
from jsonapi_collection.core.errors import ResourceClassNotFoundError


class Author:
    def __init__(self, id, name):
        self.id = id
        self.name = name


class Book:
    def __init__(self, id, title, author=None):
        self.id = id
        self.title = title
        self.year = 1965
        self.author = author


class Novel(Book):
    pass


class BookSerializer(JSONAPISerializer):
    class Meta:
        type_ = "books"
        model = Book
        fields = ["id", "title"]


class AuthorSerializer(JSONAPISerializer):
    class Meta:
        type_ = "authors"
        model = Author
        fields = []


@pytest.fixture
def normalizer():
    return JSONAPIItemNormalizer(
        {Book: BookSerializer, Author: AuthorSerializer},
        included_serializers={"author": AuthorSerializer},
    )


class TestSerializer:
    def test_meta_fields(self):
        resource = BookSerializer().to_resource(Book(1, "Dune"))
        assert resource == {"type": "books", "id": "1", "attributes": {"title": "Dune"}}

    def test_public_state_without_meta_fields(self):
        resource = AuthorSerializer().to_resource(Author(7, "Frank"), fields=["name"])
        assert resource == {"type": "authors", "id": "7", "attributes": {"name": "Frank"}}

    def test_self_link(self):
        resource = BookSerializer().to_resource(Book(1, "Dune"), base_url="https://api.example.com/")
        assert resource["links"] == {"self": "https://api.example.com/books/1"}
        assert "relationships" not in resource


class TestItemNormalizer:
    def test_fragment_without_includes(self, normalizer):
        assert normalizer.normalize(Book(1, "Dune"), "jsonapi", {}) == {
            "data": {"type": "books", "id": "1", "attributes": {"title": "Dune"}}
        }

    def test_includes_from_context(self, normalizer):
        book = Book(1, "Dune", Author(7, "Frank"))
        assert normalizer.normalize(book, "jsonapi", {"include": ["author"]}) == {
            "data": {"type": "books", "id": "1", "attributes": {"title": "Dune"}},
            "included": [{"type": "authors", "id": "7", "attributes": {"name": "Frank"}}],
        }

    def test_includes_and_fields_from_uri(self, normalizer):
        book = Book(1, "Dune", Author(7, "Frank"))
        fragment = normalizer.normalize(
            book, "jsonapi", {"uri": "/books?include=author&fields[authors]=id&page=2"}
        )
        assert fragment["included"] == [{"type": "authors", "id": "7"}]

    def test_missing_relationship_is_skipped(self, normalizer):
        fragment = normalizer.normalize(Book(1, "Dune"), "jsonapi", {"include": ["author"]})
        assert fragment["included"] == []

    def test_serializer_is_found_through_base_classes(self, normalizer):
        assert normalizer.normalize(Novel(2, "Emma"), "jsonapi", {})["data"]["type"] == "books"

    def test_unregistered_class(self, normalizer):
        with pytest.raises(ResourceClassNotFoundError):
            normalizer.normalize(object(), "jsonapi", {})


class TestCollectionWithItemNormalizer:
    def test_shared_author_is_included_once(self, normalizer):
        author = Author(7, "Frank")
        books = [Book(1, "Dune", author), Book(2, "Dune Messiah", author)]
        collection_normalizer = JSONAPICollectionNormalizer(
            normalizer, ResourceMetadataFactory([ResourceMetadata(resource_class=Book)])
        )
        document = collection_normalizer.normalize(
            books, "jsonapi", {"uri": "/books?include=author", "resource_class": Book}
        )
        assert document == {
            "links": {"self": "/books?include=author"},
            "meta": {"totalItems": 2},
            "data": [
                {"type": "books", "id": "1", "attributes": {"title": "Dune"}},
                {"type": "books", "id": "2", "attributes": {"title": "Dune Messiah"}},
            ],
            "included": [{"type": "authors", "id": "7", "attributes": {"name": "Frank"}}],
        }
