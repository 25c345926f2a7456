from datetime import datetime
from enum import Enum

import pytest
from pydantic import ValidationError

from jsonapi_collection.core.errors import PropertyAccessError
from jsonapi_collection.pagination.base import PaginationConfig
from jsonapi_collection.pagination.cursor import (
    BACKWARD,
    FORWARD,
    CursorField,
    build_cursor_links,
    cursor_pagination_fields,
    stringify_cursor_value,
)
from jsonapi_collection.utils.iri import UrlGenerationStrategy, parse_iri
from jsonapi_collection.utils.property_access import PropertyReader

EVENTS = parse_iri("/events?page=1&type=talk", "page")
READER = PropertyReader()
BY_ID = [CursorField(field="id", direction="asc")]


def partial_page(current_page: float, page_item_count: float, items_per_page: float = 2.0) -> PaginationConfig:
    return PaginationConfig(
        is_paginator=True,
        is_paginated=True,
        current_page=current_page,
        items_per_page=items_per_page,
        page_item_count=page_item_count,
    )


class Status(Enum):
    OPEN = "open"


class TestCursorField:
    def test_direction_is_lower_cased(self):
        assert CursorField(field="id", direction="DESC").direction == "desc"

    def test_direction_defaults_to_ascending(self):
        assert CursorField(field="id").direction == "asc"

    def test_unknown_direction(self):
        with pytest.raises(ValidationError):
            CursorField(field="id", direction="up")


class TestCursorPaginationFields:
    def test_descending_field(self):
        fields = [CursorField(field="id", direction="desc")]
        assert cursor_pagination_fields(fields, FORWARD, {"id": 5}, READER) == {"id": {"lt": "5"}}
        assert cursor_pagination_fields(fields, BACKWARD, {"id": 5}, READER) == {"id": {"gt": "5"}}

    def test_ascending_field(self):
        assert cursor_pagination_fields(BY_ID, FORWARD, {"id": 5}, READER) == {"id": {"gt": "5"}}
        assert cursor_pagination_fields(BY_ID, BACKWARD, {"id": 5}, READER) == {"id": {"lt": "5"}}

    def test_composite_ordering(self):
        fields = [
            CursorField(field="starts_at", direction="desc"),
            CursorField(field="id", direction="asc"),
        ]
        event = {"starts_at": datetime(2024, 5, 1, 9, 30), "id": 12}
        assert cursor_pagination_fields(fields, FORWARD, event, READER) == {
            "starts_at": {"lt": "2024-05-01T09:30:00"},
            "id": {"gt": "12"},
        }

    def test_reads_nested_attributes(self):
        class Venue:
            capacity = 300

        class Event:
            venue = Venue()

        fields = [CursorField(field="venue.capacity")]
        assert cursor_pagination_fields(fields, FORWARD, Event(), READER) == {
            "venue.capacity": {"gt": "300"}
        }

    def test_null_boundary_value_is_left_out(self):
        fields = [
            CursorField(field="rating", direction="desc"),
            CursorField(field="id", direction="asc"),
        ]
        event = {"rating": None, "id": 12}
        assert cursor_pagination_fields(fields, FORWARD, event, READER) == {"id": {"gt": "12"}}

    def test_missing_field(self):
        with pytest.raises(PropertyAccessError):
            cursor_pagination_fields(BY_ID, FORWARD, {"name": "x"}, READER)

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, ""),
            (True, "1"),
            (False, "0"),
            (20.0, "20"),
            (2.5, "2.5"),
            (7, "7"),
            (Status.OPEN, "open"),
            ("abc", "abc"),
        ],
    )
    def test_stringify(self, value, expected):
        assert stringify_cursor_value(value) == expected


class TestBuildCursorLinks:
    def test_first_page_with_more_data(self):
        items = [{"id": 10}, {"id": 20}]
        links = build_cursor_links(
            EVENTS, partial_page(1.0, 2.0), BY_ID, items[0], items[-1], property_reader=READER
        )
        assert links == {
            "self": "/events?type=talk",
            "next": "/events?type=talk&id%5Bgt%5D=20",
        }
        assert dict(parse_iri(links["next"], "page").parameters) == {
            "type": "talk",
            "id": {"gt": "20"},
        }

    def test_later_page_has_prev(self):
        links = build_cursor_links(
            EVENTS, partial_page(2.0, 2.0), BY_ID, {"id": 30}, {"id": 40}, property_reader=READER
        )
        assert links["prev"] == "/events?type=talk&id%5Blt%5D=30"
        assert links["next"] == "/events?type=talk&id%5Bgt%5D=40"

    def test_short_page_has_no_next(self):
        links = build_cursor_links(
            EVENTS, partial_page(1.0, 1.0), BY_ID, {"id": 10}, {"id": 10}, property_reader=READER
        )
        assert links == {"self": "/events?type=talk"}

    def test_known_last_page(self):
        config = PaginationConfig(
            is_paginator=True,
            is_paginated=True,
            current_page=3.0,
            items_per_page=2.0,
            last_page=3.0,
            total_items=6.0,
        )
        links = build_cursor_links(EVENTS, config, BY_ID, {"id": 50}, {"id": 60}, property_reader=READER)
        assert "next" not in links
        assert links["prev"] == "/events?type=talk&id%5Blt%5D=50"

    def test_empty_page_has_no_navigation(self):
        links = build_cursor_links(EVENTS, partial_page(2.0, 2.0), BY_ID, None, None, property_reader=READER)
        assert links == {"self": "/events?type=talk"}

    def test_cursor_filter_replaces_existing_parameter(self):
        parsed = parse_iri("/events?id%5Bgt%5D=20", "page")
        links = build_cursor_links(
            parsed, partial_page(1.0, 2.0), BY_ID, {"id": 30}, {"id": 40}, property_reader=READER
        )
        assert links["self"] == "/events?id%5Bgt%5D=20"
        assert links["next"] == "/events?id%5Bgt%5D=40"

    def test_bracketed_boundary_value_is_kept(self):
        by_sku = [CursorField(field="sku")]
        links = build_cursor_links(
            EVENTS, partial_page(1.0, 2.0), by_sku, {"sku": "A[1]"}, {"sku": "A[3]"}, property_reader=READER
        )
        assert links["next"] == "/events?type=talk&sku%5Bgt%5D=A%5B3%5D"
        assert dict(parse_iri(links["next"], "page").parameters) == {
            "type": "talk",
            "sku": {"gt": "A[3]"},
        }

    def test_url_generation_strategy(self):
        parsed = parse_iri("https://api.example.com/events", "page")
        links = build_cursor_links(
            parsed,
            partial_page(1.0, 2.0),
            BY_ID,
            {"id": 1},
            {"id": 2},
            property_reader=READER,
            url_generation_strategy=UrlGenerationStrategy.ABS_URL,
        )
        assert links["next"] == "https://api.example.com/events?id%5Bgt%5D=2"
