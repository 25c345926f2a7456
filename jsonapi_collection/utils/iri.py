"""Parse request IRIs and rebuild them with new query parameters."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping
from urllib.parse import SplitResult, urlsplit

from jsonapi_collection.core.errors import InvalidIriError

from .query_params import build_query_string, parse_query_string


class UrlGenerationStrategy(str, Enum):
    """How much of the request IRI generated links keep."""

    ABS_PATH = "abs_path"
    ABS_URL = "abs_url"
    NET_PATH = "net_path"


@dataclass(frozen=True)
class ParsedIri:
    """A request IRI split into its parts and its (read-only) query parameters."""

    parts: SplitResult
    parameters: Mapping[str, Any]


def parse_iri(iri: str, page_parameter_name: str) -> ParsedIri:
    """Split ``iri`` and parse its query, dropping the page parameter."""
    try:
        parts = urlsplit(iri)
        # Accessing the port validates it.
        parts.port
    except ValueError as exc:
        raise InvalidIriError(f'The request URI "{iri}" is malformed.') from exc

    parameters = parse_query_string(parts.query)
    parameters.pop(page_parameter_name, None)
    return ParsedIri(parts=parts, parameters=MappingProxyType(parameters))


def create_iri(
    parts: SplitResult,
    parameters: Mapping[str, Any],
    page_parameter_name: str | None = None,
    page: float | None = None,
    url_generation_strategy: UrlGenerationStrategy = UrlGenerationStrategy.ABS_PATH,
) -> str:
    """Rebuild an IRI from its parts with ``parameters`` as the query.

    When both ``page_parameter_name`` and ``page`` are given the page is set
    on a copy of ``parameters``; the mapping passed in is never modified.
    """
    if page is not None and page_parameter_name is not None:
        parameters = {**parameters, page_parameter_name: page}
    query = build_query_string(parameters)

    url = ""
    if (
        url_generation_strategy in (UrlGenerationStrategy.ABS_URL, UrlGenerationStrategy.NET_PATH)
        and parts.netloc
    ):
        if url_generation_strategy is UrlGenerationStrategy.ABS_URL and parts.scheme:
            url += f"{parts.scheme}://"
        else:
            url += "//"
        url += parts.netloc

    url += parts.path
    if query:
        url += f"?{query}"
    if parts.fragment:
        url += f"#{parts.fragment}"
    return url
