"""IRI, query string and property access helpers."""

from .iri import ParsedIri, UrlGenerationStrategy, create_iri, parse_iri
from .property_access import PropertyReader
from .query_params import build_query_string, parse_query_params, parse_query_string

__all__ = [
    "ParsedIri",
    "PropertyReader",
    "UrlGenerationStrategy",
    "build_query_string",
    "create_iri",
    "parse_iri",
    "parse_query_params",
    "parse_query_string",
]
