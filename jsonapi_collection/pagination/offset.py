"""Page-number pagination links."""

from __future__ import annotations

from jsonapi_collection.utils.iri import ParsedIri, UrlGenerationStrategy, create_iri

from .base import PaginationConfig, has_next_page, has_previous_page


def build_offset_links(
    parsed: ParsedIri,
    page_parameter_name: str,
    config: PaginationConfig,
    url_generation_strategy: UrlGenerationStrategy = UrlGenerationStrategy.ABS_PATH,
) -> dict[str, str]:
    """Build ``self``/``first``/``last``/``prev``/``next`` links from page numbers.

    Only ``self`` is returned for unpaginated collections, and it carries
    no page parameter.
    """

    def page_link(page: float | None) -> str:
        return create_iri(
            parsed.parts,
            parsed.parameters,
            page_parameter_name,
            page,
            url_generation_strategy,
        )

    if not config.is_paginated:
        return {"self": page_link(None)}

    current_page = config.current_page
    links = {"self": page_link(current_page)}
    if config.last_page is not None:
        links["first"] = page_link(1.0)
        links["last"] = page_link(config.last_page)
    if has_previous_page(config):
        links["prev"] = page_link(current_page - 1.0)
    if has_next_page(config):
        links["next"] = page_link(current_page + 1.0)
    return links
