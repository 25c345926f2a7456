"""JSON:API document construction."""

from typing import Any, Iterable, Mapping


class JSONAPIDocumentBuilder:
    """Build JSON:API v1.1 documents from normalized data."""

    def build_collection(
        self,
        resources: Iterable[Any],
        *,
        included: Iterable[Any] | None = None,
        links: Mapping[str, Any] | None = None,
        meta: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Return a JSON:API document for a collection of resources.

        Keys are emitted as ``links``, ``meta``, ``data``, ``included``.
        ``meta`` is dropped when empty; ``included`` is kept whenever it is
        given, even empty, so callers decide whether the member exists.
        """
        document: dict[str, Any] = {}
        if links:
            document["links"] = dict(links)
        if meta:
            document["meta"] = dict(meta)
        document["data"] = list(resources)
        if included is not None:
            document["included"] = list(included)
        return document

    def build_error(self, errors: Iterable[Mapping[str, Any]]) -> dict[str, Any]:
        """Return a JSON:API error document from error objects."""
        return {"errors": [dict(error) for error in errors]}
