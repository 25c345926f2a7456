"""Per-item normalizer producing ``{data, included}`` fragments."""

from __future__ import annotations

from typing import Any, Mapping

from jsonapi_collection.core.errors import ResourceClassNotFoundError
from jsonapi_collection.settings import settings
from jsonapi_collection.utils.iri import parse_iri
from jsonapi_collection.utils.query_params import parse_query_params

from .base import JSONAPISerializer


class JSONAPIItemNormalizer:
    """Normalize one object with the serializer registered for its class.

    ``include`` and ``fields`` are read from the context when present,
    otherwise from the query string of ``context["uri"]``.
    """

    def __init__(
        self,
        serializers: Mapping[type, type[JSONAPISerializer]],
        *,
        included_serializers: Mapping[str, type[JSONAPISerializer]] | None = None,
        page_parameter_name: str | None = None,
    ) -> None:
        self.serializers = dict(serializers)
        self.included_serializers = dict(included_serializers or {})
        self.page_parameter_name = page_parameter_name or settings.page_parameter_name

    def get_serializer(self, instance: Any) -> JSONAPISerializer:
        """Instantiate the serializer registered for ``instance``'s class or a base."""
        for klass in type(instance).__mro__:
            serializer = self.serializers.get(klass)
            if serializer is not None:
                return serializer()
        raise ResourceClassNotFoundError(
            f"No serializer registered for {type(instance).__name__}."
        )

    def get_included_serializer(self, relationship_path: str) -> JSONAPISerializer | None:
        """Return serializer for a relationship path if configured."""
        serializer = self.included_serializers.get(relationship_path)
        if serializer is None:
            serializer = self.included_serializers.get(relationship_path.split(".")[-1])
        return serializer() if serializer else None

    def get_query_params(self, context: Mapping[str, Any]) -> dict[str, Any]:
        if "include" in context or "fields" in context:
            return {
                "include": list(context.get("include") or []),
                "fields": dict(context.get("fields") or {}),
                "sort": list(context.get("sort") or []),
            }
        if "uri" in context:
            parsed = parse_iri(context["uri"], self.page_parameter_name)
            return parse_query_params(parsed.parameters)
        return {"include": [], "fields": {}, "sort": []}

    def build_included(
        self,
        instance: Any,
        include_paths: list[str],
        *,
        base_url: str | None = None,
        fields: Mapping[str, list[str]] | None = None,
    ) -> list[dict[str, Any]]:
        """Serialize the related resources reached through ``include_paths``."""
        fields = fields or {}
        included: list[dict[str, Any]] = []
        seen: set[tuple[str, str]] = set()

        for include_path in include_paths:
            parts = [part for part in include_path.split(".") if part]
            current_objects = [instance]
            for depth in range(len(parts)):
                relationship = parts[depth]
                next_objects: list[Any] = []
                for current in current_objects:
                    related = getattr(current, relationship, None)
                    if related is None:
                        continue
                    if isinstance(related, (list, tuple, set)):
                        next_objects.extend(related)
                    else:
                        next_objects.append(related)
                current_objects = next_objects

                serializer = self.get_included_serializer(".".join(parts[: depth + 1]))
                if serializer is None:
                    continue
                for related_instance in current_objects:
                    resource = serializer.to_resource(
                        related_instance,
                        base_url=base_url,
                        fields=fields.get(serializer.Meta.type_) or None,
                    )
                    key = (resource["type"], resource["id"])
                    if key not in seen:
                        seen.add(key)
                        included.append(resource)
        return included

    def normalize(
        self, instance: Any, format: str | None = None, context: Mapping[str, Any] | None = None
    ) -> dict[str, Any]:
        """Return the ``{data, included?}`` fragment of ``instance``."""
        context = context or {}
        params = self.get_query_params(context)
        include_paths: list[str] = params["include"]
        fields_map: Mapping[str, list[str]] = params["fields"]
        base_url = context.get("base_url")

        serializer = self.get_serializer(instance)
        resource_fields = fields_map.get(serializer.Meta.type_) or None
        if resource_fields and include_paths:
            # Included relationships stay visible under a sparse fieldset.
            first_level = {path.split(".")[0] for path in include_paths}
            resource_fields = list(dict.fromkeys([*resource_fields, *sorted(first_level)]))

        fragment: dict[str, Any] = {
            "data": serializer.to_resource(instance, base_url=base_url, fields=resource_fields)
        }
        if include_paths:
            fragment["included"] = self.build_included(
                instance, include_paths, base_url=base_url, fields=fields_map
            )
        return fragment
