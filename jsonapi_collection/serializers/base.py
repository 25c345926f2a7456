"""Base serializer turning model instances into JSON:API resource objects."""

from __future__ import annotations

from typing import Any, Mapping

from sqlalchemy import inspect
from sqlalchemy.exc import NoInspectionAvailable
from sqlalchemy.orm.attributes import NO_VALUE

from jsonapi_collection.utils.property_access import PropertyReader


class JSONAPISerializer:
    """Serialize objects (SQLAlchemy models or plain objects) into resource objects."""

    class Meta:
        """Serializer metadata (type, model, fields)."""

        type_: str = ""
        model: Any = None
        fields: list[str] = []

    property_reader = PropertyReader()

    def to_resource(
        self,
        instance: Any,
        *,
        base_url: str | None = None,
        fields: list[str] | None = None,
    ) -> dict[str, Any]:
        """Serialize ``instance`` into a JSON:API resource object.

        ``fields`` is the sparse fieldset requested for this type; it
        filters both attributes and relationships.
        """
        resource: dict[str, Any] = {
            "type": self.Meta.type_,
            "id": self.get_id(instance),
        }
        attributes = self.get_attributes(instance, fields=fields)
        if attributes:
            resource["attributes"] = attributes
        relationships = self.get_relationships(instance, base_url=base_url, fields=fields)
        if relationships:
            resource["relationships"] = relationships
        if base_url:
            resource["links"] = {"self": self._resource_url(base_url, resource["id"])}
        return resource

    def get_id(self, instance: Any) -> str:
        value = getattr(instance, "id", None)
        return "" if value is None else str(value)

    def get_attributes(
        self, instance: Any, *, fields: list[str] | None = None
    ) -> dict[str, Any]:
        """Return attributes from ``Meta.fields``, or public instance state."""
        allowed = set(fields) if fields else None
        if self.Meta.fields:
            names = [name for name in self.Meta.fields if name != "id"]
        else:
            state = getattr(instance, "__dict__", {})
            relationships = self._relationship_names(instance)
            names = [
                name
                for name in state
                if not name.startswith("_") and name != "id" and name not in relationships
            ]
        if allowed is not None:
            names = [name for name in names if name in allowed]
        return {name: self.property_reader.get_value(instance, name) for name in names}

    def get_relationships(
        self,
        instance: Any,
        *,
        base_url: str | None = None,
        fields: list[str] | None = None,
    ) -> Mapping[str, Any]:
        """Return relationship objects declared on the SQLAlchemy mapper.

        Relationships are only rendered when a base URL is known, since
        their links are mandatory here. Unloaded relationships are reported
        as empty rather than lazy-loaded.
        """
        if base_url is None:
            return {}
        mapper = self._mapper(instance)
        if mapper is None:
            return {}

        allowed = set(fields) if fields else None
        resource_id = self.get_id(instance)
        relationships: dict[str, Any] = {}
        for relationship in mapper.relationships:
            if allowed is not None and relationship.key not in allowed:
                continue
            relationships[relationship.key] = {
                "links": self._relationship_links(base_url, resource_id, relationship.key),
                "data": self._relationship_data(instance, relationship),
            }
        return relationships

    def _mapper(self, instance: Any) -> Any:
        try:
            return inspect(type(instance))
        except NoInspectionAvailable:
            return None

    def _relationship_names(self, instance: Any) -> set[str]:
        mapper = self._mapper(instance)
        if mapper is None:
            return set()
        return {relationship.key for relationship in mapper.relationships}

    def _resource_url(self, base_url: str, resource_id: str) -> str:
        return f"{base_url.rstrip('/')}/{self.Meta.type_}/{resource_id}"

    def _relationship_links(
        self, base_url: str, resource_id: str, relationship: str
    ) -> dict[str, str]:
        resource_path = self._resource_url(base_url, resource_id)
        return {
            "self": f"{resource_path}/relationships/{relationship}",
            "related": f"{resource_path}/{relationship}",
        }

    def _relationship_data(self, instance: Any, relationship: Any) -> Any:
        empty: Any = [] if relationship.uselist else None
        if inspect(instance).attrs[relationship.key].loaded_value is NO_VALUE:
            return empty
        related = getattr(instance, relationship.key, None)
        if relationship.uselist:
            return [self._identifier(item) for item in related or []]
        if related is None:
            return None
        return self._identifier(related)

    def _identifier(self, related: Any) -> dict[str, str]:
        type_name = getattr(related, "__tablename__", type(related).__name__.lower())
        return {"type": type_name, "id": self.get_id(related)}
