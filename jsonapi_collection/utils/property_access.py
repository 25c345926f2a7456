"""Read values from mappings and objects by dotted property path."""

from __future__ import annotations

from typing import Any, Mapping

from jsonapi_collection.core.errors import PropertyAccessError


class PropertyReader:
    """Resolve ``author.name`` style paths through mappings and attributes."""

    def get_value(self, obj: Any, path: str) -> Any:
        """Return the value at ``path``, raising ``PropertyAccessError`` if absent."""
        current = obj
        for segment in path.split("."):
            if isinstance(current, Mapping):
                if segment not in current:
                    raise PropertyAccessError(
                        f'Cannot read "{path}": key "{segment}" does not exist.'
                    )
                current = current[segment]
            elif hasattr(current, segment):
                current = getattr(current, segment)
            else:
                raise PropertyAccessError(
                    f'Cannot read "{path}" from {type(obj).__name__}: '
                    f'no property "{segment}".'
                )
        return current
