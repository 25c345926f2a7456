"""Helpers for bracketed query strings and JSON:API parameter families."""

from __future__ import annotations

import re
from typing import Any, Mapping
from urllib.parse import parse_qsl, quote

_BRACKETED_KEY = re.compile(r"^([^\[\]]+)((?:\[[^\[\]]*\])+)$")
_KEY_SEGMENT = re.compile(r"\[([^\[\]]*)\]")


def _split_csv(value: str) -> list[str]:
    return [item for item in (part.strip() for part in value.split(",")) if item]


def _split_key(key: str) -> list[str]:
    match = _BRACKETED_KEY.match(key)
    if not match:
        return [key]
    return [match.group(1), *_KEY_SEGMENT.findall(match.group(2))]


def _assign(parameters: dict[str, Any], segments: list[str], value: str) -> None:
    """Store ``value`` under a ``a[b][]`` style key path.

    An empty segment appends to a list. A named segment under a list turns
    that list into a mapping keyed by position.
    """
    node: Any = parameters
    for segment, following in zip(segments, segments[1:]):
        if isinstance(node, list):
            child: Any = [] if following == "" else {}
            node.append(child)
        else:
            if segment == "":
                segment = str(len(node))
            child = node.get(segment)
            if isinstance(child, list) and following != "":
                child = {str(index): item for index, item in enumerate(child)}
                node[segment] = child
            elif not isinstance(child, (dict, list)):
                child = [] if following == "" else {}
                node[segment] = child
        node = child

    last = segments[-1]
    if isinstance(node, list):
        node.append(value)
    elif last == "":
        node[str(len(node))] = value
    else:
        node[last] = value


def parse_query_string(query: str) -> dict[str, Any]:
    """Parse a query string into nested mappings, honouring bracketed keys.

    ``filter[id][gt]=3&tags[]=a&tags[]=b`` becomes
    ``{"filter": {"id": {"gt": "3"}}, "tags": ["a", "b"]}``.
    """
    parameters: dict[str, Any] = {}
    for key, value in parse_qsl(query, keep_blank_values=True):
        _assign(parameters, _split_key(key), value)
    return parameters


def _scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _flatten(prefix: str, value: Any, pairs: list[tuple[str, str]]) -> None:
    if value is None:
        return
    if isinstance(value, Mapping):
        for key, child in value.items():
            _flatten(f"{prefix}[{key}]" if prefix else str(key), child, pairs)
    elif isinstance(value, (list, tuple)):
        for child in value:
            _flatten(f"{prefix}[]", child, pairs)
    else:
        pairs.append((prefix, _scalar(value)))


def build_query_string(parameters: Mapping[str, Any]) -> str:
    """Serialize nested parameters using bracket notation.

    Keys and values are percent-encoded per RFC 3986, ``None`` values are
    skipped and list items are written under an empty ``[]`` key segment.
    """
    pairs: list[tuple[str, str]] = []
    _flatten("", parameters, pairs)
    return "&".join(f"{quote(key, safe='')}={quote(value, safe='')}" for key, value in pairs)


def parse_query_params(parameters: Mapping[str, Any]) -> dict[str, Any]:
    """Normalize the JSON:API ``include``, ``fields`` and ``sort`` families.

    ``parameters`` is the nested mapping produced by :func:`parse_query_string`.
    """
    normalized: dict[str, Any] = {"include": [], "fields": {}, "sort": []}

    include = parameters.get("include")
    if isinstance(include, str):
        normalized["include"] = _split_csv(include)

    fields = parameters.get("fields")
    if isinstance(fields, Mapping):
        for resource_type, value in fields.items():
            if isinstance(value, str):
                normalized["fields"][resource_type] = _split_csv(value)

    sort = parameters.get("sort")
    if isinstance(sort, str):
        normalized["sort"] = [
            {"field": field.lstrip("-"), "direction": "desc" if field.startswith("-") else "asc"}
            for field in _split_csv(sort)
        ]

    return normalized
