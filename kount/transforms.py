"""
Key-case conversion for JSON payloads.

The API speaks lowerCamelCase on the wire while callers and the domain
objects use snake_case. `deep_transform_keys` walks any decoded JSON value
(dicts, lists, scalars) and rewrites mapping keys only; values are left as
they are and list order is preserved.
"""

from __future__ import annotations

import re
from typing import Any, Callable, Mapping

_ACRONYM_BOUNDARY = re.compile(r"([A-Z\d]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")


def camelize_lower(key: Any) -> str:
    """order_number -> orderNumber, OrderNumber -> orderNumber."""
    parts = str(key).split("_")
    head = parts[0][:1].lower() + parts[0][1:]
    return head + "".join(part.capitalize() for part in parts[1:])


def underscore(key: Any) -> str:
    """deviceSessionId -> device_session_id, HTTPStatus -> http_status."""
    word = str(key)
    word = _ACRONYM_BOUNDARY.sub(r"\1_\2", word)
    word = _WORD_BOUNDARY.sub(r"\1_\2", word)
    return word.replace("-", "_").lower()


def deep_transform_keys(value: Any, transform: Callable[[Any], str]) -> Any:
    if isinstance(value, Mapping):
        return {transform(k): deep_transform_keys(v, transform) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [deep_transform_keys(item, transform) for item in value]
    return value


def to_wire_keys(value: Any) -> Any:
    return deep_transform_keys(value, camelize_lower)


def to_domain_keys(value: Any) -> Any:
    return deep_transform_keys(value, underscore)
