"""
Turns a caller's order (snake_case keys, any nesting) into the JSON body the
orders API expects (lowerCamelCase keys). No field validation happens here;
the API rejects malformed orders itself.
"""

from __future__ import annotations

import json
from typing import Any, Mapping

from kount.transforms import to_wire_keys


def build_order_body(order: Mapping[str, Any]) -> str:
    return json.dumps(to_wire_keys(order), default=str)
