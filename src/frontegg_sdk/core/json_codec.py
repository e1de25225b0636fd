"""JSON encoding and decoding of API bodies."""

from __future__ import annotations

import json
from typing import Any


class JsonCodec:
    """Tolerant JSON codec for request and response bodies."""

    def decode(self, body: str | bytes | None) -> Any:
        """Decode a body, returning None when it is empty or not JSON."""
        if not body:
            return None
        try:
            return json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError):
            return None

    def encode(self, value: Any) -> str:
        """Encode a value as compact JSON text."""
        return json.dumps(value, separators=(",", ":"))
