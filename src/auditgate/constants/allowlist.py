"""JSON Schemas for allowlist files.

An allowlist is a list whose items are either bare advisory ids or
mappings carrying the id plus justification metadata.
"""

from __future__ import annotations

from typing import Any

ALLOWLIST_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "array",
    "items": {"type": ["string", "object"]},
}

ALLOWLIST_ENTRY_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "properties": {
        "id": {"type": ["string", "integer"], "minLength": 1},
        "package": {"type": "string", "minLength": 1},
        "reason": {"type": "string", "minLength": 1},
        "expires": {"type": "string"},
        "notes": {"type": ["string", "null"]},
        "reviewedOn": {"type": ["string", "null"]},
    },
    "required": ["id"],
    "additionalProperties": False,
}

ALLOWLIST_ENTRY_KEYS: tuple[str, ...] = tuple(ALLOWLIST_ENTRY_SCHEMA["properties"])
