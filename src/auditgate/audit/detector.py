"""Classify a parsed JSON document as one of the known report shapes."""

from __future__ import annotations

from auditgate.constants.schema import CURRENT_ROOT_KEY, LEGACY_ROOT_KEY
from auditgate.model import SchemaKind


def detect(doc: object) -> SchemaKind:
    """Return the report shape of ``doc``.

    The legacy ``advisories`` mapping wins over the ``vulnerabilities``
    mapping when both are present. Never raises.
    """
    if not isinstance(doc, dict):
        return SchemaKind.UNRECOGNIZED
    if isinstance(doc.get(LEGACY_ROOT_KEY), dict):
        return SchemaKind.LEGACY_ADVISORIES
    if isinstance(doc.get(CURRENT_ROOT_KEY), dict):
        return SchemaKind.CURRENT_VULNERABILITIES
    return SchemaKind.UNRECOGNIZED


def describe_unrecognized(doc: object) -> str:
    """Explain why ``doc`` matched no known shape."""
    if not isinstance(doc, dict):
        return f"top-level JSON value is {_json_type_name(doc)}, expected an object"

    problems: list[str] = []
    for key in (LEGACY_ROOT_KEY, CURRENT_ROOT_KEY):
        if key in doc and not isinstance(doc[key], dict):
            problems.append(f"`{key}` is {_json_type_name(doc[key])}, expected an object")
    if problems:
        return "; ".join(problems)

    keys = ", ".join(sorted(str(key) for key in doc)) or "none"
    return f"neither `{LEGACY_ROOT_KEY}` nor `{CURRENT_ROOT_KEY}` present (top-level keys: {keys})"


def _json_type_name(value: object) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "a boolean"
    if isinstance(value, (int, float)):
        return "a number"
    if isinstance(value, str):
        return "a string"
    if isinstance(value, list):
        return "an array"
    return "an object"
