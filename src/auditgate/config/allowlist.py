"""Allowlist file loading, validation and expiry notices."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from datetime import UTC, date, datetime, timedelta
from pathlib import Path
from typing import Any

import jsonschema
import yaml

from auditgate.constants.allowlist import ALLOWLIST_ENTRY_KEYS, ALLOWLIST_ENTRY_SCHEMA, ALLOWLIST_SCHEMA
from auditgate.constants.validation import ALW001, ALW002, ALW003, ALW004
from auditgate.exceptions import ConfigError
from auditgate.exceptions.validation import ValidationError, format_errors
from auditgate.model import AllowlistEntry, AllowlistNotice

logger = logging.getLogger(__name__)

_LIST_VALIDATOR = jsonschema.Draft202012Validator(ALLOWLIST_SCHEMA)
_ENTRY_VALIDATOR = jsonschema.Draft202012Validator(ALLOWLIST_ENTRY_SCHEMA)

_DATE_FIELDS: tuple[str, ...] = ("expires", "reviewedOn")


def load_allowlist(path: Path) -> tuple[AllowlistEntry, ...]:
    """Load and validate an allowlist file, raising ConfigError with every problem found."""
    data, errors = _read_and_validate(path)
    if errors:
        raise ConfigError(f"Invalid allowlist file {path}:\n{format_errors(errors)}")
    entries = tuple(_build_entry(item) for item in data)
    logger.info("Loaded %d allowlist entries from %s", len(entries), path)
    return entries


def validate_allowlist_file(path: Path) -> list[ValidationError]:
    """Validate an allowlist file and return all validation errors without raising."""
    _, errors = _read_and_validate(path)
    return errors


def entries_from_ids(ids: Iterable[str]) -> tuple[AllowlistEntry, ...]:
    """Wrap bare advisory ids (``--allow`` flags, config ``allow``) as entries."""
    return tuple(AllowlistEntry(id=advisory_id) for advisory_id in ids)


def merge_entries(*groups: Iterable[AllowlistEntry]) -> tuple[AllowlistEntry, ...]:
    """Merge entry groups, keeping the first entry seen for each id."""
    merged: dict[str, AllowlistEntry] = {}
    for group in groups:
        for entry in group:
            merged.setdefault(entry.id, entry)
    return tuple(merged.values())


def allowlist_notices(
    entries: Iterable[AllowlistEntry],
    *,
    today: date,
    warning_days: int,
) -> tuple[AllowlistNotice, ...]:
    """Report entries that have expired or expire within ``warning_days``.

    Notices are informational and never change the verdict.
    """
    horizon = today + timedelta(days=warning_days)
    notices: list[AllowlistNotice] = []
    for entry in entries:
        if entry.expires is None:
            continue
        if entry.expires < today:
            notices.append(AllowlistNotice(entry=entry, kind="expired"))
        elif entry.expires <= horizon:
            notices.append(AllowlistNotice(entry=entry, kind="expiring"))
    return tuple(notices)


def parse_iso_date(value: str) -> date | None:
    """Parse ``YYYY-MM-DD`` or an ISO 8601 timestamp into a UTC calendar date."""
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(UTC)
    return parsed.date()


def _read_and_validate(path: Path) -> tuple[list[Any], list[ValidationError]]:
    path_str = str(path)
    if not path.is_file():
        return [], [
            ValidationError(code=ALW001, path=path_str, field="", message=f"allowlist file not found: {path}")
        ]

    try:
        text = path.read_text(encoding="utf-8-sig")
        data = json.loads(text) if path.suffix.lower() == ".json" else yaml.safe_load(text)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as exc:
        return [], [
            ValidationError(
                code=ALW002,
                path=path_str,
                field="",
                message=f"cannot parse allowlist: {exc}",
                hint="check for trailing commas, unescaped quotes and mismatched brackets",
            )
        ]

    if data is None:
        data = []
    data = _stringify_dates(data)

    errors = [
        ValidationError(code=ALW003, path=path_str, field="", message=f"allowlist {error.message}")
        for error in _LIST_VALIDATOR.iter_errors(data)
    ]
    if errors:
        return [], errors

    for index, item in enumerate(data):
        if isinstance(item, str):
            if not item.strip():
                errors.append(
                    ValidationError(code=ALW003, path=path_str, field=f"[{index}]", message=f"entry {index}: empty id")
                )
            continue
        errors.extend(_entry_errors(item, index, path_str))

    return data, errors


def _entry_errors(item: dict[str, Any], index: int, path_str: str) -> list[ValidationError]:
    errors: list[ValidationError] = []
    for error in sorted(_ENTRY_VALIDATOR.iter_errors(item), key=lambda e: [str(part) for part in e.absolute_path]):
        field = ".".join(str(part) for part in error.absolute_path)
        hint = ""
        if error.validator == "additionalProperties":
            hint = f"allowed keys: {', '.join(ALLOWLIST_ENTRY_KEYS)}"
        errors.append(
            ValidationError(
                code=ALW003,
                path=path_str,
                field=f"[{index}].{field}" if field else f"[{index}]",
                message=f"entry {index}: {error.message}",
                hint=hint,
            )
        )

    for field in _DATE_FIELDS:
        value = item.get(field)
        if isinstance(value, str) and parse_iso_date(value) is None:
            errors.append(
                ValidationError(
                    code=ALW004,
                    path=path_str,
                    field=f"[{index}].{field}",
                    message=f"entry {index}: `{field}` is not an ISO 8601 date: {value!r}",
                    hint="use YYYY-MM-DD or a full timestamp such as 2025-01-31T00:00:00Z",
                )
            )
    return errors


def _stringify_dates(data: Any) -> Any:
    """YAML loads unquoted dates as ``date`` objects; turn them back into ISO strings."""
    if isinstance(data, list):
        return [_stringify_dates(item) for item in data]
    if isinstance(data, dict):
        return {key: _stringify_dates(value) for key, value in data.items()}
    if isinstance(data, (date, datetime)):
        return data.isoformat()
    return data


def _build_entry(item: str | dict[str, Any]) -> AllowlistEntry:
    if isinstance(item, str):
        return AllowlistEntry(id=item.strip())
    return AllowlistEntry(
        id=str(item["id"]).strip(),
        package=item.get("package"),
        reason=item.get("reason"),
        expires=_optional_date(item.get("expires")),
        notes=item.get("notes"),
        reviewed_on=_optional_date(item.get("reviewedOn")),
    )


def _optional_date(value: str | None) -> date | None:
    return parse_iso_date(value) if value else None
