"""Project detected report shapes into canonical vulnerability records.

Each shape has one isolated mapping function registered in ``_NORMALIZERS``.
A mapping function walks the shape's entries in document order and raises
``MalformedRecordError`` for an entry missing a mandatory field; the walk
catches it, counts the entry as skipped and carries on.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeAlias

from auditgate.audit.counts import resolve_counts
from auditgate.audit.detector import describe_unrecognized
from auditgate.constants.schema import (
    CURRENT_FIX_FIELD,
    CURRENT_NAME_FIELD,
    CURRENT_RANGE_FIELD,
    CURRENT_ROOT_KEY,
    CURRENT_SOURCE_FIELD,
    CURRENT_VIA_FIELD,
    DEFAULT_VULNERABLE_VERSIONS,
    LEGACY_PACKAGE_FIELD,
    LEGACY_RANGE_FIELD,
    LEGACY_ROOT_KEY,
)
from auditgate.constants.severity import SEVERITY_RANK
from auditgate.exceptions import MalformedRecordError, UnsupportedSchemaError
from auditgate.model import CanonicalVulnerability, NormalizedReport, SchemaKind, SeverityCounts
from auditgate.types import SeverityLevel

logger = logging.getLogger(__name__)

_Mapped: TypeAlias = tuple[list[CanonicalVulnerability], list[str]]


def normalize(doc: object, kind: SchemaKind) -> NormalizedReport:
    """Normalize ``doc`` of the given shape into canonical records and counts."""
    mapper = _NORMALIZERS.get(kind)
    if mapper is None or not isinstance(doc, dict):
        raise UnsupportedSchemaError(describe_unrecognized(doc))

    records, skipped = mapper(doc)
    counts, counts_source = resolve_counts(doc, records)
    logger.debug(
        "Normalized %s report: %d records, %d skipped, counts from %s",
        kind.value,
        len(records),
        len(skipped),
        counts_source,
    )
    return NormalizedReport(
        kind=kind,
        records=tuple(records),
        counts=counts,
        counts_source=counts_source,
        tallied=SeverityCounts.tally(records),
        skipped_count=len(skipped),
        skipped_reasons=tuple(skipped),
    )


def _normalize_legacy(doc: dict[str, object]) -> _Mapped:
    """Map ``advisories`` entries, one record per advisory key."""
    records: list[CanonicalVulnerability] = []
    skipped: list[str] = []
    advisories = doc.get(LEGACY_ROOT_KEY)
    if not isinstance(advisories, dict):
        raise UnsupportedSchemaError(f"`{LEGACY_ROOT_KEY}` is not an object")

    for key, entry in advisories.items():
        try:
            records.append(_legacy_record(str(key), entry))
        except MalformedRecordError as exc:
            logger.warning("Skipping malformed record %s", exc)
            skipped.append(str(exc))
    return records, skipped


def _legacy_record(key: str, entry: object) -> CanonicalVulnerability:
    where = f"{LEGACY_ROOT_KEY}.{key}"
    if not key.strip():
        raise MalformedRecordError(where, "advisory key is empty")
    if not isinstance(entry, dict):
        raise MalformedRecordError(where, "advisory is not an object")
    return CanonicalVulnerability(
        id=key,
        package=_require_text(entry, LEGACY_PACKAGE_FIELD, where),
        severity=_require_severity(entry, where),
        title=_optional_text(entry, "title"),
        url=_optional_text(entry, "url"),
        vulnerable_versions=_optional_text(entry, LEGACY_RANGE_FIELD) or DEFAULT_VULNERABLE_VERSIONS,
        source=SchemaKind.LEGACY_ADVISORIES,
    )


def _normalize_current(doc: dict[str, object]) -> _Mapped:
    """Map ``vulnerabilities`` entries, one record per detailed ``via`` element.

    String ``via`` elements point at another package entry that carries the
    advisory itself, so they are skipped without being counted.
    """
    records: list[CanonicalVulnerability] = []
    skipped: list[str] = []
    packages = doc.get(CURRENT_ROOT_KEY)
    if not isinstance(packages, dict):
        raise UnsupportedSchemaError(f"`{CURRENT_ROOT_KEY}` is not an object")

    for package_key, entry in packages.items():
        where = f"{CURRENT_ROOT_KEY}.{package_key}"
        try:
            package_entry, via = _require_via(entry, where)
        except MalformedRecordError as exc:
            logger.warning("Skipping malformed record %s", exc)
            skipped.append(str(exc))
            continue

        fix_available = _fix_available(package_entry.get(CURRENT_FIX_FIELD))
        for index, item in enumerate(via):
            if isinstance(item, str):
                continue
            try:
                records.append(
                    _current_record(str(package_key), item, f"{where}.{CURRENT_VIA_FIELD}[{index}]", fix_available)
                )
            except MalformedRecordError as exc:
                logger.warning("Skipping malformed record %s", exc)
                skipped.append(str(exc))
    return records, skipped


def _require_via(entry: object, where: str) -> tuple[dict[str, object], list[object]]:
    if not isinstance(entry, dict):
        raise MalformedRecordError(where, "package entry is not an object")
    via = entry.get(CURRENT_VIA_FIELD)
    if not isinstance(via, list):
        raise MalformedRecordError(where, f"`{CURRENT_VIA_FIELD}` is missing or not an array")
    return entry, via


def _current_record(
    package_key: str,
    item: object,
    where: str,
    fix_available: bool | None,
) -> CanonicalVulnerability:
    if not isinstance(item, dict):
        raise MalformedRecordError(where, "via element is neither an object nor a package reference")

    source = item.get(CURRENT_SOURCE_FIELD)
    if isinstance(source, bool) or not isinstance(source, (int, str)) or not str(source).strip():
        raise MalformedRecordError(where, f"missing advisory `{CURRENT_SOURCE_FIELD}`")

    name = item.get(CURRENT_NAME_FIELD)
    package = name.strip() if isinstance(name, str) and name.strip() else package_key
    if not package:
        raise MalformedRecordError(where, "missing package name")

    return CanonicalVulnerability(
        id=str(source).strip(),
        package=package,
        severity=_require_severity(item, where),
        title=_optional_text(item, "title"),
        url=_optional_text(item, "url"),
        vulnerable_versions=_optional_text(item, CURRENT_RANGE_FIELD) or DEFAULT_VULNERABLE_VERSIONS,
        source=SchemaKind.CURRENT_VULNERABILITIES,
        fix_available=fix_available,
    )


def _fix_available(value: object) -> bool | None:
    """``fixAvailable`` is either a boolean or an object describing the fix."""
    if isinstance(value, bool):
        return value
    if isinstance(value, dict):
        return True
    return None


def _require_text(entry: dict[str, object], field: str, where: str) -> str:
    value = entry.get(field)
    if not isinstance(value, str) or not value.strip():
        raise MalformedRecordError(where, f"missing `{field}`")
    return value.strip()


def _require_severity(entry: dict[str, object], where: str) -> SeverityLevel:
    value = entry.get("severity")
    if not isinstance(value, str):
        raise MalformedRecordError(where, "missing `severity`")
    level = value.strip().lower()
    if level not in SEVERITY_RANK:
        raise MalformedRecordError(where, f"unknown severity {value!r}")
    return level  # type: ignore[return-value]


def _optional_text(entry: dict[str, object], field: str) -> str:
    value = entry.get(field)
    return value if isinstance(value, str) else ""


_NORMALIZERS: dict[SchemaKind, Callable[[dict[str, object]], _Mapped]] = {
    SchemaKind.LEGACY_ADVISORIES: _normalize_legacy,
    SchemaKind.CURRENT_VULNERABILITIES: _normalize_current,
}
