"""SARIF 2.1.0 rendering of gate results."""

from __future__ import annotations

import json
from typing import Any

from auditgate import __version__
from auditgate.constants.reporting import (
    SARIF_SCHEMA_URI,
    SARIF_SEVERITY_MAP,
    SARIF_TOOL_NAME,
    SARIF_VERSION,
)
from auditgate.model import AuditResult, CanonicalVulnerability


def _result_level(record: CanonicalVulnerability, *, blocking: bool) -> str:
    """Blocking findings are errors or warnings by severity; accepted ones are notes."""
    if not blocking:
        return "note"
    return "error" if SARIF_SEVERITY_MAP.get(record.severity) == "error" else "warning"


def _build_sarif_result(result: AuditResult, record: CanonicalVulnerability, *, blocking: bool) -> dict[str, Any]:
    """Map a single record to a SARIF result object."""
    text = record.title or f"{record.severity} vulnerability in {record.package}"
    payload: dict[str, Any] = {
        "ruleId": record.id,
        "level": _result_level(record, blocking=blocking),
        "message": {"text": f"{record.package}: {text}"},
        "locations": [
            {
                "logicalLocations": [{"name": record.package, "kind": "module"}],
            },
        ],
        "partialFingerprints": {"advisoryPackage": f"{record.id}:{record.package}"},
        "properties": {
            "severity": record.severity,
            "package": record.package,
            "vulnerableVersions": record.vulnerable_versions,
            "source": record.source.value,
            "disposition": "blocking" if blocking else "accepted",
        },
    }
    if record.fix_available is not None:
        payload["properties"]["fixAvailable"] = record.fix_available

    if result.verdict.is_allowlisted(record):
        entry = result.allowlist_entry(record.id)
        suppression: dict[str, Any] = {"kind": "external"}
        if entry is not None and entry.reason:
            suppression["justification"] = entry.reason
        payload["suppressions"] = [suppression]
    return payload


def _build_sarif_rules(records: list[CanonicalVulnerability]) -> list[dict[str, Any]]:
    """Derive minimal SARIF rule descriptors from observed advisory ids."""
    seen: dict[str, CanonicalVulnerability] = {}
    for record in records:
        seen.setdefault(record.id, record)

    rules: list[dict[str, Any]] = []
    for advisory_id in sorted(seen):
        record = seen[advisory_id]
        rule: dict[str, Any] = {
            "id": advisory_id,
            "shortDescription": {"text": record.title or advisory_id},
            "defaultConfiguration": {"level": SARIF_SEVERITY_MAP.get(record.severity, "note")},
        }
        if record.url:
            rule["helpUri"] = record.url
        rules.append(rule)
    return rules


def build_sarif_envelope(result: AuditResult) -> dict[str, Any]:
    """Build a complete SARIF 2.1.0 document; blocking results first, then accepted."""
    verdict = result.verdict
    records = [*verdict.blocking, *verdict.accepted]
    results = [_build_sarif_result(result, record, blocking=True) for record in verdict.blocking]
    results.extend(_build_sarif_result(result, record, blocking=False) for record in verdict.accepted)

    run_payload: dict[str, Any] = {
        "tool": {
            "driver": {
                "name": SARIF_TOOL_NAME,
                "version": __version__,
                "rules": _build_sarif_rules(records),
            },
        },
        "results": results,
        "properties": {
            "passed": verdict.passed,
            "minSeverity": verdict.min_severity,
            "schema": result.report.kind.value,
            "skippedCount": result.report.skipped_count,
        },
    }
    return {
        "$schema": SARIF_SCHEMA_URI,
        "version": SARIF_VERSION,
        "runs": [run_payload],
    }


def render_sarif(result: AuditResult) -> str:
    return json.dumps(build_sarif_envelope(result), indent=2)
