"""Structured (JSON) rendering of gate results."""

from __future__ import annotations

import json

from auditgate import __version__
from auditgate.constants.reporting import SCHEMA_VERSION, SARIF_TOOL_NAME
from auditgate.exceptions import AuditGateError
from auditgate.model import AuditResult, CanonicalVulnerability
from auditgate.reporting.errors import error_kind
from auditgate.types import JsonObject


def _record_payload(result: AuditResult, record: CanonicalVulnerability) -> JsonObject:
    payload = record.to_dict()
    payload["allowlisted"] = result.verdict.is_allowlisted(record)
    return payload


def build_report_payload(result: AuditResult, *, dry_run: bool = False) -> JsonObject:
    """Build the machine-readable report with stable field names."""
    report = result.report
    verdict = result.verdict
    return {
        "schemaVersion": SCHEMA_VERSION,
        "tool": {"name": SARIF_TOOL_NAME, "version": __version__},
        "schema": report.kind.value,
        "passed": verdict.passed,
        "dryRun": dry_run,
        "minSeverity": verdict.min_severity,
        "counts": report.counts.to_dict(),
        "countsSource": report.counts_source,
        "normalizedCounts": report.tallied.to_dict(),
        "skippedCount": report.skipped_count,
        "skippedReasons": list(report.skipped_reasons),
        "blocking": [_record_payload(result, record) for record in verdict.blocking],
        "accepted": [_record_payload(result, record) for record in verdict.accepted],
        "allowlisted": list(verdict.allowlisted_ids),
        "unusedAllowlist": list(verdict.unused_allowlist_ids),
        "allowlistNotices": [
            {
                "id": notice.entry.id,
                "package": notice.entry.package,
                "kind": notice.kind,
                "expires": notice.entry.expires.isoformat() if notice.entry.expires else None,
            }
            for notice in result.notices
        ],
    }


def build_error_payload(exc: AuditGateError) -> JsonObject:
    """Build the machine-readable explanation of an aborted run."""
    return {
        "schemaVersion": SCHEMA_VERSION,
        "tool": {"name": SARIF_TOOL_NAME, "version": __version__},
        "passed": False,
        "error": {"kind": error_kind(exc), "message": str(exc)},
    }


def render_json(result: AuditResult, *, dry_run: bool = False) -> str:
    return json.dumps(build_report_payload(result, dry_run=dry_run), indent=2)


def render_json_error(exc: AuditGateError) -> str:
    return json.dumps(build_error_payload(exc), indent=2)
