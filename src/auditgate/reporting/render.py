"""Format dispatch for gate reports."""

from __future__ import annotations

from auditgate.exceptions import AuditGateError
from auditgate.model import AuditResult
from auditgate.reporting.human import HumanReporter, render_human_error
from auditgate.reporting.sarif import render_sarif
from auditgate.reporting.structured import render_json, render_json_error
from auditgate.types import OutputFormat


def render(result: AuditResult, fmt: OutputFormat, *, color: bool = False, dry_run: bool = False) -> str:
    """Render ``result`` in the requested format; total over well-formed results."""
    if fmt == "json":
        return render_json(result, dry_run=dry_run)
    if fmt == "sarif":
        return render_sarif(result)
    return HumanReporter(result, color=color, dry_run=dry_run).render()


def render_error(exc: AuditGateError, fmt: OutputFormat) -> str:
    """Render the explanation of an aborted run; SARIF consumers get the JSON form."""
    if fmt in ("json", "sarif"):
        return render_json_error(exc)
    return render_human_error(exc)
