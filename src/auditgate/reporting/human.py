"""Human-readable stdout reporter for gate results."""

from __future__ import annotations

from auditgate.constants.branding import REPORT_TITLE
from auditgate.constants.reporting import (
    ANSI_BOLD,
    ANSI_DIM,
    ANSI_GREEN,
    ANSI_RED,
    ANSI_RESET,
    SEVERITY_COLORS,
)
from auditgate.constants.severity import SEVERITY_LEVELS
from auditgate.exceptions import AuditGateError
from auditgate.model import AuditResult, CanonicalVulnerability, SeverityCounts
from auditgate.reporting.errors import error_kind
from auditgate.types import SeverityLevel


def _colorize(text: str, color: str) -> str:
    return f"{color}{text}{ANSI_RESET}"


class HumanReporter:
    """Formats a gate result as a grouped, human-readable report."""

    def __init__(self, result: AuditResult, *, color: bool = False, dry_run: bool = False) -> None:
        self._result = result
        self._color = color
        self._dry_run = dry_run

    def render(self) -> str:
        """Render the full report as a single string."""
        verdict = self._result.verdict
        sections = [self._render_header()]
        if not verdict.blocking and not verdict.accepted:
            sections.append("  No vulnerabilities found.\n")
        else:
            sections.append(self._render_group("Blocking findings", verdict.blocking))
            sections.append(self._render_group("Accepted findings", verdict.accepted))
        sections.append(self._render_skipped())
        sections.append(self._render_notices())
        sections.append(self._render_footer())
        return "\n".join(section for section in sections if section)

    def _render_header(self) -> str:
        r = self._result
        report = r.report
        verdict = r.verdict
        sep = "  " + "─" * 38
        finding_count = len(verdict.blocking) + len(verdict.accepted)

        lines = [
            "",
            f"  {self._bold(REPORT_TITLE)}",
            sep,
            "",
            f"  Verdict     {self._render_verdict()}",
            f"  Schema      {report.kind.value}",
            f"  Threshold   {verdict.min_severity}",
            f"  Findings    {finding_count} ({len(verdict.blocking)} blocking / {len(verdict.accepted)} accepted)",
            f"  Severities  {self._format_severity_breakdown(report.counts)}",
        ]
        if report.skipped_count:
            lines.append(f"  Skipped     {report.skipped_count} malformed record(s)")
        if report.counts_source == "metadata" and not report.counts_match:
            lines.append(
                f"  Counts      report metadata lists {report.counts.total}, "
                f"normalized {report.tallied.total} + {report.skipped_count} skipped"
            )
        if r.policy.allowlist:
            lines.append(f"  Allowlist   {self._format_allowlist()}")
        if self._dry_run:
            lines.append("  Mode        dry run (exit code 0 regardless of verdict)")
        lines.append(f"  Duration    {r.duration_seconds:.3f}s")
        lines.append("")
        return "\n".join(lines)

    def _render_verdict(self) -> str:
        verdict = self._result.verdict
        if verdict.passed:
            state = _colorize("PASS", ANSI_GREEN) if self._color else "PASS"
            return f"{state} (no unaccepted findings >= {verdict.min_severity})"
        state = _colorize("FAIL", ANSI_RED) if self._color else "FAIL"
        return f"{state} ({len(verdict.blocking)} finding(s) >= {verdict.min_severity} not allowlisted)"

    def _render_group(self, title: str, records: tuple[CanonicalVulnerability, ...]) -> str:
        """Render findings grouped by severity, most severe first, input order within a group."""
        if not records:
            return ""

        groups: dict[SeverityLevel, list[CanonicalVulnerability]] = {}
        for record in records:
            groups.setdefault(record.severity, []).append(record)

        w_id = max(len(record.id) for record in records)
        w_pkg = max(len(record.package) for record in records)
        lines = [f"  {self._bold(title)} ({len(records)})", ""]
        for severity in reversed(SEVERITY_LEVELS):
            group = groups.get(severity)
            if not group:
                continue
            lines.append(f"  [{self._severity(severity)}] {len(group)}")
            for record in group:
                line = f"    {record.id:<{w_id}}  {record.package:<{w_pkg}}  {record.title}"
                lines.append(line.rstrip() + self._format_marker(record))
            lines.append("")
        return "\n".join(lines)

    def _format_marker(self, record: CanonicalVulnerability) -> str:
        if not self._result.verdict.is_allowlisted(record):
            return ""
        entry = self._result.allowlist_entry(record.id)
        if entry is not None and entry.reason:
            return self._dim(f"  (allowlisted: {entry.reason})")
        return self._dim("  (allowlisted)")

    def _render_skipped(self) -> str:
        reasons = self._result.report.skipped_reasons
        if not reasons:
            return ""
        lines = [f"  {self._bold('Skipped records')} ({len(reasons)})"]
        lines.extend(f"    {reason}" for reason in reasons)
        lines.append("")
        return "\n".join(lines)

    def _render_notices(self) -> str:
        notices = self._result.notices
        if not notices:
            return ""
        lines = [f"  {self._bold('Allowlist notices')}"]
        for notice in notices:
            entry = notice.entry
            label = f"{entry.id} ({entry.package})" if entry.package else entry.id
            expires = entry.expires.isoformat() if entry.expires else "?"
            if notice.kind == "expired":
                lines.append(f"    {label} expired on {expires}")
            else:
                lines.append(f"    {label} expires on {expires}")
        lines.append("")
        return "\n".join(lines)

    def _render_footer(self) -> str:
        if self._result.verdict.passed:
            return ""
        return "\n".join(
            [
                "  To fix this:",
                "    1. Update dependencies to resolve the blocking vulnerabilities",
                "    2. Or accept them with --allow or an allowlist entry with a justification",
                "",
            ]
        )

    def _format_severity_breakdown(self, counts: SeverityCounts) -> str:
        """Render per-severity counts from critical down to info."""
        return " · ".join(f"{counts.get(level)} {self._severity(level)}" for level in reversed(SEVERITY_LEVELS))

    def _format_allowlist(self) -> str:
        verdict = self._result.verdict
        text = f"{len(self._result.policy.allowlist)} id(s), {len(verdict.allowlisted_ids)} matched"
        if verdict.unused_allowlist_ids:
            text += f", {len(verdict.unused_allowlist_ids)} unused ({', '.join(verdict.unused_allowlist_ids)})"
        return text

    def _severity(self, severity: SeverityLevel) -> str:
        color = SEVERITY_COLORS.get(severity, "")
        return _colorize(severity, color) if self._color and color else severity

    def _bold(self, text: str) -> str:
        return _colorize(text, ANSI_BOLD) if self._color else text

    def _dim(self, text: str) -> str:
        return _colorize(text, ANSI_DIM) if self._color else text


def render_human_error(exc: AuditGateError) -> str:
    """Explain why the run aborted before a verdict existed."""
    return "\n".join(
        [
            "",
            f"  {REPORT_TITLE}",
            "  " + "─" * 38,
            "",
            f"  Verdict     ERROR ({error_kind(exc)})",
            f"  Reason      {exc}",
            "",
        ]
    )
