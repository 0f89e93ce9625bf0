"""Tests for the human-readable report."""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path

from auditgate.audit import run_audit
from auditgate.exceptions import InvalidJsonError, UnsupportedSchemaError
from auditgate.model import AllowlistEntry, AuditResult, PolicyConfig
from auditgate.reporting import render, render_error
from auditgate.reporting.human import HumanReporter


def _run(path: Path, policy: PolicyConfig | None = None, **kwargs: object) -> AuditResult:
    return run_audit(path.read_bytes(), policy or PolicyConfig(), **kwargs)  # type: ignore[arg-type]


def test_failing_report_lists_blocking_and_accepted(reports_root: Path) -> None:
    output = HumanReporter(_run(reports_root / "legacy.json")).render()

    assert "npm audit gate" in output
    assert "Verdict     FAIL (1 finding(s) >= high not allowlisted)" in output
    assert "Schema      legacy_advisories" in output
    assert "Threshold   high" in output
    assert "Findings    2 (1 blocking / 1 accepted)" in output
    assert "Severities  0 critical · 1 high · 1 moderate · 0 low · 0 info" in output
    assert "Blocking findings (1)" in output
    assert "    1065  lodash  Prototype Pollution" in output
    assert "Accepted findings (1)" in output
    assert "    1179  minimist  Prototype Pollution" in output
    assert "To fix this:" in output


def test_groups_are_ordered_most_severe_first(reports_root: Path) -> None:
    output = HumanReporter(_run(reports_root / "current.json", PolicyConfig(min_severity="info"))).render()

    assert output.index("[critical] 1") < output.index("[low] 1")
    assert "Blocking findings (2)" in output
    assert "Accepted findings" not in output


def test_empty_report_states_zero_findings(reports_root: Path) -> None:
    output = HumanReporter(_run(reports_root / "empty.json")).render()

    assert "Verdict     PASS (no unaccepted findings >= high)" in output
    assert "No vulnerabilities found." in output
    assert "Findings    0 (0 blocking / 0 accepted)" in output
    assert "To fix this:" not in output


def test_allowlisted_findings_show_reason(reports_root: Path) -> None:
    policy = PolicyConfig.from_entries(
        "high",
        [AllowlistEntry(id="1179", reason="build-time only"), AllowlistEntry(id="404")],
    )

    output = HumanReporter(_run(reports_root / "current.json", policy)).render()

    assert "PASS" in output
    assert "(allowlisted: build-time only)" in output
    assert "Allowlist   2 id(s), 1 matched, 1 unused (404)" in output


def test_skipped_records_are_explained(reports_root: Path) -> None:
    output = HumanReporter(_run(reports_root / "malformed_legacy.json")).render()

    assert "Skipped     3 malformed record(s)" in output
    assert "Skipped records (3)" in output
    assert "    advisories.1600: unknown severity 'urgent'" in output


def test_metadata_count_mismatch_is_noted(tmp_path: Path) -> None:
    doc = {
        "advisories": {"1": {"module_name": "pkg", "severity": "high"}},
        "metadata": {"vulnerabilities": {"high": 3, "total": 3}},
    }
    path = tmp_path / "audit.json"
    path.write_text(json.dumps(doc), encoding="utf-8")

    output = HumanReporter(_run(path)).render()

    assert "Counts      report metadata lists 3, normalized 1 + 0 skipped" in output


def test_skipped_records_reconcile_with_metadata(reports_root: Path) -> None:
    output = HumanReporter(_run(reports_root / "malformed_with_metadata.json")).render()

    assert "Skipped     3 malformed record(s)" in output
    assert "Counts      " not in output


def test_expiry_notices_are_listed(reports_root: Path) -> None:
    policy = PolicyConfig.from_entries(
        "high",
        [
            AllowlistEntry(id="1179", package="minimist", expires=date(2025, 1, 1)),
            AllowlistEntry(id="1097", expires=date(2025, 1, 15)),
        ],
    )

    output = HumanReporter(_run(reports_root / "current.json", policy, today=date(2025, 1, 10))).render()

    assert "Allowlist notices" in output
    assert "    1179 (minimist) expired on 2025-01-01" in output
    assert "    1097 expires on 2025-01-15" in output


def test_dry_run_mode_is_shown(reports_root: Path) -> None:
    output = HumanReporter(_run(reports_root / "legacy.json"), dry_run=True).render()

    assert "Mode        dry run" in output
    assert "FAIL" in output


def test_color_only_when_requested(reports_root: Path) -> None:
    result = _run(reports_root / "legacy.json")

    assert "\033[" not in HumanReporter(result).render()
    colored = HumanReporter(result, color=True).render()
    assert "\033[31;1mFAIL\033[0m" in colored


def test_render_dispatches_human_by_default(reports_root: Path) -> None:
    result = _run(reports_root / "empty.json")

    assert render(result, "human") == HumanReporter(result).render()


def test_error_report_explains_abort() -> None:
    output = render_error(UnsupportedSchemaError("top-level JSON value is an array, expected an object"), "human")

    assert "Verdict     ERROR (UnsupportedSchema)" in output
    assert "Reason      Unsupported audit report schema: top-level JSON value is an array" in output


def test_error_report_for_invalid_json() -> None:
    output = render_error(InvalidJsonError("Audit report is empty"), "human")

    assert "ERROR (InvalidJson)" in output
