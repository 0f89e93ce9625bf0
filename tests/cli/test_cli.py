"""Tests for CLI parser, main behavior and exit codes."""

from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from auditgate import __version__
from auditgate.cli.handlers import exit_code_for
from auditgate.cli.main import build_parser, main
from auditgate.model import CanonicalVulnerability, SchemaKind, Verdict


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run every CLI test from an empty directory so no stray config is picked up."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


def _report(reports_root: Path, name: str) -> str:
    return str(reports_root / f"{name}.json")


def test_build_parser_defaults() -> None:
    args = build_parser().parse_args([])

    assert args.input is None
    assert args.input_flag is None
    assert args.min_severity is None
    assert args.allow == []
    assert args.allowlist_file is None
    assert args.format is None
    assert args.dry_run is False
    assert args.output is None


def test_build_parser_accepts_gate_flags(tmp_path: Path) -> None:
    args = build_parser().parse_args(
        [
            "audit.json",
            "--min-severity",
            "moderate",
            "--allow",
            "1179",
            "-a",
            "1065",
            "--allowlist-file",
            str(tmp_path / "allow.json"),
            "--format",
            "sarif",
            "--dry-run",
            "-o",
            str(tmp_path / "out.sarif"),
        ]
    )

    assert args.input == "audit.json"
    assert args.min_severity == "moderate"
    assert args.allow == ["1179", "1065"]
    assert args.allowlist_file == tmp_path / "allow.json"
    assert args.format == "sarif"
    assert args.dry_run is True
    assert args.output == tmp_path / "out.sarif"


def test_build_parser_rejects_unknown_severity() -> None:
    with pytest.raises(SystemExit) as exc_info:
        build_parser().parse_args(["--min-severity", "urgent"])

    assert exc_info.value.code == 2


def test_version_flag(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["--version"])

    assert exc_info.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_positional_and_flag_input_conflict(reports_root: Path) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main([_report(reports_root, "legacy"), "--input", _report(reports_root, "legacy")])

    assert exc_info.value.code == 2


def test_legacy_high_finding_blocks(reports_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main([_report(reports_root, "legacy"), "--min-severity", "high"])

    out = capsys.readouterr().out
    assert code == 1
    assert "FAIL (1 finding(s) >= high not allowlisted)" in out
    assert "1065" in out


def test_current_critical_via_blocks(reports_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["--input", _report(reports_root, "current"), "--format", "json"])

    payload = json.loads(capsys.readouterr().out)
    assert code == 1
    assert [record["id"] for record in payload["blocking"]] == ["1179"]
    assert [record["id"] for record in payload["accepted"]] == ["1097"]


def test_empty_report_passes(reports_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main([_report(reports_root, "empty")])

    assert code == 0
    assert "No vulnerabilities found." in capsys.readouterr().out


def test_unrecognized_report_is_input_error(reports_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main([_report(reports_root, "unrecognized")])

    out = capsys.readouterr().out
    assert code == 2
    assert "ERROR (UnsupportedSchema)" in out
    assert "top-level keys: error" in out


def test_allowlisted_critical_passes(reports_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main([_report(reports_root, "current"), "--allow", "1179", "--format", "json"])

    payload = json.loads(capsys.readouterr().out)
    assert code == 0
    assert payload["passed"] is True
    assert payload["allowlisted"] == ["1179"]


def test_dry_run_always_exits_zero(reports_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main([_report(reports_root, "legacy"), "--dry-run"])

    out = capsys.readouterr().out
    assert code == 0
    assert "FAIL" in out
    assert "dry run" in out


def test_dry_run_does_not_mask_input_errors(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("npm ERR! code ENOLOCK", encoding="utf-8")

    assert main([str(path), "--dry-run"]) == 2


def test_reads_standard_input(
    reports_root: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    data = (reports_root / "legacy.json").read_bytes()
    monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(data)))

    code = main(["-", "--format", "json"])

    payload = json.loads(capsys.readouterr().out)
    assert code == 1
    assert payload["schema"] == "legacy_advisories"


def test_stdin_is_default_input(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(b'{"advisories": {}}')))

    assert main([]) == 0


def test_invalid_json_renders_error_payload(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "audit.json"
    path.write_text("{not json", encoding="utf-8")

    code = main([str(path), "--format", "json"])

    payload = json.loads(capsys.readouterr().out)
    assert code == 2
    assert payload["error"]["kind"] == "InvalidJson"


def test_deeply_nested_input_is_input_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "audit.json"
    path.write_text("[" * 100000 + "]" * 100000, encoding="utf-8")

    code = main([str(path), "--format", "json"])

    payload = json.loads(capsys.readouterr().out)
    assert code == 2
    assert payload["error"]["kind"] == "InvalidJson"


def test_unwritable_output_on_input_error_exits_two(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "audit.json"
    path.write_text("{not json", encoding="utf-8")
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")

    code = main([str(path), "-o", str(blocker / "report.txt")])

    assert code == 2
    assert "Output error: cannot write report to" in capsys.readouterr().err


def test_unwritable_output_on_verdict_exits_two(
    reports_root: Path,
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")

    code = main([_report(reports_root, "empty"), "-o", str(blocker / "report.txt")])

    assert code == 2
    assert "Output error" in capsys.readouterr().err


def test_missing_input_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main([str(tmp_path / "missing.json")])

    assert code == 2
    assert "ERROR (InputRead)" in capsys.readouterr().out


def test_output_file_matches_stdout(
    reports_root: Path,
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    target = tmp_path / "reports" / "audit.sarif"

    code = main([_report(reports_root, "legacy"), "--format", "sarif", "-o", str(target)])

    out = capsys.readouterr().out
    assert code == 1
    assert target.read_text(encoding="utf-8") == out
    assert json.loads(out)["version"] == "2.1.0"


def test_config_file_sets_threshold_and_format(
    reports_root: Path,
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    (tmp_path / "auditgate.yaml").write_text("min_severity: critical\nformat: json\n", encoding="utf-8")

    code = main([_report(reports_root, "legacy")])

    payload = json.loads(capsys.readouterr().out)
    assert code == 0
    assert payload["minSeverity"] == "critical"


def test_cli_threshold_overrides_config(reports_root: Path, tmp_path: Path) -> None:
    (tmp_path / "auditgate.yaml").write_text("min_severity: critical\n", encoding="utf-8")

    assert main([_report(reports_root, "legacy"), "--min-severity", "moderate"]) == 1


def test_config_allow_list_is_applied(reports_root: Path, tmp_path: Path) -> None:
    (tmp_path / "auditgate.yaml").write_text("allow: [1065]\n", encoding="utf-8")

    assert main([_report(reports_root, "legacy")]) == 0


def test_default_allowlist_file_is_picked_up(reports_root: Path, tmp_path: Path) -> None:
    (tmp_path / ".audit-allowlist.json").write_text(
        json.dumps([{"id": "1065", "reason": "no fix upstream yet"}]),
        encoding="utf-8",
    )

    assert main([_report(reports_root, "legacy")]) == 0


def test_invalid_config_is_reported_before_reading_input(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    (tmp_path / "auditgate.yaml").write_text("format: xml\nmin_severty: high\n", encoding="utf-8")

    code = main([str(tmp_path / "does-not-matter.json")])

    err = capsys.readouterr().err
    assert code == 2
    assert "[CFG004]" in err
    assert "[CFG006]" in err


def test_missing_allowlist_file_is_reported(
    reports_root: Path,
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    code = main([_report(reports_root, "legacy"), "--allowlist-file", str(tmp_path / "nope.json")])

    assert code == 2
    assert "[ALW001]" in capsys.readouterr().err


def test_invalid_default_allowlist_is_config_error(
    reports_root: Path,
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    (tmp_path / ".audit-allowlist.json").write_text('{"1065": true}', encoding="utf-8")

    code = main([_report(reports_root, "legacy")])

    assert code == 2
    assert "Configuration error: Invalid allowlist file" in capsys.readouterr().err


def _verdict(blocking: int) -> Verdict:
    record = CanonicalVulnerability(
        id="1",
        package="pkg",
        severity="critical",
        title="",
        url="",
        vulnerable_versions="*",
        source=SchemaKind.LEGACY_ADVISORIES,
    )
    return Verdict(blocking=(record,) * blocking, accepted=(), min_severity="high")


@pytest.mark.parametrize(
    ("blocking", "dry_run", "expected"),
    [
        (0, False, 0),
        (1, False, 1),
        (0, True, 0),
        (2, True, 0),
    ],
)
def test_exit_code_for(blocking: int, dry_run: bool, expected: int) -> None:
    assert exit_code_for(_verdict(blocking), dry_run=dry_run) == expected
