"""Gate command handler and exit-code mapping."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from auditgate.audit import run_audit
from auditgate.config import load_config, resolve_policy
from auditgate.constants.config import EXIT_BLOCKED, EXIT_INPUT_ERROR, EXIT_PASSED
from auditgate.constants.reporting import DEFAULT_OUTPUT_FORMAT, REPORT_TEMP_PREFIX
from auditgate.exceptions import AuditGateError, ConfigError
from auditgate.exceptions.validation import format_errors
from auditgate.io import read_input, write_text_atomic
from auditgate.model import Verdict
from auditgate.reporting import render, render_error
from auditgate.types import OutputFormat
from auditgate.validation import preflight_validate

logger = logging.getLogger(__name__)


def exit_code_for(verdict: Verdict, *, dry_run: bool = False) -> int:
    """Return 1 when the verdict blocks the build, 0 otherwise or in dry-run mode."""
    if verdict.passed:
        return EXIT_PASSED
    if dry_run:
        logger.info("Dry run: %d blocking finding(s) do not affect the exit code", len(verdict.blocking))
        return EXIT_PASSED
    return EXIT_BLOCKED


def handle_gate(args: argparse.Namespace) -> int:
    """Read the audit report, run the gate and write the report."""
    root = Path.cwd()

    validation_errors = preflight_validate(root, args.config, allowlist_path=args.allowlist_file)
    if validation_errors:
        print(format_errors(validation_errors), file=sys.stderr)
        return EXIT_INPUT_ERROR

    fmt: OutputFormat = args.format or DEFAULT_OUTPUT_FORMAT
    try:
        config = load_config(root, args.config)
        fmt = config.effective_format(args.format)
        policy = resolve_policy(
            root,
            config,
            min_severity=args.min_severity,
            allow_ids=tuple(args.allow),
            allowlist_file=args.allowlist_file,
        )
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    try:
        raw = read_input(args.source)
        result = run_audit(raw, policy, expiry_warning_days=config.expiry_warning_days)
    except AuditGateError as exc:
        logger.error("Audit report rejected: %s", exc)
        _emit_or_report(render_error(exc, fmt), args.output, fmt)
        return EXIT_INPUT_ERROR

    use_color = fmt == "human" and not args.no_color and args.output is None and sys.stdout.isatty()
    if not _emit_or_report(render(result, fmt, color=use_color, dry_run=args.dry_run), args.output, fmt):
        return EXIT_INPUT_ERROR
    return exit_code_for(result.verdict, dry_run=args.dry_run)


def _emit_or_report(report: str, output: Path | None, fmt: OutputFormat) -> bool:
    """Emit the report; on a write failure explain it on stderr and return False."""
    try:
        _emit(report, output, fmt)
    except OSError as exc:
        print(f"Output error: cannot write report to {output}: {exc}", file=sys.stderr)
        return False
    return True


def _emit(report: str, output: Path | None, fmt: OutputFormat) -> None:
    """Print the report and, when requested, persist it atomically."""
    print(report)
    if output is None:
        return
    suffix = {"json": ".json", "sarif": ".sarif"}.get(fmt, ".txt")
    write_text_atomic(path=output, content=report + "\n", temp_prefix=REPORT_TEMP_PREFIX, temp_suffix=suffix)
    logger.debug("Wrote report to %s", output)
