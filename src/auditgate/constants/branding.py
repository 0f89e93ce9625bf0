"""Branding strings for CLI help and report headers."""

from __future__ import annotations

REPORT_TITLE: str = "npm audit gate"

CLI_DESCRIPTION: str = """\
Filter `npm audit --json` output through a severity threshold and an allowlist.

  npm audit --json | auditgate --min-severity high --allow 1065
  auditgate audit.json --allowlist-file .audit-allowlist.json --format json

Exit codes: 0 passed (or --dry-run), 1 blocking findings, 2 input or config error.
"""
