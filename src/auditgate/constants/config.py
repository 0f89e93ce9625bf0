"""Configuration defaults, filenames and exit codes."""

from __future__ import annotations

CONFIG_FILENAME: str = "auditgate.yaml"
DEFAULT_ALLOWLIST_FILENAME: str = ".audit-allowlist.json"
DEFAULT_EXPIRY_WARNING_DAYS: int = 30

STDIN_MARKER: str = "-"

EXIT_PASSED: int = 0
EXIT_BLOCKED: int = 1
EXIT_INPUT_ERROR: int = 2
