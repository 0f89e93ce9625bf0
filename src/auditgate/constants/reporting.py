"""Constants for report formats, atomic writing, and terminal formatting."""

from __future__ import annotations

SCHEMA_VERSION: str = "1.0.0"

VALID_OUTPUT_FORMATS: frozenset[str] = frozenset({"human", "json", "sarif"})
DEFAULT_OUTPUT_FORMAT: str = "human"

REPORT_TEMP_PREFIX: str = ".tmp-auditgate-"

SARIF_VERSION: str = "2.1.0"
SARIF_SCHEMA_URI: str = "https://docs.oasis-open.org/sarif/sarif/v2.1.0/cos02/schemas/sarif-schema-2.1.0.json"
SARIF_TOOL_NAME: str = "auditgate"

SARIF_SEVERITY_MAP: dict[str, str] = {
    "critical": "error",
    "high": "error",
    "moderate": "warning",
    "low": "note",
    "info": "note",
}

# ANSI escape codes for terminal colouring.
ANSI_RESET: str = "\033[0m"
ANSI_BOLD: str = "\033[1m"
ANSI_RED: str = "\033[31;1m"
ANSI_MAGENTA: str = "\033[35;1m"
ANSI_YELLOW: str = "\033[33;1m"
ANSI_GREEN: str = "\033[32;1m"
ANSI_DIM: str = "\033[2m"

SEVERITY_COLORS: dict[str, str] = {
    "critical": ANSI_MAGENTA,
    "high": ANSI_RED,
    "moderate": ANSI_YELLOW,
    "low": ANSI_GREEN,
    "info": ANSI_DIM,
}
