"""Stable validation error codes and allowed-key sets for config and allowlist validation."""

from __future__ import annotations

CFG001: str = "CFG001"  # config file not found (explicit --config)
CFG002: str = "CFG002"  # invalid YAML parse
CFG003: str = "CFG003"  # top-level value is not a mapping
CFG004: str = "CFG004"  # unknown top-level key
CFG005: str = "CFG005"  # invalid value type
CFG006: str = "CFG006"  # invalid enum value
CFG007: str = "CFG007"  # value out of range

ALW001: str = "ALW001"  # allowlist file not found
ALW002: str = "ALW002"  # allowlist file cannot be parsed
ALW003: str = "ALW003"  # allowlist schema violation
ALW004: str = "ALW004"  # allowlist date not ISO 8601

ALLOWED_CONFIG_KEYS: frozenset[str] = frozenset(
    {
        "min_severity",
        "allow",
        "allowlist_file",
        "format",
        "expiry_warning_days",
    }
)
