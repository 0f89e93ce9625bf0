"""Configuration loading, validation, and policy resolution for gate runs."""

from __future__ import annotations

from auditgate.config.allowlist import (
    allowlist_notices,
    entries_from_ids,
    load_allowlist,
    merge_entries,
    parse_iso_date,
    validate_allowlist_file,
)
from auditgate.config.loader import load_config
from auditgate.config.model import GateConfig
from auditgate.config.resolution import resolve_allowlist_path, resolve_policy
from auditgate.config.validator import validate_config_file

__all__ = [
    "GateConfig",
    "allowlist_notices",
    "entries_from_ids",
    "load_allowlist",
    "load_config",
    "merge_entries",
    "parse_iso_date",
    "resolve_allowlist_path",
    "resolve_policy",
    "validate_allowlist_file",
    "validate_config_file",
]
