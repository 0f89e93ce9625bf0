"""Config loading and normalization for gate runs."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from auditgate.config.model import GateConfig
from auditgate.constants.config import CONFIG_FILENAME, DEFAULT_EXPIRY_WARNING_DAYS
from auditgate.constants.reporting import VALID_OUTPUT_FORMATS
from auditgate.constants.severity import SEVERITY_LEVELS
from auditgate.constants.validation import ALLOWED_CONFIG_KEYS
from auditgate.exceptions import ConfigError


def load_config(root: Path, config_path: Path | None = None) -> GateConfig:
    """Load and validate gate config from ``auditgate.yaml`` or an explicit path."""
    root = root.resolve()
    path = config_path.resolve() if config_path else (root / CONFIG_FILENAME)
    if not path.exists():
        if config_path is not None:
            raise ConfigError(f"Config file not found: {path}")
        return GateConfig()

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML config file at {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file at {path} must be a YAML mapping")

    unknown = sorted(str(key) for key in raw if key not in ALLOWED_CONFIG_KEYS)
    if unknown:
        raise ConfigError(f"Unknown config key(s) in {path}: {', '.join(unknown)}")

    min_severity = raw.get("min_severity")
    if min_severity is not None and min_severity not in SEVERITY_LEVELS:
        raise ConfigError(f"min_severity must be one of {list(SEVERITY_LEVELS)}, got {min_severity!r}")

    output_format = raw.get("format")
    if output_format is not None and output_format not in VALID_OUTPUT_FORMATS:
        raise ConfigError(f"format must be one of {sorted(VALID_OUTPUT_FORMATS)}, got {output_format!r}")

    allowlist_file = raw.get("allowlist_file")
    if allowlist_file is not None and (not isinstance(allowlist_file, str) or not allowlist_file.strip()):
        raise ConfigError("allowlist_file must be a non-empty string")

    expiry_warning_days = raw.get("expiry_warning_days", DEFAULT_EXPIRY_WARNING_DAYS)
    if isinstance(expiry_warning_days, bool) or not isinstance(expiry_warning_days, int) or expiry_warning_days < 0:
        raise ConfigError("expiry_warning_days must be a non-negative integer")

    return GateConfig(
        min_severity=min_severity,
        allow=tuple(_ensure_id_list(raw.get("allow", []), "allow")),
        allowlist_file=(path.parent / allowlist_file) if allowlist_file else None,
        format=output_format,
        expiry_warning_days=expiry_warning_days,
    )


def _ensure_id_list(value: Any, key_name: str) -> list[str]:
    """Coerce a value to a list of advisory id strings, raising ConfigError on type mismatch."""
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        raise ConfigError(f"{key_name} must be a list of advisory ids")
    ids: list[str] = []
    for item in value:
        if isinstance(item, bool) or not isinstance(item, (str, int)):
            raise ConfigError(f"{key_name} must be a list of advisory ids")
        if str(item).strip():
            ids.append(str(item).strip())
    return ids
