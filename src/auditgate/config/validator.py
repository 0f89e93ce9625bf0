"""Config file validation for gate runs."""

from __future__ import annotations

import difflib
from pathlib import Path

import yaml

from auditgate.constants.config import CONFIG_FILENAME
from auditgate.constants.reporting import VALID_OUTPUT_FORMATS
from auditgate.constants.severity import SEVERITY_LEVELS
from auditgate.constants.validation import (
    ALLOWED_CONFIG_KEYS,
    CFG001,
    CFG002,
    CFG003,
    CFG004,
    CFG005,
    CFG006,
    CFG007,
)
from auditgate.exceptions.validation import ValidationError


def validate_config_file(
    root: Path,
    config_path: Path | None = None,
    *,
    config_explicit: bool = False,
) -> list[ValidationError]:
    """Validate an auditgate.yaml file and return all validation errors.

    This is the collect-all counterpart of ``load_config``; it never raises.
    """
    errors: list[ValidationError] = []
    root = root.resolve()
    path = config_path.resolve() if config_path else (root / CONFIG_FILENAME)
    path_str = str(path)

    if not path.exists():
        if config_explicit:
            errors.append(
                ValidationError(
                    code=CFG001,
                    path=path_str,
                    field="",
                    message=f"config file not found: {path}",
                )
            )
        return errors

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        errors.append(
            ValidationError(
                code=CFG002,
                path=path_str,
                field="",
                message=f"invalid YAML: {exc}",
            )
        )
        return errors

    if raw is None:
        return errors

    if not isinstance(raw, dict):
        errors.append(
            ValidationError(
                code=CFG003,
                path=path_str,
                field="",
                message=f"config must be a YAML mapping, got {type(raw).__name__}",
            )
        )
        return errors

    for key in sorted(str(key) for key in raw):
        if key not in ALLOWED_CONFIG_KEYS:
            errors.append(
                ValidationError(
                    code=CFG004,
                    path=path_str,
                    field=key,
                    message=f"unknown key `{key}`",
                    hint=_suggest_key(key),
                )
            )

    if "min_severity" in raw and raw["min_severity"] not in SEVERITY_LEVELS:
        errors.append(
            ValidationError(
                code=CFG006,
                path=path_str,
                field="min_severity",
                message="invalid value for `min_severity`",
                hint=f"expected one of: {', '.join(SEVERITY_LEVELS)}; got: {raw['min_severity']!r}",
            )
        )

    if "format" in raw and raw["format"] not in VALID_OUTPUT_FORMATS:
        errors.append(
            ValidationError(
                code=CFG006,
                path=path_str,
                field="format",
                message="invalid value for `format`",
                hint=f"expected one of: {', '.join(sorted(VALID_OUTPUT_FORMATS))}; got: {raw['format']!r}",
            )
        )

    if "allow" in raw:
        val = raw["allow"]
        if not isinstance(val, list) or not all(
            isinstance(item, (str, int)) and not isinstance(item, bool) for item in val
        ):
            errors.append(
                ValidationError(
                    code=CFG005,
                    path=path_str,
                    field="allow",
                    message="invalid type for `allow`",
                    hint="expected a list of advisory ids",
                )
            )

    if "allowlist_file" in raw:
        val = raw["allowlist_file"]
        if not isinstance(val, str) or not val.strip():
            errors.append(
                ValidationError(
                    code=CFG005,
                    path=path_str,
                    field="allowlist_file",
                    message="invalid type for `allowlist_file`",
                    hint="expected a file path string",
                )
            )

    if "expiry_warning_days" in raw:
        val = raw["expiry_warning_days"]
        if isinstance(val, bool) or not isinstance(val, int):
            errors.append(
                ValidationError(
                    code=CFG005,
                    path=path_str,
                    field="expiry_warning_days",
                    message="invalid type for `expiry_warning_days`",
                    hint="expected a non-negative integer",
                )
            )
        elif val < 0:
            errors.append(
                ValidationError(
                    code=CFG007,
                    path=path_str,
                    field="expiry_warning_days",
                    message=f"`expiry_warning_days` must be non-negative, got {val}",
                )
            )

    return errors


def _suggest_key(key: str) -> str:
    """Return a did-you-mean hint for an unknown config key."""
    matches = difflib.get_close_matches(key, sorted(ALLOWED_CONFIG_KEYS), n=1, cutoff=0.6)
    return f"did you mean `{matches[0]}`?" if matches else ""
