"""Preflight validation orchestrator.

Combines config-file and allowlist-file validation into one collect-all
pass so the CLI can report every problem before reading the audit report.
"""

from __future__ import annotations

from pathlib import Path

from auditgate.config import validate_allowlist_file, validate_config_file
from auditgate.exceptions.validation import ValidationError, sort_errors


def preflight_validate(
    root: Path,
    config_path: Path | None = None,
    *,
    allowlist_path: Path | None = None,
) -> list[ValidationError]:
    """Run all preflight validation checks and return errors in deterministic order.

    Returns an empty list when everything is valid.
    """
    errors: list[ValidationError] = []
    errors.extend(validate_config_file(root, config_path, config_explicit=config_path is not None))
    if allowlist_path is not None:
        errors.extend(validate_allowlist_file(allowlist_path))
    return sort_errors(errors)
