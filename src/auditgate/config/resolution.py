"""Merge config file values, CLI flags and the allowlist file into a policy."""

from __future__ import annotations

import logging
from pathlib import Path

from auditgate.config.allowlist import entries_from_ids, load_allowlist, merge_entries
from auditgate.config.model import GateConfig
from auditgate.constants.config import DEFAULT_ALLOWLIST_FILENAME
from auditgate.model import PolicyConfig
from auditgate.types import SeverityLevel

logger = logging.getLogger(__name__)


def resolve_allowlist_path(root: Path, config: GateConfig, cli_path: Path | None) -> Path | None:
    """Pick the allowlist file: CLI flag, then config, then ``.audit-allowlist.json`` if present."""
    if cli_path is not None:
        return cli_path
    if config.allowlist_file is not None:
        return config.allowlist_file
    default_path = root / DEFAULT_ALLOWLIST_FILENAME
    if default_path.is_file():
        logger.debug("Using default allowlist file %s", default_path)
        return default_path
    logger.debug("No allowlist file; only explicitly allowed ids are accepted")
    return None


def resolve_policy(
    root: Path,
    config: GateConfig,
    *,
    min_severity: SeverityLevel | None = None,
    allow_ids: tuple[str, ...] = (),
    allowlist_file: Path | None = None,
) -> PolicyConfig:
    """Build the run's ``PolicyConfig``; CLI values take precedence over the config file.

    Ids from ``--allow``, the config ``allow`` list and the allowlist file are
    unioned. Raises ConfigError when the allowlist file is invalid.
    """
    path = resolve_allowlist_path(root, config, allowlist_file)
    file_entries = load_allowlist(path) if path is not None else ()

    cli_ids = tuple(advisory_id.strip() for advisory_id in allow_ids if advisory_id.strip())
    entries = merge_entries(file_entries, entries_from_ids(cli_ids), entries_from_ids(config.allow))
    return PolicyConfig.from_entries(config.effective_min_severity(min_severity), entries)
