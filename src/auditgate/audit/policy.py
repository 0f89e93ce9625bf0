"""Partition canonical records into blocking and accepted findings."""

from __future__ import annotations

from collections.abc import Sequence

from auditgate.constants.severity import SEVERITY_RANK
from auditgate.model import CanonicalVulnerability, PolicyConfig, Verdict


def is_blocking_severity(record: CanonicalVulnerability, config: PolicyConfig) -> bool:
    """Whether the record's severity reaches the configured threshold."""
    return SEVERITY_RANK[record.severity] >= SEVERITY_RANK[config.min_severity]


def evaluate(records: Sequence[CanonicalVulnerability], config: PolicyConfig) -> Verdict:
    """Return the verdict for ``records`` under ``config``.

    Allowlisted ids are accepted regardless of severity. Remaining records
    block when their severity is at or above ``config.min_severity``.
    Input order is preserved within both partitions.
    """
    blocking: list[CanonicalVulnerability] = []
    accepted: list[CanonicalVulnerability] = []
    allowlisted: dict[str, None] = {}

    for record in records:
        if record.id in config.allowlist:
            accepted.append(record)
            allowlisted[record.id] = None
        elif is_blocking_severity(record, config):
            blocking.append(record)
        else:
            accepted.append(record)

    seen_ids = {record.id for record in records}
    return Verdict(
        blocking=tuple(blocking),
        accepted=tuple(accepted),
        min_severity=config.min_severity,
        allowlisted_ids=tuple(allowlisted),
        unused_allowlist_ids=tuple(sorted(config.allowlist - seen_ids)),
    )
