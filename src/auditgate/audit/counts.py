"""Aggregate severity counts: read from report metadata or tallied from records."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from auditgate.constants.schema import METADATA_COUNTS_KEY, METADATA_KEY, METADATA_TOTAL_KEY
from auditgate.constants.severity import SEVERITY_LEVELS
from auditgate.model import CanonicalVulnerability, SeverityCounts
from auditgate.types import CountsSource

logger = logging.getLogger(__name__)


def read_metadata_counts(doc: dict[str, object]) -> SeverityCounts | None:
    """Return the counts block of ``metadata.vulnerabilities`` when it is usable.

    Missing levels count as zero and a missing ``total`` is computed. A block
    with non-integer or negative values, or whose ``total`` disagrees with
    the per-level sum, is rejected.
    """
    metadata = doc.get(METADATA_KEY)
    if not isinstance(metadata, dict):
        return None
    block = metadata.get(METADATA_COUNTS_KEY)
    if not isinstance(block, dict):
        return None

    levels: dict[str, int] = {}
    for level in SEVERITY_LEVELS:
        value = block.get(level, 0)
        if not _is_count(value):
            logger.debug("Ignoring metadata counts: %s=%r is not a non-negative integer", level, value)
            return None
        levels[level] = value

    level_sum = sum(levels.values())
    total = block.get(METADATA_TOTAL_KEY, level_sum)
    if not _is_count(total):
        logger.debug("Ignoring metadata counts: total=%r is not a non-negative integer", total)
        return None
    if total != level_sum:
        logger.warning("Report metadata total %d disagrees with per-severity sum %d; tallying records", total, level_sum)
        return None
    return SeverityCounts(**levels, total=total)


def resolve_counts(
    doc: dict[str, object],
    records: Sequence[CanonicalVulnerability],
) -> tuple[SeverityCounts, CountsSource]:
    """Prefer the report's own metadata counts, falling back to a tally of ``records``."""
    counts = read_metadata_counts(doc)
    if counts is not None:
        return counts, "metadata"
    return SeverityCounts.tally(records), "tallied"


def _is_count(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0
