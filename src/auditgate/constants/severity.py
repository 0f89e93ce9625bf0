"""Severity levels and their total order."""

from __future__ import annotations

from auditgate.types.common import SeverityLevel

# Ordered from least to most severe.
SEVERITY_LEVELS: tuple[SeverityLevel, ...] = ("info", "low", "moderate", "high", "critical")

SEVERITY_RANK: dict[str, int] = {level: rank for rank, level in enumerate(SEVERITY_LEVELS)}

DEFAULT_MIN_SEVERITY: SeverityLevel = "high"
