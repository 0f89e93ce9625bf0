"""Core data models for auditgate."""

from .entities import (
    AllowlistEntry,
    AllowlistNotice,
    AuditResult,
    CanonicalVulnerability,
    NormalizedReport,
    PolicyConfig,
    SchemaKind,
    SeverityCounts,
    Verdict,
)

__all__ = [
    "AllowlistEntry",
    "AllowlistNotice",
    "AuditResult",
    "CanonicalVulnerability",
    "NormalizedReport",
    "PolicyConfig",
    "SchemaKind",
    "SeverityCounts",
    "Verdict",
]
