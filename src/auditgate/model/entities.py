"""Domain entities for normalized audit reports, policy and verdicts."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from enum import Enum

from auditgate.constants.severity import SEVERITY_LEVELS
from auditgate.types import CountsSource, JsonObject, NoticeKind, SeverityLevel


class SchemaKind(Enum):
    """Known upstream report shapes."""

    LEGACY_ADVISORIES = "legacy_advisories"
    CURRENT_VULNERABILITIES = "current_vulnerabilities"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class CanonicalVulnerability:
    """One finding, independent of the report shape it came from."""

    id: str
    package: str
    severity: SeverityLevel
    title: str
    url: str
    vulnerable_versions: str
    source: SchemaKind
    fix_available: bool | None = None

    def to_dict(self) -> JsonObject:
        return {
            "id": self.id,
            "package": self.package,
            "severity": self.severity,
            "title": self.title,
            "url": self.url,
            "vulnerableVersions": self.vulnerable_versions,
            "source": self.source.value,
            "fixAvailable": self.fix_available,
        }


@dataclass(frozen=True)
class SeverityCounts:
    """Finding counts per severity level."""

    info: int = 0
    low: int = 0
    moderate: int = 0
    high: int = 0
    critical: int = 0
    total: int = 0

    @classmethod
    def tally(cls, records: Iterable[CanonicalVulnerability]) -> SeverityCounts:
        """Count records by severity."""
        counts = dict.fromkeys(SEVERITY_LEVELS, 0)
        for record in records:
            counts[record.severity] += 1
        return cls(**counts, total=sum(counts.values()))

    def get(self, level: SeverityLevel) -> int:
        return int(getattr(self, level))

    def level_sum(self) -> int:
        return sum(self.get(level) for level in SEVERITY_LEVELS)

    def to_dict(self) -> dict[str, int]:
        payload = {level: self.get(level) for level in SEVERITY_LEVELS}
        payload["total"] = self.total
        return payload


@dataclass(frozen=True)
class NormalizedReport:
    """Normalizer output: canonical records plus aggregate counts."""

    kind: SchemaKind
    records: tuple[CanonicalVulnerability, ...]
    counts: SeverityCounts
    counts_source: CountsSource
    tallied: SeverityCounts
    skipped_count: int = 0
    skipped_reasons: tuple[str, ...] = ()

    @property
    def counts_match(self) -> bool:
        """Whether metadata counts agree with the normalized records plus skipped entries.

        Tallied counts are derived from the records themselves and always match.
        """
        if self.counts_source == "tallied":
            return True
        return self.counts.total == self.tallied.total + self.skipped_count


@dataclass(frozen=True)
class AllowlistEntry:
    """An accepted advisory id with optional justification metadata."""

    id: str
    package: str | None = None
    reason: str | None = None
    expires: date | None = None
    notes: str | None = None
    reviewed_on: date | None = None


@dataclass(frozen=True)
class PolicyConfig:
    """Gate policy, built once per invocation."""

    min_severity: SeverityLevel = "high"
    allowlist: frozenset[str] = frozenset()
    entries: tuple[AllowlistEntry, ...] = ()

    @classmethod
    def from_entries(cls, min_severity: SeverityLevel, entries: Iterable[AllowlistEntry]) -> PolicyConfig:
        resolved = tuple(entries)
        return cls(
            min_severity=min_severity,
            allowlist=frozenset(entry.id for entry in resolved),
            entries=resolved,
        )


@dataclass(frozen=True)
class Verdict:
    """Pass/fail decision plus the partitioned findings behind it."""

    blocking: tuple[CanonicalVulnerability, ...]
    accepted: tuple[CanonicalVulnerability, ...]
    min_severity: SeverityLevel
    allowlisted_ids: tuple[str, ...] = ()
    unused_allowlist_ids: tuple[str, ...] = ()

    @property
    def passed(self) -> bool:
        return not self.blocking

    def is_allowlisted(self, record: CanonicalVulnerability) -> bool:
        return record.id in self.allowlisted_ids


@dataclass(frozen=True)
class AllowlistNotice:
    """Informational note about an allowlist entry's expiry date."""

    entry: AllowlistEntry
    kind: NoticeKind


@dataclass(frozen=True)
class AuditResult:
    """Everything a renderer needs about one gate run."""

    report: NormalizedReport
    verdict: Verdict
    policy: PolicyConfig = PolicyConfig()
    notices: tuple[AllowlistNotice, ...] = ()
    duration_seconds: float = 0.0

    def allowlist_entry(self, advisory_id: str) -> AllowlistEntry | None:
        for entry in self.policy.entries:
            if entry.id == advisory_id:
                return entry
        return None
