"""Config data model for gate runs."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from auditgate.constants.config import DEFAULT_EXPIRY_WARNING_DAYS
from auditgate.constants.reporting import DEFAULT_OUTPUT_FORMAT
from auditgate.constants.severity import DEFAULT_MIN_SEVERITY
from auditgate.types import OutputFormat, SeverityLevel


@dataclass(frozen=True)
class GateConfig:
    """Resolved gate settings from ``auditgate.yaml``.

    ``None`` means the key was absent so CLI flags or defaults apply.
    """

    min_severity: SeverityLevel | None = None
    allow: tuple[str, ...] = ()
    allowlist_file: Path | None = None
    format: OutputFormat | None = None
    expiry_warning_days: int = DEFAULT_EXPIRY_WARNING_DAYS

    def effective_min_severity(self, override: SeverityLevel | None = None) -> SeverityLevel:
        return override or self.min_severity or DEFAULT_MIN_SEVERITY

    def effective_format(self, override: OutputFormat | None = None) -> OutputFormat:
        return override or self.format or DEFAULT_OUTPUT_FORMAT  # type: ignore[return-value]
