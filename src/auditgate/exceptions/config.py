"""Configuration-related exceptions."""

from __future__ import annotations

from auditgate.exceptions.base import AuditGateError


class ConfigError(AuditGateError, ValueError):
    """Raised when gate configuration or the allowlist file is invalid."""
