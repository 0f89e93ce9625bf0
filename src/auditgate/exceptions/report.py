"""Exceptions raised while reading and normalizing audit reports."""

from __future__ import annotations

from auditgate.exceptions.base import AuditGateError


class InputReadError(AuditGateError, OSError):
    """Raised when the audit report cannot be read from its source."""


class InvalidJsonError(AuditGateError, ValueError):
    """Raised when the audit report bytes are not parseable JSON."""


class UnsupportedSchemaError(AuditGateError, ValueError):
    """Raised when a JSON document matches none of the known report shapes."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Unsupported audit report schema: {reason}")
        self.reason = reason


class MalformedRecordError(AuditGateError, ValueError):
    """Raised for a single report entry missing a mandatory field.

    The normalizer recovers from this locally by skipping the entry.
    """

    def __init__(self, key: str, message: str) -> None:
        super().__init__(f"{key}: {message}")
        self.key = key
