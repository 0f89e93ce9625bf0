"""Shared exception hierarchy for auditgate."""

from __future__ import annotations

from .base import AuditGateError
from .config import ConfigError
from .report import InputReadError, InvalidJsonError, MalformedRecordError, UnsupportedSchemaError

__all__ = [
    "AuditGateError",
    "ConfigError",
    "InputReadError",
    "InvalidJsonError",
    "MalformedRecordError",
    "UnsupportedSchemaError",
]
