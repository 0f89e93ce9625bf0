"""Stable names for the error kinds that abort a gate run."""

from __future__ import annotations

from auditgate.exceptions import (
    AuditGateError,
    ConfigError,
    InputReadError,
    InvalidJsonError,
    UnsupportedSchemaError,
)

_ERROR_KINDS: tuple[tuple[type[AuditGateError], str], ...] = (
    (InvalidJsonError, "InvalidJson"),
    (UnsupportedSchemaError, "UnsupportedSchema"),
    (InputReadError, "InputRead"),
    (ConfigError, "Config"),
)


def error_kind(exc: AuditGateError) -> str:
    for exc_type, name in _ERROR_KINDS:
        if isinstance(exc, exc_type):
            return name
    return "Error"
