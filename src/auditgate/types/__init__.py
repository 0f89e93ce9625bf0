"""Shared type aliases for auditgate."""

from .common import CountsSource, JsonObject, JsonScalar, JsonValue, NoticeKind, OutputFormat, SeverityLevel

__all__ = [
    "CountsSource",
    "JsonObject",
    "JsonScalar",
    "JsonValue",
    "NoticeKind",
    "OutputFormat",
    "SeverityLevel",
]
