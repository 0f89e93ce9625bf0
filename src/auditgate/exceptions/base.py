"""Root exception for auditgate."""

from __future__ import annotations


class AuditGateError(Exception):
    """Base class for all auditgate errors."""
