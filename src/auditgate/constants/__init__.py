"""Shared constants for auditgate."""
