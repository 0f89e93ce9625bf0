"""Command-line interface for auditgate."""
