"""auditgate: severity/allowlist gate for npm audit reports."""

__version__ = "0.1.0"
