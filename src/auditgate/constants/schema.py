"""Key names of the upstream ``npm audit --json`` report shapes."""

from __future__ import annotations

LEGACY_ROOT_KEY: str = "advisories"
CURRENT_ROOT_KEY: str = "vulnerabilities"

METADATA_KEY: str = "metadata"
METADATA_COUNTS_KEY: str = "vulnerabilities"
METADATA_TOTAL_KEY: str = "total"

LEGACY_PACKAGE_FIELD: str = "module_name"
LEGACY_RANGE_FIELD: str = "vulnerable_versions"

CURRENT_VIA_FIELD: str = "via"
CURRENT_SOURCE_FIELD: str = "source"
CURRENT_NAME_FIELD: str = "name"
CURRENT_RANGE_FIELD: str = "range"
CURRENT_FIX_FIELD: str = "fixAvailable"

DEFAULT_VULNERABLE_VERSIONS: str = "*"
