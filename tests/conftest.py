"""Shared pytest fixtures for repository-local test data."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture(scope="session")
def fixtures_root() -> Path:
    """Return root directory for test fixtures."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def reports_root(fixtures_root: Path) -> Path:
    """Return the directory holding sample ``npm audit --json`` reports."""
    return fixtures_root / "reports"


@pytest.fixture
def load_report(reports_root: Path) -> Callable[[str], dict[str, object]]:
    """Return a loader for a parsed sample report by file stem."""

    def _load(name: str) -> dict[str, object]:
        return json.loads((reports_root / f"{name}.json").read_text(encoding="utf-8"))

    return _load
