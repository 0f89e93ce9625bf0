"""Reading the audit report from a file or standard input."""

from __future__ import annotations

import sys
from pathlib import Path

from auditgate.constants.config import STDIN_MARKER
from auditgate.exceptions import InputReadError


def read_input(source: str) -> bytes:
    """Return the raw bytes of ``source``, a path or ``-`` for standard input."""
    if source == STDIN_MARKER:
        try:
            return sys.stdin.buffer.read()
        except (OSError, ValueError) as exc:
            raise InputReadError(f"Cannot read audit report from standard input: {exc}") from exc

    path = Path(source)
    try:
        return path.read_bytes()
    except OSError as exc:
        raise InputReadError(f"Cannot read audit report {path}: {exc.strerror or exc}") from exc
