"""JSON parsing and atomic text persistence."""

from __future__ import annotations

import json
import os
import tempfile
from contextlib import suppress
from pathlib import Path

from auditgate.exceptions import InvalidJsonError


def parse_json_document(raw: bytes | str) -> object:
    """Parse raw report bytes, tolerating a UTF-8 byte-order mark."""
    try:
        text = raw.decode("utf-8-sig") if isinstance(raw, bytes) else raw.removeprefix("\ufeff")
    except UnicodeDecodeError as exc:
        raise InvalidJsonError(f"Audit report is not valid UTF-8: {exc}") from exc

    if not text.strip():
        raise InvalidJsonError("Audit report is empty")
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidJsonError(f"Audit report is not valid JSON: {exc}") from exc
    except RecursionError as exc:
        raise InvalidJsonError("Audit report is nested too deeply to parse") from exc


def write_text_atomic(
    *,
    path: Path,
    content: str,
    temp_prefix: str,
    temp_suffix: str,
) -> None:
    """Persist text atomically by writing to a temp file then renaming."""
    path.parent.mkdir(parents=True, exist_ok=True)

    temp_name: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=path.parent,
            prefix=temp_prefix,
            suffix=temp_suffix,
            delete=False,
        ) as handle:
            temp_name = handle.name
            handle.write(content)
    except Exception:
        if temp_name:
            with suppress(FileNotFoundError):
                Path(temp_name).unlink()
        raise

    assert temp_name is not None
    os.replace(temp_name, path)
