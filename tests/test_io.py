"""Tests for input reading, JSON parsing and atomic writes."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from auditgate.exceptions import InputReadError, InvalidJsonError
from auditgate.io import parse_json_document, read_input, write_text_atomic


def test_read_input_from_file(tmp_path: Path) -> None:
    path = tmp_path / "audit.json"
    path.write_bytes(b'{"advisories": {}}')

    assert read_input(str(path)) == b'{"advisories": {}}'


def test_read_input_from_stdin(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(b'{"vulnerabilities": {}}')))

    assert read_input("-") == b'{"vulnerabilities": {}}'


def test_read_input_missing_file(tmp_path: Path) -> None:
    with pytest.raises(InputReadError, match="Cannot read audit report"):
        read_input(str(tmp_path / "missing.json"))


def test_read_input_directory(tmp_path: Path) -> None:
    with pytest.raises(InputReadError):
        read_input(str(tmp_path))


def test_parse_json_document_accepts_bom() -> None:
    assert parse_json_document(b'\xef\xbb\xbf{"advisories": {}}') == {"advisories": {}}
    assert parse_json_document('\ufeff{"advisories": {}}') == {"advisories": {}}


@pytest.mark.parametrize(
    ("raw", "match"),
    [
        pytest.param(b"", "empty", id="empty"),
        pytest.param(b"  \n", "empty", id="whitespace"),
        pytest.param(b"{'advisories': {}}", "not valid JSON", id="single-quotes"),
        pytest.param(b'{"advisories": {', "not valid JSON", id="truncated"),
        pytest.param(b"\xff\xfe{}", "not valid UTF-8", id="bad-encoding"),
    ],
)
def test_parse_json_document_rejects(raw: bytes, match: str) -> None:
    with pytest.raises(InvalidJsonError, match=match):
        parse_json_document(raw)


def test_parse_json_document_rejects_deep_nesting() -> None:
    with pytest.raises(InvalidJsonError, match="nested too deeply"):
        parse_json_document("[" * 100000 + "]" * 100000)


def test_parse_json_document_returns_non_objects() -> None:
    assert parse_json_document(b"[1, 2]") == [1, 2]


def test_write_text_atomic_creates_parents_and_replaces(tmp_path: Path) -> None:
    target = tmp_path / "out" / "report.json"

    write_text_atomic(path=target, content="first", temp_prefix=".tmp-", temp_suffix=".json")
    write_text_atomic(path=target, content="second", temp_prefix=".tmp-", temp_suffix=".json")

    assert target.read_text(encoding="utf-8") == "second"
    assert [child.name for child in target.parent.iterdir()] == ["report.json"]
