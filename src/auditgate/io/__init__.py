"""Shared file I/O helpers."""

from .files import read_input
from .json_io import parse_json_document, write_text_atomic

__all__ = ["parse_json_document", "read_input", "write_text_atomic"]
