"""Reporting package for auditgate outputs."""

from __future__ import annotations

from .render import render, render_error

__all__ = ["render", "render_error"]
