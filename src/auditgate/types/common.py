"""Cross-module type aliases."""

from __future__ import annotations

from typing import Literal, TypeAlias

SeverityLevel: TypeAlias = Literal["info", "low", "moderate", "high", "critical"]
OutputFormat: TypeAlias = Literal["human", "json", "sarif"]
CountsSource: TypeAlias = Literal["metadata", "tallied"]
NoticeKind: TypeAlias = Literal["expired", "expiring"]

JsonScalar: TypeAlias = str | int | float | bool | None
JsonValue: TypeAlias = JsonScalar | list["JsonValue"] | dict[str, "JsonValue"]
JsonObject: TypeAlias = dict[str, JsonValue]
