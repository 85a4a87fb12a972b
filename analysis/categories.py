"""Shared axis and column type definitions.

Values are stable identifiers that appear in chart configuration payloads, so
they are modelled as string enums and compare equal to their raw strings.
"""

from __future__ import annotations

from enum import StrEnum


class AxisKind(StrEnum):
    """Scale kind used for the x axis of a chart."""

    time = "time"
    linear = "linear"
    ordinal = "ordinal"


class ColumnType(StrEnum):
    """Column type declared in tabular dataset metadata."""

    time = "time"
    linear = "linear"
    ordinal = "ordinal"
