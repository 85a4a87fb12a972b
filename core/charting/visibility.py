"""Series visibility helpers.

The set of ignored series is owned by the chart host and passed into every
composition pass as an immutable frozenset. Toggling returns a new set.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Final

VisibilitySet = frozenset[str]

MUTED_LEGEND_COLOR: Final[str] = "#d3d3d3"


def is_ignored(series_name: str, visibility: VisibilitySet) -> bool:
    """Return True when `series_name` is excluded from rendering."""

    return series_name in visibility


def legend_color(series_name: str, visibility: VisibilitySet, configured_color: str) -> str:
    """Return the legend symbol color for a series.

    Args:
        series_name: Series shown by the legend item.
        visibility: Currently ignored series.
        configured_color: Color declared for the series in the chart config.

    Returns:
        The muted color when the series is ignored, otherwise `configured_color`.
    """

    return MUTED_LEGEND_COLOR if is_ignored(series_name, visibility) else configured_color


def toggle_series(visibility: VisibilitySet, series_name: str) -> VisibilitySet:
    """Return a new visibility set with `series_name`'s membership flipped."""

    if series_name in visibility:
        return visibility - {series_name}
    return visibility | {series_name}


def visibility_set(names: Iterable[str] = ()) -> VisibilitySet:
    """Build a visibility set from any iterable of series names."""

    return frozenset(str(name) for name in names)
