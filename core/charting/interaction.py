"""Interaction routing for composed charts.

Mark clicks are forwarded to a caller-supplied handler. Legend clicks never
mutate state in place: they return the toggled visibility set, which the host
stores before running the next composition pass.
"""

from __future__ import annotations

from typing import Any

from analysis.dto import DataPoint

from .primitives import ClickHandler
from .visibility import VisibilitySet, toggle_series


class InteractionRouter:
    """Route renderer events back to the host.

    Args:
        on_click: Handler invoked with the clicked data point. Exceptions
            raised by the handler are not caught here.
    """

    def __init__(self, on_click: ClickHandler | None = None) -> None:
        self._on_click = on_click

    def on_mark_click(self, point: DataPoint) -> Any:
        """Invoke the click handler with the clicked point."""

        if self._on_click is None:
            return None
        return self._on_click(point)

    def on_legend_click(self, series_name: str, visibility: VisibilitySet) -> VisibilitySet:
        """Return `visibility` with `series_name` toggled."""

        return toggle_series(visibility, series_name)
