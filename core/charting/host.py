"""In-memory host for an interactive area chart.

The host owns the visibility set for the lifetime of a mounted chart and
re-runs composition after every legend interaction. Events are handled one
at a time, in arrival order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from datetime import UTC, tzinfo
from typing import Any

from analysis.categories import AxisKind
from analysis.dto import DataPoint, DatasetMetadata

from .classify import classify_for_config
from .compose import compose_area_charts
from .interaction import InteractionRouter
from .primitives import ClickHandler, Composition
from .schema import AreaChartConfig
from .themes import ChartTheme, get_theme
from .visibility import VisibilitySet, visibility_set

logger = logging.getLogger(__name__)


class AreaChartHost:
    """Mounted area chart holding the current visibility set.

    Args:
        config: Chart configuration; its `hidden_series` seed the visibility set.
        datasets: Classified series data keyed by series name.
        x_scale: Scale kind of the x axis.
        theme: Theme flag ("light" or "dark").
        on_click: Handler invoked with clicked data points.
        tz: Time zone used to render temporal tooltips.
    """

    def __init__(
        self,
        config: AreaChartConfig,
        datasets: Mapping[str, Sequence[DataPoint]],
        *,
        x_scale: AxisKind | str,
        theme: str = "light",
        on_click: ClickHandler | None = None,
        tz: tzinfo = UTC,
    ) -> None:
        self.config = config
        self.datasets = datasets
        self.x_scale = x_scale
        self.theme: ChartTheme = get_theme(theme)
        self.tz = tz
        self.router = InteractionRouter(on_click)
        self.visibility: VisibilitySet = visibility_set(config.hidden_series)

    @classmethod
    def from_records(
        cls,
        config: AreaChartConfig,
        *,
        rows: Iterable[Sequence[object]],
        metadata: DatasetMetadata,
        theme: str = "light",
        on_click: ClickHandler | None = None,
        tz: tzinfo = UTC,
    ) -> "AreaChartHost":
        """Mount a host from flat tabular rows."""

        resolved, classified = classify_for_config(config, rows=rows, metadata=metadata)
        return cls(
            resolved,
            classified.datasets,
            x_scale=classified.x_scale,
            theme=theme,
            on_click=on_click,
            tz=tz,
        )

    def compose(self) -> Composition:
        """Run a composition pass against the current visibility set."""

        return compose_area_charts(
            self.config.charts,
            self.datasets,
            self.visibility,
            self.router.on_mark_click,
            self.theme,
            x_scale=self.x_scale,
            axis_label=self.config.x,
            time_format=self.config.tip_time_format,
            animate=self.config.animate,
            tz=self.tz,
        )

    def legend_click(self, series_name: str) -> Composition:
        """Toggle a series from the legend and return the new composition."""

        self.visibility = self.router.on_legend_click(series_name, self.visibility)
        logger.debug("Toggled series %r; ignored=%s", series_name, sorted(self.visibility))
        return self.compose()

    def mark_click(self, series_name: str, index: int) -> Any:
        """Click the marker at `index` of a rendered series.

        Raises:
            LookupError: When the series is not rendered or `index` is out of range.
        """

        unit = self.compose().find_series(series_name)
        if unit is None:
            raise LookupError(f"Series {series_name!r} is not rendered.")
        return unit.click(index)
