"""JSON payload rendering for composed area charts."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import UTC, tzinfo
from typing import Any, TypedDict

from analysis.categories import AxisKind
from analysis.dto import DataPoint

from .compose import compose_area_charts
from .primitives import ClickHandler, Composition
from .schema import AreaChartConfig
from .themes import get_theme
from .validator import validate_area_config
from .visibility import VisibilitySet


class LegendPayload(TypedDict):
    """A legend item as consumed by the legend component."""

    name: str
    symbol: dict[str, str]
    chartIndex: int


class ChartPayload(TypedDict):
    """The full payload (scale, legend, components) for a chart panel."""

    xScale: str
    theme: str
    legend: list[LegendPayload] | None
    hiddenSeries: list[str]
    components: list[dict[str, Any]]


@dataclass(frozen=True, slots=True)
class RenderedChart:
    """A rendered chart panel produced from an AreaChartConfig."""

    config: AreaChartConfig
    data: ChartPayload
    composition: Composition | None = None
    error: str | None = None
    warnings: tuple[str, ...] = ()


def render_area_chart(
    *,
    config: AreaChartConfig,
    datasets: Mapping[str, Sequence[DataPoint]],
    x_scale: AxisKind | str,
    visibility: VisibilitySet,
    theme: str,
    on_click: ClickHandler | None = None,
    tz: tzinfo = UTC,
) -> RenderedChart:
    """Validate, compose and serialize a chart panel.

    Args:
        config: Chart configuration (with resolved `data_set_names`).
        datasets: Classified series data keyed by series name.
        x_scale: Scale kind of the x axis.
        visibility: Series currently ignored.
        theme: Theme flag ("light" or "dark").
        on_click: Handler forwarded to marker layers.
        tz: Time zone used to render temporal tooltips.

    Returns:
        RenderedChart carrying the payload, or an `error` when the config is
        invalid.
    """

    chart_theme = get_theme(theme)
    validation = validate_area_config(config, datasets=datasets)
    if not validation.is_valid:
        return RenderedChart(
            config=config,
            data=_empty_payload(x_scale=x_scale, theme=chart_theme.name, visibility=visibility),
            error="; ".join(validation.errors),
            warnings=validation.warnings,
        )

    composition = compose_area_charts(
        config.charts,
        datasets,
        visibility,
        on_click,
        chart_theme,
        x_scale=x_scale,
        axis_label=config.x,
        time_format=config.tip_time_format,
        animate=config.animate,
        tz=tz,
    )
    legend: list[LegendPayload] | None = None
    if config.legend:
        legend = [item.as_json() for item in composition.legend_items]  # type: ignore[misc]
    payload: ChartPayload = {
        "xScale": str(x_scale),
        "theme": chart_theme.name,
        "legend": legend,
        "hiddenSeries": sorted(visibility),
        "components": [unit.as_json() for unit in composition.render_units],
    }
    return RenderedChart(config=config, data=payload, composition=composition, warnings=validation.warnings)


def _empty_payload(*, x_scale: AxisKind | str, theme: str, visibility: VisibilitySet) -> ChartPayload:
    """Return a payload with no legend and no components."""

    return {
        "xScale": str(x_scale),
        "theme": theme,
        "legend": None,
        "hiddenSeries": sorted(visibility),
        "components": [],
    }
