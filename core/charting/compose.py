"""Chart composition: chart definitions to render units and legend items.

A composition pass walks the chart definitions in declaration order and, for
each declared series, emits a legend item and (when the series is not
ignored) one series unit. Stacked charts wrap their series units in a single
stack grouping; normal charts emit them as siblings.

Composition is a pure function of its inputs. It never mutates the datasets
or the visibility set and performs no logging.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import UTC, tzinfo
from typing import Protocol

from analysis.categories import AxisKind
from analysis.dto import DataPoint
from analysis.label_format import format_tooltip

from .primitives import (
    Animation,
    AreaPrimitive,
    ClickHandler,
    Composition,
    LegendItem,
    MarkerPrimitive,
    RenderUnit,
    SeriesUnit,
    StackUnit,
    TooltipPrimitive,
)
from .schema import ChartDefinition
from .themes import ChartTheme
from .visibility import VisibilitySet, is_ignored, legend_color


@dataclass(frozen=True, slots=True)
class CompositionContext:
    """Panel-wide settings shared by every chart layer.

    Args:
        x_scale: Scale kind of the shared x axis.
        axis_label: Label shown before x values in tooltips.
        time_format: strftime-style pattern for temporal tooltips.
        animate: Whether primitives animate on enter.
        tz: Time zone used to render temporal tooltips.
    """

    x_scale: AxisKind | str
    axis_label: str
    time_format: str | None = None
    animate: bool = False
    tz: tzinfo = UTC


class ChartComposer(Protocol):
    """Composition interface implemented per chart type."""

    def compose(
        self,
        chart: ChartDefinition,
        chart_index: int,
        *,
        datasets: Mapping[str, Sequence[DataPoint]],
        visibility: VisibilitySet,
        on_click: ClickHandler | None,
        theme: ChartTheme,
        context: CompositionContext,
    ) -> Composition: ...


class AreaComposer:
    """Compose area layers: filled regions with tooltip markers."""

    def compose(
        self,
        chart: ChartDefinition,
        chart_index: int,
        *,
        datasets: Mapping[str, Sequence[DataPoint]],
        visibility: VisibilitySet,
        on_click: ClickHandler | None,
        theme: ChartTheme,
        context: CompositionContext,
    ) -> Composition:
        legend_items: list[LegendItem] = []
        series_units: list[SeriesUnit] = []
        for series_name, color in chart.data_set_names.items():
            legend_items.append(
                LegendItem(
                    name=series_name,
                    color=legend_color(series_name, visibility, color),
                    chart_index=chart_index,
                )
            )
            if is_ignored(series_name, visibility):
                continue
            series_units.append(
                build_series_unit(
                    chart,
                    chart_index,
                    series_name=series_name,
                    color=color,
                    data=tuple(datasets.get(series_name, ())),
                    on_click=on_click,
                    theme=theme,
                    context=context,
                )
            )

        render_units: tuple[RenderUnit, ...]
        if chart.mode == "stacked":
            render_units = (stack_unit(chart, series_units),) if series_units else ()
        else:
            render_units = tuple(series_units)
        return Composition(render_units=render_units, legend_items=tuple(legend_items))


COMPOSERS: dict[str, ChartComposer] = {
    "area": AreaComposer(),
}


def compose_charts(
    charts: Sequence[ChartDefinition],
    *,
    datasets: Mapping[str, Sequence[DataPoint]],
    visibility: VisibilitySet,
    on_click: ClickHandler | None,
    theme: ChartTheme,
    context: CompositionContext,
) -> Composition:
    """Run one composition pass over chart definitions of any registered type.

    Args:
        charts: Chart definitions in declaration order.
        datasets: Classified series data keyed by series name.
        visibility: Series currently ignored.
        on_click: Handler forwarded to every marker layer.
        theme: Theme providing style defaults.
        context: Panel-wide settings.

    Returns:
        Composition with render units and legend items in chart-declaration
        order, then series-declaration order.

    Raises:
        ValueError: When a chart declares an unregistered chart type.
    """

    render_units: list[RenderUnit] = []
    legend_items: list[LegendItem] = []
    for chart_index, chart in enumerate(charts):
        composer = COMPOSERS.get(chart.type)
        if composer is None:
            raise ValueError(f"Unsupported chart type {chart.type!r} for chart {chart.id!r}.")
        partial = composer.compose(
            chart,
            chart_index,
            datasets=datasets,
            visibility=visibility,
            on_click=on_click,
            theme=theme,
            context=context,
        )
        render_units.extend(partial.render_units)
        legend_items.extend(partial.legend_items)
    return Composition(render_units=tuple(render_units), legend_items=tuple(legend_items))


def compose_area_charts(
    charts: Sequence[ChartDefinition],
    datasets: Mapping[str, Sequence[DataPoint]],
    visibility: VisibilitySet,
    on_click: ClickHandler | None,
    theme: ChartTheme,
    *,
    x_scale: AxisKind | str,
    axis_label: str,
    time_format: str | None = None,
    animate: bool = False,
    tz: tzinfo = UTC,
) -> Composition:
    """Compose area chart layers into render units and legend items."""

    context = CompositionContext(
        x_scale=x_scale,
        axis_label=axis_label,
        time_format=time_format,
        animate=animate,
        tz=tz,
    )
    return compose_charts(
        charts,
        datasets=datasets,
        visibility=visibility,
        on_click=on_click,
        theme=theme,
        context=context,
    )


def build_series_unit(
    chart: ChartDefinition,
    chart_index: int,
    *,
    series_name: str,
    color: str,
    data: tuple[DataPoint, ...],
    on_click: ClickHandler | None,
    theme: ChartTheme,
    context: CompositionContext,
) -> SeriesUnit:
    """Build the area region and marker layer for one visible series."""

    animation = Animation() if context.animate else None
    labels = tuple(
        format_tooltip(
            point,
            axis_kind=context.x_scale,
            axis_label=context.axis_label,
            value_label=chart.y,
            time_format=context.time_format,
            tz=context.tz,
        )
        for point in data
    )
    tooltip = TooltipPrimitive(
        flyout_fill=theme.tooltip.flyout_fill,
        flyout_fill_opacity=theme.tooltip.flyout_fill_opacity,
        flyout_stroke_width=theme.tooltip.flyout_stroke_width,
        label_fill=theme.tooltip.label_fill,
    )
    return SeriesUnit(
        key=f"area-group-{chart_index}-{series_name}",
        chart_index=chart_index,
        series_name=series_name,
        color=color,
        data=data,
        area=AreaPrimitive(fill_opacity=resolve_fill_opacity(chart, theme), animate=animation),
        marker=MarkerPrimitive(
            size=resolve_marker_radius(chart, theme),
            labels=labels,
            tooltip=tooltip,
            animate=animation,
            on_click=on_click,
        ),
    )


def stack_unit(chart: ChartDefinition, series_units: Sequence[SeriesUnit]) -> StackUnit:
    """Wrap the series units of a stacked chart in one grouping."""

    return StackUnit(key=f"area-stack-{chart.id}", chart_id=chart.id, children=tuple(series_units))


def resolve_fill_opacity(chart: ChartDefinition, theme: ChartTheme) -> float:
    """Return the chart's fill opacity, falling back to the theme default."""

    if chart.style is not None and chart.style.fill_opacity is not None:
        return chart.style.fill_opacity
    return theme.area.fill_opacity


def resolve_marker_radius(chart: ChartDefinition, theme: ChartTheme) -> float:
    """Return the chart's marker radius, falling back to the theme default."""

    if chart.style is not None and chart.style.marker_radius is not None:
        return chart.style.marker_radius
    return theme.area.marker_radius
