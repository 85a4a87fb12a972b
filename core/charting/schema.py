"""Schema types for declarative area chart configuration.

Charts are driven by configuration objects (AreaChartConfig) instead of
hard-coded chart logic. This keeps the composition layer generic and makes it
possible to add chart layers without touching view code.
"""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from typing import Literal

ChartType = Literal["area"]

ChartMode = Literal["stacked", "normal"]


@dataclass(frozen=True, slots=True)
class ChartStyle:
    """Optional per-chart style overrides.

    Args:
        fill_opacity: Opacity of the filled region. Falls back to the theme.
        marker_radius: Radius of the hover/click markers. Falls back to the theme.
    """

    fill_opacity: float | None = None
    marker_radius: float | None = None


@dataclass(frozen=True, slots=True)
class ChartDefinition:
    """One configured chart layer.

    Args:
        id: Stable identifier, used to key stack groupings.
        y: Value field name; also the value label shown in tooltips.
        mode: "stacked" draws the layer's series as one stack; "normal" draws
            them as siblings.
        data_set_names: Series name to color token, in declaration order.
        style: Optional fill opacity / marker radius overrides.
        color: Optional category column that splits rows into series.
        fill: Optional color for the single series of a chart without `color`.
        type: Chart type tag used for composer dispatch.
    """

    id: str | int
    y: str
    mode: ChartMode = "normal"
    data_set_names: dict[str, str] = field(default_factory=dict)
    style: ChartStyle | None = None
    color: str | None = None
    fill: str | None = None
    type: ChartType = "area"


@dataclass(frozen=True, slots=True)
class AreaChartConfig:
    """Declarative configuration for an area chart panel.

    Args:
        x: X field name; also the axis label shown in tooltips.
        charts: Chart layers in declaration order.
        tip_time_format: strftime-style pattern for temporal tooltip x values.
        animate: Whether primitives animate on enter.
        legend: Whether the legend is rendered.
        max_length: Optional cap on the number of points kept per series.
        hidden_series: Series ignored when the chart is mounted.
    """

    x: str
    charts: tuple[ChartDefinition, ...]
    tip_time_format: str | None = None
    animate: bool = False
    legend: bool = False
    max_length: int | None = None
    hidden_series: tuple[str, ...] = ()
