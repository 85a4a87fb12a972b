"""Render primitives emitted by chart composition.

These are instructions for an external renderer, not drawings. Each
composition pass creates fresh instances; only the `key` values are stable
across passes so the renderer can diff and animate.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from dataclasses import field
from typing import Any, Union

from analysis.dto import DataPoint

ClickHandler = Callable[[DataPoint], Any]

ENTER_ANIMATION_MS = 50


@dataclass(frozen=True, slots=True)
class Animation:
    """Enter animation applied to a primitive."""

    duration_ms: int = ENTER_ANIMATION_MS

    def as_json(self) -> dict[str, Any]:
        return {"onEnter": {"duration": self.duration_ms}}


@dataclass(frozen=True, slots=True)
class AreaPrimitive:
    """A filled region drawn under a series."""

    fill_opacity: float
    animate: Animation | None = None

    def as_json(self) -> dict[str, Any]:
        return {
            "type": "area",
            "style": {"data": {"fillOpacity": self.fill_opacity}},
            "animate": self.animate.as_json() if self.animate else None,
        }


@dataclass(frozen=True, slots=True)
class TooltipPrimitive:
    """Tooltip flyout shown when a marker is hovered."""

    flyout_fill: str
    flyout_fill_opacity: float
    flyout_stroke_width: float
    label_fill: str
    pointer_length: int = 4
    corner_radius: int = 2

    def as_json(self) -> dict[str, Any]:
        return {
            "pointerLength": self.pointer_length,
            "cornerRadius": self.corner_radius,
            "flyoutStyle": {
                "fill": self.flyout_fill,
                "fillOpacity": self.flyout_fill_opacity,
                "strokeWidth": self.flyout_stroke_width,
            },
            "style": {"fill": self.label_fill},
        }


@dataclass(frozen=True, slots=True)
class MarkerPrimitive:
    """Point markers carrying tooltips and click handling for a series.

    Args:
        size: Marker radius.
        labels: Tooltip text per point, aligned to the series data.
        tooltip: Tooltip styling.
        animate: Optional enter animation.
        on_click: Handler invoked with the clicked point.
    """

    size: float
    labels: tuple[str, ...]
    tooltip: TooltipPrimitive
    animate: Animation | None = None
    on_click: ClickHandler | None = field(default=None, compare=False, repr=False)

    def click(self, point: DataPoint) -> Any:
        """Forward a click on `point` to the handler; handler errors propagate."""

        if self.on_click is None:
            return None
        return self.on_click(point)

    def as_json(self) -> dict[str, Any]:
        return {
            "type": "scatter",
            "size": self.size,
            "labels": list(self.labels),
            "labelComponent": self.tooltip.as_json(),
            "animate": self.animate.as_json() if self.animate else None,
            "clickable": self.on_click is not None,
        }


@dataclass(frozen=True, slots=True)
class SeriesUnit:
    """One visible series: an area region with a marker layer on top."""

    key: str
    chart_index: int
    series_name: str
    color: str
    data: tuple[DataPoint, ...]
    area: AreaPrimitive
    marker: MarkerPrimitive

    def click(self, index: int) -> Any:
        """Simulate a click on the marker at `index`.

        Raises:
            IndexError: When `index` is outside the series data.
        """

        return self.marker.click(self.data[index])

    def as_json(self) -> dict[str, Any]:
        return {
            "kind": "group",
            "key": self.key,
            "name": self.series_name,
            "color": self.color,
            "data": [point.as_json() for point in self.data],
            "children": [self.area.as_json(), self.marker.as_json()],
        }


@dataclass(frozen=True, slots=True)
class StackUnit:
    """A stack grouping of the visible series of one stacked chart."""

    key: str
    chart_id: str | int
    children: tuple[SeriesUnit, ...]

    def as_json(self) -> dict[str, Any]:
        return {
            "kind": "stack",
            "key": self.key,
            "children": [child.as_json() for child in self.children],
        }


RenderUnit = Union[SeriesUnit, StackUnit]


@dataclass(frozen=True, slots=True)
class LegendItem:
    """A legend entry for one declared series."""

    name: str
    color: str
    chart_index: int

    def as_json(self) -> dict[str, Any]:
        return {"name": self.name, "symbol": {"fill": self.color}, "chartIndex": self.chart_index}


@dataclass(frozen=True, slots=True)
class Composition:
    """Result of one composition pass."""

    render_units: tuple[RenderUnit, ...] = ()
    legend_items: tuple[LegendItem, ...] = ()

    def series_units(self) -> Iterator[SeriesUnit]:
        """Yield every series unit, descending into stack groupings."""

        for unit in self.render_units:
            if isinstance(unit, StackUnit):
                yield from unit.children
            else:
                yield unit

    def find_series(self, series_name: str) -> SeriesUnit | None:
        """Return the first rendered series unit named `series_name`."""

        for unit in self.series_units():
            if unit.series_name == series_name:
                return unit
        return None
