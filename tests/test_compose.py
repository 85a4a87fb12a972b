"""Unit tests for composing area chart layers into render units and legends."""

from __future__ import annotations

from dataclasses import replace

import pytest

from analysis.dto import DataPoint
from core.charting.compose import COMPOSERS, compose_area_charts
from core.charting.primitives import SeriesUnit, StackUnit
from core.charting.schema import AreaChartConfig, ChartDefinition, ChartStyle
from core.charting.themes import DARK_THEME, LIGHT_THEME
from core.charting.visibility import MUTED_LEGEND_COLOR, toggle_series, visibility_set

pytestmark = pytest.mark.unit


def _compose(config: AreaChartConfig, datasets, ignored=(), on_click=None, **kwargs):  # type: ignore[no-untyped-def]
    return compose_area_charts(
        config.charts,
        datasets,
        visibility_set(ignored),
        on_click,
        kwargs.pop("theme", LIGHT_THEME),
        x_scale=kwargs.pop("x_scale", "linear"),
        axis_label=config.x,
        time_format=config.tip_time_format,
        animate=config.animate,
    )


def test_stacked_chart_emits_one_grouping(stacked_config, datasets) -> None:  # type: ignore[no-untyped-def]
    """Two visible series in a stacked chart form one stack grouping."""

    composition = _compose(stacked_config, datasets)

    assert len(composition.render_units) == 1
    stack = composition.render_units[0]
    assert isinstance(stack, StackUnit)
    assert stack.key == "area-stack-1"
    assert [child.series_name for child in stack.children] == ["A", "B"]
    assert [(item.name, item.color) for item in composition.legend_items] == [("A", "red"), ("B", "blue")]


def test_ignored_series_is_dropped_but_kept_in_legend(stacked_config, datasets) -> None:  # type: ignore[no-untyped-def]
    """Ignoring A leaves B in the stack and greys A in the legend."""

    composition = _compose(stacked_config, datasets, ignored=["A"])

    stack = composition.render_units[0]
    assert isinstance(stack, StackUnit)
    assert [child.series_name for child in stack.children] == ["B"]
    assert [(item.name, item.color) for item in composition.legend_items] == [
        ("A", MUTED_LEGEND_COLOR),
        ("B", "blue"),
    ]


def test_stacked_chart_with_every_series_ignored(stacked_config, datasets) -> None:  # type: ignore[no-untyped-def]
    """No render units, but every legend item, when all series are ignored."""

    composition = _compose(stacked_config, datasets, ignored=["A", "B"])

    assert composition.render_units == ()
    assert len(composition.legend_items) == 2


def test_normal_chart_emits_one_unit_per_visible_series(stacked_config, datasets) -> None:  # type: ignore[no-untyped-def]
    """Normal mode emits series units as siblings in declaration order."""

    config = replace(stacked_config, charts=(replace(stacked_config.charts[0], mode="normal"),))

    for ignored, expected in ([(), ["A", "B"]], [("A",), ["B"]], [("A", "B"), []]):
        composition = _compose(config, datasets, ignored=ignored)
        assert all(isinstance(unit, SeriesUnit) for unit in composition.render_units)
        assert [unit.series_name for unit in composition.render_units] == expected
        assert len(composition.legend_items) == 2


def test_order_follows_chart_then_series_declaration() -> None:
    """Units and legend items keep chart order, then series order."""

    config = AreaChartConfig(
        x="x",
        charts=(
            ChartDefinition(id="first", y="y", data_set_names={"C": "c", "A": "a"}),
            ChartDefinition(id="second", y="y", mode="stacked", data_set_names={"B": "b", "D": "d"}),
            ChartDefinition(id="third", y="y", data_set_names={"E": "e"}),
        ),
    )
    composition = _compose(config, {})

    keys = [unit.key for unit in composition.render_units]
    assert keys == ["area-group-0-C", "area-group-0-A", "area-stack-second", "area-group-2-E"]
    assert [(item.name, item.chart_index) for item in composition.legend_items] == [
        ("C", 0),
        ("A", 0),
        ("B", 1),
        ("D", 1),
        ("E", 2),
    ]


def test_legend_cardinality_is_stable_under_toggling(stacked_config, datasets) -> None:  # type: ignore[no-untyped-def]
    """Toggling changes legend colors, never the number of legend items."""

    ignored = visibility_set()
    before = _compose(stacked_config, datasets, ignored=ignored)
    ignored = toggle_series(ignored, "B")
    during = _compose(stacked_config, datasets, ignored=ignored)
    ignored = toggle_series(ignored, "B")
    after = _compose(stacked_config, datasets, ignored=ignored)

    assert len(before.legend_items) == len(during.legend_items) == len(after.legend_items) == 2
    assert after == before


def test_style_overrides_and_theme_fallbacks(datasets) -> None:  # type: ignore[no-untyped-def]
    """Per-chart style wins; otherwise the theme defaults apply."""

    config = AreaChartConfig(
        x="x",
        charts=(
            ChartDefinition(id=1, y="y", data_set_names={"A": "red"}, style=ChartStyle(fill_opacity=0.2)),
            ChartDefinition(id=2, y="y", data_set_names={"B": "blue"}, style=ChartStyle(marker_radius=7)),
            ChartDefinition(id=3, y="y", data_set_names={"A": "green"}, style=ChartStyle(fill_opacity=0.0)),
        ),
    )
    units = _compose(config, datasets, theme=DARK_THEME).render_units

    assert isinstance(units[0], SeriesUnit)
    assert units[0].area.fill_opacity == 0.2
    assert units[0].marker.size == DARK_THEME.area.marker_radius
    assert isinstance(units[1], SeriesUnit)
    assert units[1].area.fill_opacity == DARK_THEME.area.fill_opacity
    assert units[1].marker.size == 7
    assert isinstance(units[2], SeriesUnit)
    assert units[2].area.fill_opacity == 0.0


def test_marker_tooltips_use_label_formatter() -> None:
    """Marker labels align with the series data and use the chart's y label."""

    config = AreaChartConfig(
        x="Date",
        charts=(ChartDefinition(id=1, y="Count", data_set_names={"A": "red"}),),
        tip_time_format="%Y-%m-%d",
    )
    datasets = {"A": (DataPoint(x=1620000000000, y=7), DataPoint(x=1620086400000, y=7.129))}
    unit = _compose(config, datasets, x_scale="time").render_units[0]

    assert isinstance(unit, SeriesUnit)
    assert unit.marker.labels == ("Date : 2021-05-03\nCount : 7", "Date : 2021-05-04\nCount : 7.13")
    assert unit.marker.tooltip.flyout_fill == LIGHT_THEME.tooltip.flyout_fill
    assert unit.marker.tooltip.pointer_length == 4
    assert unit.marker.tooltip.corner_radius == 2


def test_animation_follows_config(stacked_config, datasets) -> None:  # type: ignore[no-untyped-def]
    """Both primitives animate on enter only when configured."""

    still = _compose(stacked_config, datasets).render_units[0]
    moving = _compose(replace(stacked_config, animate=True), datasets).render_units[0]

    assert isinstance(still, StackUnit) and isinstance(moving, StackUnit)
    assert still.children[0].area.animate is None
    assert moving.children[0].area.animate is not None
    assert moving.children[0].marker.as_json()["animate"] == {"onEnter": {"duration": 50}}


def test_missing_dataset_yields_empty_series(stacked_config) -> None:  # type: ignore[no-untyped-def]
    """A declared series without data renders as an empty unit."""

    composition = _compose(stacked_config, {"A": (DataPoint(x=1, y=2),)})
    stack = composition.render_units[0]

    assert isinstance(stack, StackUnit)
    assert stack.children[1].series_name == "B"
    assert stack.children[1].data == ()
    assert stack.children[1].marker.labels == ()


def test_mark_click_forwards_point_to_handler(stacked_config, datasets) -> None:  # type: ignore[no-untyped-def]
    """Clicking a marker invokes the handler with the clicked point."""

    clicked: list[DataPoint] = []
    composition = _compose(stacked_config, datasets, on_click=clicked.append)
    unit = composition.find_series("B")

    assert unit is not None
    unit.click(0)
    assert clicked == [DataPoint(x=1, y=4)]


def test_mark_click_handler_errors_propagate(stacked_config, datasets) -> None:  # type: ignore[no-untyped-def]
    """Handler exceptions are not swallowed by the marker."""

    def explode(_point: DataPoint) -> None:
        raise RuntimeError("handler failed")

    unit = _compose(stacked_config, datasets, on_click=explode).find_series("A")

    assert unit is not None
    with pytest.raises(RuntimeError, match="handler failed"):
        unit.click(0)


def test_unknown_chart_type_is_rejected(datasets) -> None:  # type: ignore[no-untyped-def]
    """Dispatch fails for chart types without a registered composer."""

    chart = ChartDefinition(id=1, y="y", data_set_names={"A": "red"}, type="pie")  # type: ignore[arg-type]
    assert "pie" not in COMPOSERS
    with pytest.raises(ValueError, match="Unsupported chart type"):
        _compose(AreaChartConfig(x="x", charts=(chart,)), datasets)


def test_inputs_are_not_mutated(stacked_config, datasets) -> None:  # type: ignore[no-untyped-def]
    """Composition reads datasets and visibility without changing them."""

    ignored = visibility_set(["A"])
    snapshot = dict(datasets)
    _compose(stacked_config, datasets, ignored=ignored)

    assert datasets == snapshot
    assert ignored == frozenset({"A"})
