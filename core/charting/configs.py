"""Built-in chart panels served by the core app."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from analysis.dto import DatasetMetadata
from core import demo

from .schema import AreaChartConfig, ChartDefinition, ChartStyle
from .validator import validate_area_config


@dataclass(frozen=True, slots=True)
class ChartPanel:
    """A chart configuration bound to the tabular input it renders.

    Args:
        key: Stable identifier used in URLs and session state.
        title: Display title.
        config: Chart configuration.
        metadata: Column metadata for `rows`.
        rows: Tabular input rows.
    """

    key: str
    title: str
    config: AreaChartConfig
    metadata: DatasetMetadata
    rows: tuple[tuple[object, ...], ...]


CHART_PANELS: Final[tuple[ChartPanel, ...]] = (
    ChartPanel(
        key="traffic_by_region",
        title="Requests by Region",
        config=AreaChartConfig(
            x="timestamp",
            charts=(
                ChartDefinition(
                    id="traffic",
                    y="requests",
                    mode="stacked",
                    color="region",
                    data_set_names={"north": "#3366CC", "south": "#DC3912", "west": "#FF9900"},
                ),
            ),
            tip_time_format="%Y-%m-%d",
            animate=True,
            legend=True,
            max_length=30,
        ),
        metadata=demo.TRAFFIC_METADATA,
        rows=demo.TRAFFIC_ROWS,
    ),
    ChartPanel(
        key="latency_by_load",
        title="Latency by Load",
        config=AreaChartConfig(
            x="load",
            charts=(
                ChartDefinition(id="p50", y="p50", fill="#109618", style=ChartStyle(fill_opacity=0.3)),
                ChartDefinition(id="p99", y="p99", fill="#990099", style=ChartStyle(marker_radius=3)),
            ),
            legend=True,
        ),
        metadata=demo.LATENCY_METADATA,
        rows=demo.LATENCY_ROWS,
    ),
)


for _panel in CHART_PANELS:
    _VALIDATION = validate_area_config(_panel.config, metadata=_panel.metadata)
    if not _VALIDATION.is_valid:
        joined = "\n".join(_VALIDATION.errors)
        raise ValueError(f"Invalid chart panel {_panel.key!r}:\n{joined}")


CHART_PANEL_BY_KEY: Final[dict[str, ChartPanel]] = {panel.key: panel for panel in CHART_PANELS}


def get_chart_panel(key: str) -> ChartPanel | None:
    """Return the registered chart panel for `key`."""

    return CHART_PANEL_BY_KEY.get(key)
