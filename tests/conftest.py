"""Pytest fixtures shared across unit and integration tests."""

from __future__ import annotations

from collections.abc import Sequence

import pytest

from analysis.dto import DataPoint
from core.charting.schema import AreaChartConfig, ChartDefinition


@pytest.fixture
def stacked_config() -> AreaChartConfig:
    """Return a single stacked chart with two declared series (A red, B blue)."""

    return AreaChartConfig(
        x="Date",
        charts=(
            ChartDefinition(
                id=1,
                y="Count",
                mode="stacked",
                data_set_names={"A": "red", "B": "blue"},
            ),
        ),
        legend=True,
    )


@pytest.fixture
def datasets() -> dict[str, tuple[DataPoint, ...]]:
    """Return classified datasets for series A and B."""

    return {
        "A": (DataPoint(x=1, y=2),),
        "B": (DataPoint(x=1, y=4),),
    }


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    The suite is runnable by intent:
    - `unit`: pure, fast tests with no Django request handling.
    - `integration`: tests touching Django views, sessions, or the filesystem.

    Each test must have exactly one of these markers.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            markers = []
            if has_unit:
                markers.append("unit")
            if has_integration:
                markers.append("integration")
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )
