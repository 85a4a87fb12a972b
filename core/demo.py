"""Demo datasets served by the built-in chart panels.

The rows are small, fixed and in-memory so the panels render without any
database or upstream data source.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Final

from analysis.categories import ColumnType
from analysis.dto import DatasetMetadata

DAY_MS: Final[int] = 24 * 60 * 60 * 1000
DEMO_START_MS: Final[int] = int(datetime(2021, 5, 3, tzinfo=UTC).timestamp() * 1000)

TRAFFIC_METADATA: Final[DatasetMetadata] = DatasetMetadata(
    names=("timestamp", "requests", "region"),
    types=(ColumnType.time, ColumnType.linear, ColumnType.ordinal),
)

TRAFFIC_ROWS: Final[tuple[tuple[object, ...], ...]] = tuple(
    (DEMO_START_MS + day * DAY_MS, requests, region)
    for day, per_region in enumerate(
        (
            {"north": 120, "south": 80.5, "west": 42},
            {"north": 132.25, "south": 77, "west": 51.333},
            {"north": 128, "south": 91.75, "west": 47},
            {"north": 140.125, "south": 88, "west": 55.5},
        )
    )
    for region, requests in per_region.items()
)

LATENCY_METADATA: Final[DatasetMetadata] = DatasetMetadata(
    names=("load", "p50", "p99"),
    types=(ColumnType.linear, ColumnType.linear, ColumnType.linear),
)

LATENCY_ROWS: Final[tuple[tuple[object, ...], ...]] = (
    (10, 12.5, 40.125),
    (20, 13.75, 44),
    (30, 15.333, 52.5),
    (40, 18, 61.875),
)
