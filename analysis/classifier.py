"""Series classification for tabular chart input.

Raw chart input arrives as flat rows plus column metadata. The classifier
partitions those rows into named series (one bucket per dataset name) and
resolves the series-to-color mapping for each chart definition, independent
of how the series are later drawn.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Protocol

from .categories import AxisKind, ColumnType
from .dto import ClassifiedData, DataPoint, DatasetMetadata

DEFAULT_PALETTE: tuple[str, ...] = (
    "#3366CC",
    "#DC3912",
    "#FF9900",
    "#109618",
    "#990099",
    "#0099C6",
    "#DD4477",
    "#66AA00",
    "#B82E2E",
    "#316395",
    "#994499",
    "#22AA99",
)


class ClassificationError(ValueError):
    """Raised when rows cannot be classified against the declared metadata."""


class SeriesSource(Protocol):
    """The parts of a chart definition the classifier reads."""

    @property
    def y(self) -> str: ...

    @property
    def color(self) -> str | None: ...

    @property
    def fill(self) -> str | None: ...

    @property
    def data_set_names(self) -> Mapping[str, str]: ...


def infer_x_scale(metadata: DatasetMetadata, *, x: str) -> AxisKind:
    """Return the x-axis scale kind for the declared x column.

    Args:
        metadata: Column metadata for the input rows.
        x: Name of the x column.

    Returns:
        AxisKind matching the column type.

    Raises:
        ClassificationError: When `x` is not a declared column.
    """

    column_type = metadata.type_of(x)
    if column_type is None:
        raise ClassificationError(f"x column {x!r} is not declared in the dataset metadata.")
    if column_type == ColumnType.time:
        return AxisKind.time
    if column_type == ColumnType.ordinal:
        return AxisKind.ordinal
    return AxisKind.linear


def classify_records(
    rows: Iterable[Sequence[object]],
    *,
    metadata: DatasetMetadata,
    x: str,
    charts: Sequence[SeriesSource],
    max_length: int | None = None,
    palette: Sequence[str] = DEFAULT_PALETTE,
) -> ClassifiedData:
    """Partition flat rows into per-series point sequences.

    Charts with a `color` column split rows into one series per distinct
    category value; other charts contribute a single series named after their
    `y` column. Colors already declared in `data_set_names` are kept; new
    series get the chart's `fill` (single series) or the next palette color.

    Args:
        rows: Flat rows aligned to `metadata.names`.
        metadata: Column names and types.
        x: Name of the x column.
        charts: Chart definitions, in declaration order.
        max_length: Optional cap on points per series; older points are
            dropped first.
        palette: Colors assigned to newly discovered series.

    Returns:
        ClassifiedData with datasets and per-chart series colors.

    Raises:
        ClassificationError: When a referenced column is not declared.
    """

    x_scale = infer_x_scale(metadata, x=x)
    x_idx = metadata.names.index(x)

    columns: list[tuple[int, int | None]] = []
    for chart in charts:
        y_idx = metadata.index_of(chart.y)
        if y_idx is None:
            raise ClassificationError(f"y column {chart.y!r} is not declared in the dataset metadata.")
        color_idx: int | None = None
        if chart.color:
            color_idx = metadata.index_of(chart.color)
            if color_idx is None:
                raise ClassificationError(f"color column {chart.color!r} is not declared in the dataset metadata.")
        columns.append((y_idx, color_idx))

    names_by_chart: list[dict[str, str]] = [dict(chart.data_set_names) for chart in charts]
    palette_cursor = [0 for _ in charts]
    for idx, chart in enumerate(charts):
        if not chart.color and chart.y not in names_by_chart[idx]:
            names_by_chart[idx][chart.y] = chart.fill or _next_color(palette, palette_cursor, idx)

    buckets: dict[str, list[DataPoint]] = {}
    for row in rows:
        for idx, chart in enumerate(charts):
            y_idx, color_idx = columns[idx]
            if color_idx is None:
                name = chart.y
            else:
                name = str(row[color_idx])
                if name not in names_by_chart[idx]:
                    names_by_chart[idx][name] = _next_color(palette, palette_cursor, idx)
            bucket = buckets.setdefault(name, [])
            bucket.append(DataPoint(x=row[x_idx], y=row[y_idx]))  # type: ignore[arg-type]
            if max_length is not None and len(bucket) > max_length:
                del bucket[0]

    return ClassifiedData(
        x_scale=x_scale,
        datasets={name: tuple(points) for name, points in buckets.items()},
        data_set_names=tuple(names_by_chart),
    )


def _next_color(palette: Sequence[str], cursor: list[int], chart_index: int) -> str:
    """Return the next palette color for a chart and advance its cursor."""

    color = palette[cursor[chart_index] % len(palette)]
    cursor[chart_index] += 1
    return color
