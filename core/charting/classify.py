"""Bind the series classifier to AreaChartConfig definitions."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import replace

from analysis.classifier import classify_records
from analysis.dto import ClassifiedData, DatasetMetadata

from .schema import AreaChartConfig


def classify_for_config(
    config: AreaChartConfig,
    *,
    rows: Iterable[Sequence[object]],
    metadata: DatasetMetadata,
) -> tuple[AreaChartConfig, ClassifiedData]:
    """Classify tabular rows for a config and resolve its series colors.

    Args:
        config: Chart configuration whose charts may omit `data_set_names`.
        rows: Flat rows aligned to `metadata.names`.
        metadata: Column names and types.

    Returns:
        A config whose charts carry the resolved `data_set_names`, and the
        classified datasets.
    """

    classified = classify_records(
        rows,
        metadata=metadata,
        x=config.x,
        charts=config.charts,
        max_length=config.max_length,
    )
    charts = tuple(
        replace(chart, data_set_names=names)
        for chart, names in zip(config.charts, classified.data_set_names, strict=True)
    )
    return replace(config, charts=charts), classified
