"""Validation for AreaChartConfig definitions.

Chart configs are treated as user-editable input, so validation is strict and
fails fast. The composition engine itself does not re-check these rules; it
assumes configs were validated upstream.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from analysis.categories import ColumnType
from analysis.dto import DatasetMetadata

from .compose import COMPOSERS
from .schema import AreaChartConfig, ChartDefinition


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Result of validating a chart config."""

    is_valid: bool
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()


def validate_area_config(
    config: AreaChartConfig,
    *,
    metadata: DatasetMetadata | None = None,
    datasets: Mapping[str, object] | None = None,
) -> ValidationResult:
    """Validate an AreaChartConfig, optionally against its input data.

    Args:
        config: AreaChartConfig to validate.
        metadata: Optional column metadata; enables column reference checks.
        datasets: Optional classified datasets; enables series presence checks.

    Returns:
        ValidationResult containing errors and warnings.
    """

    errors: list[str] = []
    warnings: list[str] = []

    if not config.x.strip():
        errors.append("AreaChartConfig.x must be a non-empty string.")
    if not config.charts:
        errors.append("AreaChartConfig.charts must contain at least one chart.")
    if config.max_length is not None and config.max_length < 1:
        errors.append(f"AreaChartConfig.max_length must be >= 1, got {config.max_length}.")

    seen_ids: set[str] = set()
    for idx, chart in enumerate(config.charts):
        chart_key = str(chart.id)
        if chart_key in seen_ids:
            errors.append(f"AreaChartConfig.charts[{idx}] reuses chart id {chart.id!r}.")
        seen_ids.add(chart_key)
        _validate_chart(chart, idx=idx, errors=errors, warnings=warnings)

    declared = _declared_series(config.charts)
    for name in config.hidden_series:
        if declared and name not in declared:
            warnings.append(f"hidden series {name!r} is not declared by any chart.")

    if metadata is not None:
        _validate_columns(config, metadata=metadata, errors=errors, warnings=warnings)

    if datasets is not None:
        for name in sorted(declared):
            if name not in datasets:
                warnings.append(f"series {name!r} has no data; it will render empty.")

    return ValidationResult(is_valid=not errors, errors=tuple(errors), warnings=tuple(warnings))


def _validate_chart(
    chart: ChartDefinition,
    *,
    idx: int,
    errors: list[str],
    warnings: list[str],
) -> None:
    """Validate a single chart definition."""

    prefix = f"AreaChartConfig.charts[{idx}]"
    if not chart.y.strip():
        errors.append(f"{prefix}.y must be a non-empty string.")
    if chart.mode not in ("stacked", "normal"):
        errors.append(f"{prefix}.mode is not a supported value: {chart.mode!r}.")
    if chart.type not in COMPOSERS:
        errors.append(f"{prefix}.type is not a supported value: {chart.type!r}.")
    if not chart.data_set_names and not chart.color:
        warnings.append(f"{prefix} declares no dataSetNames; series are resolved from the y column.")

    if chart.style is not None:
        opacity = chart.style.fill_opacity
        if opacity is not None and not 0.0 <= opacity <= 1.0:
            errors.append(f"{prefix}.style.fill_opacity must be within [0, 1], got {opacity}.")
        radius = chart.style.marker_radius
        if radius is not None and radius <= 0:
            errors.append(f"{prefix}.style.marker_radius must be positive, got {radius}.")


def _validate_columns(
    config: AreaChartConfig,
    *,
    metadata: DatasetMetadata,
    errors: list[str],
    warnings: list[str],
) -> None:
    """Check that referenced columns exist in the dataset metadata."""

    x_type = metadata.type_of(config.x)
    if x_type is None:
        errors.append(f"x column {config.x!r} is not declared in the dataset metadata.")
    elif config.tip_time_format and x_type != ColumnType.time:
        warnings.append(
            f"tip_time_format is ignored because x column {config.x!r} is {str(x_type)!r}, not 'time'."
        )

    for idx, chart in enumerate(config.charts):
        if metadata.index_of(chart.y) is None:
            errors.append(f"AreaChartConfig.charts[{idx}] y column {chart.y!r} is not declared.")
        if chart.color and metadata.index_of(chart.color) is None:
            errors.append(f"AreaChartConfig.charts[{idx}] color column {chart.color!r} is not declared.")


def _declared_series(charts: Iterable[ChartDefinition]) -> set[str]:
    """Return every series name declared across chart definitions."""

    names: set[str] = set()
    for chart in charts:
        names.update(chart.data_set_names)
    return names
