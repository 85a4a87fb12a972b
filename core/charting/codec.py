"""Encoding/decoding helpers for AreaChartConfig payloads.

Payloads use the camelCase keys chart authors write (`dataSetNames`,
`tipTimeFormat`, `markRadius`, ...), whether they arrive as JSON or YAML.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, cast

from .schema import AreaChartConfig, ChartDefinition, ChartStyle


class ChartConfigError(ValueError):
    """Raised when a chart configuration payload is structurally unusable."""


def encode_area_config(config: AreaChartConfig) -> dict[str, Any]:
    """Encode an AreaChartConfig into a JSON-serializable dictionary.

    Args:
        config: AreaChartConfig to encode.

    Returns:
        Dict payload using camelCase keys.
    """

    payload: dict[str, Any] = {
        "x": config.x,
        "charts": [_encode_chart(chart) for chart in config.charts],
        "tipTimeFormat": config.tip_time_format,
        "animate": config.animate,
        "legend": config.legend,
    }
    if config.max_length is not None:
        payload["maxLength"] = config.max_length
    if config.hidden_series:
        payload["hiddenSeries"] = list(config.hidden_series)
    return payload


def decode_area_config(payload: Mapping[str, Any]) -> AreaChartConfig:
    """Decode an AreaChartConfig from a payload dictionary.

    Args:
        payload: Mapping previously produced by `encode_area_config` or
            authored by hand.

    Returns:
        AreaChartConfig instance.

    Raises:
        ChartConfigError: When required fields are missing or malformed.
    """

    if not isinstance(payload, Mapping):
        raise ChartConfigError("Chart configuration must be a mapping.")
    x = payload.get("x")
    if not isinstance(x, str) or not x.strip():
        raise ChartConfigError("Chart configuration requires a non-empty 'x' field.")
    charts_raw = payload.get("charts")
    if not isinstance(charts_raw, list) or not charts_raw:
        raise ChartConfigError("Chart configuration requires a non-empty 'charts' list.")

    charts = tuple(_decode_chart(cast(Mapping[str, Any], raw), idx) for idx, raw in enumerate(charts_raw))
    hidden_raw = payload.get("hiddenSeries") or ()
    return AreaChartConfig(
        x=x,
        charts=charts,
        tip_time_format=_parse_optional_str(payload.get("tipTimeFormat")),
        animate=_parse_bool(payload.get("animate")),
        legend=_parse_bool(payload.get("legend")),
        max_length=_parse_int(payload.get("maxLength")),
        hidden_series=tuple(str(name) for name in hidden_raw),
    )


def _encode_chart(chart: ChartDefinition) -> dict[str, Any]:
    """Encode one chart definition."""

    raw: dict[str, Any] = {
        "id": chart.id,
        "type": chart.type,
        "y": chart.y,
        "mode": chart.mode,
        "dataSetNames": dict(chart.data_set_names),
    }
    if chart.style is not None:
        raw["style"] = {"fillOpacity": chart.style.fill_opacity, "markRadius": chart.style.marker_radius}
    if chart.color is not None:
        raw["color"] = chart.color
    if chart.fill is not None:
        raw["fill"] = chart.fill
    return raw


def _decode_chart(raw: Mapping[str, Any], idx: int) -> ChartDefinition:
    """Decode one chart definition; `idx` doubles as the default id."""

    if not isinstance(raw, Mapping):
        raise ChartConfigError(f"charts[{idx}] must be a mapping.")
    y = raw.get("y")
    if not isinstance(y, str) or not y.strip():
        raise ChartConfigError(f"charts[{idx}] requires a non-empty 'y' field.")
    names_raw = raw.get("dataSetNames") or {}
    if not isinstance(names_raw, Mapping):
        raise ChartConfigError(f"charts[{idx}].dataSetNames must be a mapping of series name to color.")
    style_raw = raw.get("style")
    style = None
    if isinstance(style_raw, Mapping):
        style = ChartStyle(
            fill_opacity=_parse_float(style_raw.get("fillOpacity")),
            marker_radius=_parse_float(style_raw.get("markRadius")),
        )
    return ChartDefinition(
        id=raw.get("id", idx),
        y=y,
        mode=str(raw.get("mode") or "normal"),  # type: ignore[arg-type]
        data_set_names={str(name): str(color) for name, color in names_raw.items()},
        style=style,
        color=_parse_optional_str(raw.get("color")),
        fill=_parse_optional_str(raw.get("fill")),
        type=str(raw.get("type") or "area"),  # type: ignore[arg-type]
    )


def _parse_optional_str(value: object) -> str | None:
    """Return a non-empty string or None."""

    if value is None or value == "":
        return None
    return str(value)


def _parse_float(value: object) -> float | None:
    """Best-effort float parsing for style values."""

    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        return float(str(value))
    except ValueError:
        return None


def _parse_int(value: object) -> int | None:
    """Best-effort int parsing."""

    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        return int(str(value))
    except ValueError:
        return None


def _parse_bool(value: object) -> bool:
    """Best-effort bool parsing."""

    if isinstance(value, bool):
        return value
    if value is None:
        return False
    normalized = str(value).strip().casefold()
    return normalized in {"1", "true", "yes", "on"}
