"""Tests for decoding chart configurations from mappings and YAML documents."""

from __future__ import annotations

from pathlib import Path

import pytest

from analysis.categories import ColumnType
from core.charting.codec import ChartConfigError, decode_area_config, encode_area_config
from core.charting.loader import load_chart_document, parse_chart_document
from core.charting.schema import AreaChartConfig, ChartDefinition, ChartStyle

PAYLOAD = {
    "x": "Date",
    "tipTimeFormat": "%Y-%m-%d",
    "animate": True,
    "legend": "yes",
    "maxLength": "25",
    "charts": [
        {
            "id": 1,
            "type": "area",
            "y": "Count",
            "mode": "stacked",
            "dataSetNames": {"A": "red", "B": "blue"},
            "style": {"fillOpacity": 0.3, "markRadius": "5"},
        },
        {"y": "Other"},
    ],
}

DOCUMENT = """\
config:
  x: ts
  tipTimeFormat: "%Y-%m-%d"
  legend: true
  charts:
    - id: traffic
      type: area
      y: count
      color: region
      mode: stacked
metadata:
  names: [ts, count, region]
  types: [time, linear, ordinal]
data:
  - [1620000000000, 7, north]
  - [1620000000000, 3, south]
"""


@pytest.mark.unit
def test_decode_area_config_reads_camel_case_payloads() -> None:
    """Decode authored keys into typed config values."""

    config = decode_area_config(PAYLOAD)

    assert config.x == "Date"
    assert config.tip_time_format == "%Y-%m-%d"
    assert config.animate is True
    assert config.legend is True
    assert config.max_length == 25
    first, second = config.charts
    assert first == ChartDefinition(
        id=1,
        y="Count",
        mode="stacked",
        data_set_names={"A": "red", "B": "blue"},
        style=ChartStyle(fill_opacity=0.3, marker_radius=5.0),
    )
    assert second.id == 1
    assert second.mode == "normal"
    assert second.data_set_names == {}


@pytest.mark.unit
def test_decoded_series_keep_declaration_order() -> None:
    """dataSetNames order drives legend order, so decoding must keep it."""

    config = decode_area_config({"x": "x", "charts": [{"y": "y", "dataSetNames": {"Z": "1", "A": "2", "M": "3"}}]})
    assert list(config.charts[0].data_set_names) == ["Z", "A", "M"]


@pytest.mark.unit
def test_encode_then_decode_preserves_config() -> None:
    """Encoded configs decode back to an equal config."""

    config = AreaChartConfig(
        x="Date",
        charts=(
            ChartDefinition(id="c", y="Count", mode="stacked", data_set_names={"A": "red"}, color="region"),
        ),
        tip_time_format="%d %b",
        legend=True,
        max_length=10,
        hidden_series=("A",),
    )
    assert decode_area_config(encode_area_config(config)) == config


@pytest.mark.unit
@pytest.mark.parametrize(
    ("payload", "message"),
    [
        ({"charts": [{"y": "y"}]}, "'x'"),
        ({"x": "x", "charts": []}, "'charts'"),
        ({"x": "x", "charts": [{"mode": "stacked"}]}, "'y'"),
        ({"x": "x", "charts": [{"y": "y", "dataSetNames": ["A"]}]}, "dataSetNames"),
    ],
)
def test_decode_area_config_rejects_malformed_payloads(payload: dict[str, object], message: str) -> None:
    """Structurally unusable payloads raise ChartConfigError."""

    with pytest.raises(ChartConfigError, match=message):
        decode_area_config(payload)


@pytest.mark.unit
def test_parse_chart_document_reads_bare_configs() -> None:
    """Documents without a `config` key are bare configurations."""

    document = parse_chart_document(PAYLOAD)

    assert document.config.x == "Date"
    assert document.metadata is None
    assert document.rows == ()


@pytest.mark.unit
def test_parse_chart_document_rejects_ragged_rows() -> None:
    """Rows must match the declared column count."""

    with pytest.raises(ChartConfigError, match="data\\[0\\]"):
        parse_chart_document(
            {
                "config": {"x": "ts", "charts": [{"y": "count"}]},
                "metadata": {"names": ["ts", "count"], "types": ["time", "linear"]},
                "data": [[1, 2, 3]],
            }
        )


@pytest.mark.unit
def test_parse_chart_document_rejects_unknown_column_types() -> None:
    """Column types outside time/linear/ordinal are rejected."""

    with pytest.raises(ChartConfigError, match="unsupported column type"):
        parse_chart_document(
            {
                "config": {"x": "ts", "charts": [{"y": "count"}]},
                "metadata": {"names": ["ts"], "types": ["geo"]},
            }
        )


@pytest.mark.integration
def test_load_chart_document_reads_yaml(tmp_path: Path) -> None:
    """Load config, metadata and rows from a YAML file."""

    path = tmp_path / "traffic.yml"
    path.write_text(DOCUMENT, encoding="utf-8")

    document = load_chart_document(path)

    assert document.config.charts[0].color == "region"
    assert document.config.legend is True
    assert document.metadata is not None
    assert document.metadata.types == (ColumnType.time, ColumnType.linear, ColumnType.ordinal)
    assert document.rows == ((1620000000000, 7, "north"), (1620000000000, 3, "south"))


@pytest.mark.integration
def test_load_chart_document_rejects_invalid_yaml(tmp_path: Path) -> None:
    """YAML syntax errors surface as ChartConfigError."""

    path = tmp_path / "broken.yml"
    path.write_text("config: [unclosed\n", encoding="utf-8")

    with pytest.raises(ChartConfigError, match="not valid YAML"):
        load_chart_document(path)
