"""Load chart documents authored in YAML.

A chart document holds a chart configuration and, optionally, the tabular
input it is meant to render:

    config:
      x: timestamp
      tipTimeFormat: "%Y-%m-%d"
      charts:
        - {id: 1, type: area, y: count, color: region, mode: stacked}
    metadata:
      names: [timestamp, count, region]
      types: [time, linear, ordinal]
    data:
      - [1620000000000, 7, north]

A document without a `config` key is read as a bare configuration.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from analysis.categories import ColumnType
from analysis.dto import DatasetMetadata

from .codec import ChartConfigError, decode_area_config
from .schema import AreaChartConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ChartDocument:
    """A decoded chart document.

    Attributes:
        config: Decoded chart configuration.
        metadata: Column metadata when the document carries data.
        rows: Tabular rows aligned to `metadata.names`.
    """

    config: AreaChartConfig
    metadata: DatasetMetadata | None = None
    rows: tuple[tuple[object, ...], ...] = ()


def load_chart_document(path: str | Path) -> ChartDocument:
    """Read and decode a YAML chart document.

    Args:
        path: Filesystem path to the YAML document.

    Returns:
        ChartDocument instance.

    Raises:
        ChartConfigError: When the document is not valid YAML or is malformed.
    """

    raw = Path(path).read_text(encoding="utf-8")
    try:
        payload = yaml.safe_load(raw) or {}
    except yaml.YAMLError as exc:
        raise ChartConfigError(f"Chart document {str(path)!r} is not valid YAML: {exc}") from exc
    logger.debug("Loaded chart document from %s", path)
    return parse_chart_document(payload)


def parse_chart_document(payload: Any) -> ChartDocument:
    """Decode an already-parsed chart document mapping."""

    if not isinstance(payload, Mapping):
        raise ChartConfigError("Chart document must be a mapping.")
    config_raw = payload.get("config", payload)
    config = decode_area_config(config_raw)

    metadata_raw = payload.get("metadata")
    if metadata_raw is None:
        return ChartDocument(config=config)
    metadata = _decode_metadata(metadata_raw)
    rows_raw = payload.get("data") or []
    if not isinstance(rows_raw, list):
        raise ChartConfigError("Chart document 'data' must be a list of rows.")
    rows = tuple(tuple(row) for row in rows_raw)
    for idx, row in enumerate(rows):
        if len(row) != len(metadata.names):
            raise ChartConfigError(
                f"data[{idx}] has {len(row)} values; metadata declares {len(metadata.names)} columns."
            )
    return ChartDocument(config=config, metadata=metadata, rows=rows)


def _decode_metadata(raw: Any) -> DatasetMetadata:
    """Decode `{names: [...], types: [...]}` column metadata."""

    if not isinstance(raw, Mapping):
        raise ChartConfigError("Chart document 'metadata' must be a mapping.")
    names = raw.get("names") or []
    types = raw.get("types") or []
    if not isinstance(names, list) or not isinstance(types, list) or len(names) != len(types):
        raise ChartConfigError("metadata.names and metadata.types must be lists of equal length.")
    try:
        column_types = tuple(ColumnType(str(value)) for value in types)
    except ValueError as exc:
        raise ChartConfigError(f"metadata.types contains an unsupported column type: {exc}") from exc
    return DatasetMetadata(names=tuple(str(name) for name in names), types=column_types)
