"""DTO types shared by the classifier and the composition engine.

DTOs are plain data containers used to transport chart data to the UI.
They intentionally avoid any Django/ORM dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from datetime import date
from typing import Any, Union

from .categories import AxisKind, ColumnType

XValue = Union[int, float, str, date]
YValue = Union[int, float, str]


@dataclass(frozen=True, slots=True)
class DataPoint:
    """A single plotted point.

    Attributes:
        x: Numeric value, timestamp (epoch milliseconds, date/datetime or ISO
            string) or category label.
        y: Plotted value. Non-numeric values are tolerated and rendered
            verbatim in tooltips.
    """

    x: XValue
    y: YValue

    def as_json(self) -> dict[str, Any]:
        """Return a JSON-serializable representation of the point."""

        x: Any = self.x.isoformat() if isinstance(self.x, date) else self.x
        return {"x": x, "y": self.y}


@dataclass(frozen=True, slots=True)
class DatasetMetadata:
    """Column metadata for tabular chart input.

    Attributes:
        names: Column names, aligned to each row.
        types: Column types aligned to `names`.
    """

    names: tuple[str, ...]
    types: tuple[ColumnType, ...]

    def index_of(self, name: str) -> int | None:
        """Return the column index for `name`, or None when it is not declared."""

        try:
            return self.names.index(name)
        except ValueError:
            return None

    def type_of(self, name: str) -> ColumnType | None:
        """Return the declared type for column `name`."""

        idx = self.index_of(name)
        if idx is None or idx >= len(self.types):
            return None
        return ColumnType(self.types[idx])


@dataclass(frozen=True, slots=True)
class ClassifiedData:
    """Output of the series classifier.

    Attributes:
        x_scale: Scale kind inferred from the x column type.
        datasets: Mapping of series name to its ordered points.
        data_set_names: Per-chart mapping of series name to color, aligned to
            the chart definitions passed to the classifier.
    """

    x_scale: AxisKind
    datasets: dict[str, tuple[DataPoint, ...]] = field(default_factory=dict)
    data_set_names: tuple[dict[str, str], ...] = ()
