"""Tooltip label formatting for chart markers.

Tooltips keep the precision of the underlying values: a value is rendered
as-is when rounding it to two decimals would not change it, and rounded to
exactly two decimals otherwise. Integers and short decimals therefore never
gain a trailing ".00".
"""

from __future__ import annotations

import math
from datetime import UTC, date, datetime, tzinfo
from decimal import ROUND_HALF_UP, Decimal

from .categories import AxisKind
from .dto import DataPoint


def format_tooltip(
    point: DataPoint,
    *,
    axis_kind: AxisKind | str,
    axis_label: str,
    value_label: str,
    time_format: str | None = None,
    tz: tzinfo = UTC,
) -> str:
    """Return the two-line tooltip text for a plotted point.

    Args:
        point: The data point under the marker.
        axis_kind: Scale kind of the x axis ("time", "linear" or "ordinal").
        axis_label: Label shown before the x value.
        value_label: Label shown before the y value.
        time_format: strftime-style pattern for temporal x values. Only used
            when `axis_kind` is "time".
        tz: Time zone used to render timestamps.

    Returns:
        `"<axis_label> : <x>\\n<value_label> : <y>"`.
    """

    if axis_kind == AxisKind.time and time_format:
        rendered_x = format_timestamp(point.x, pattern=time_format, tz=tz)
    else:
        rendered_x = format_value(point.x)
    return f"{axis_label} : {rendered_x}\n{value_label} : {format_value(point.y)}"


def format_value(value: object) -> str:
    """Render a raw axis value for display.

    Non-numeric values (category labels, unparseable strings, NaN) are
    rendered verbatim. Numeric values are rendered exactly when two-decimal
    rounding preserves them, otherwise rounded to two decimals.
    """

    number = as_number(value)
    if number is None:
        return str(value)
    if is_two_decimal_exact(number):
        return _render_exact(number)
    return f"{round_half_up(number):.2f}"


def as_number(value: object) -> int | float | None:
    """Coerce a raw value into a number, or return None when it is not numeric.

    Numeric strings such as "12.5" are treated as numbers. Booleans, blank
    strings and NaN are treated as non-numeric.
    """

    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, (float, Decimal)):
        number = float(value)
        return None if math.isnan(number) else number
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
        return None if math.isnan(number) else number
    return None


def is_two_decimal_exact(number: int | float) -> bool:
    """Return True when rounding `number` to two decimals yields the same value.

    The comparison is exact on the float value (no epsilon): the number is
    rounded half-up to two decimals, converted back to float and compared
    with `==`.
    """

    if isinstance(number, int):
        return True
    if not math.isfinite(number) or number.is_integer():
        return True
    return float(round_half_up(number)) == number


def round_half_up(number: int | float) -> Decimal:
    """Round the exact binary value of `number` to two decimals, ties away from zero."""

    return Decimal(number).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def format_timestamp(value: object, *, pattern: str, tz: tzinfo = UTC) -> str:
    """Render a temporal x value with a strftime-style pattern.

    Args:
        value: Epoch milliseconds, `datetime`, `date` or ISO-8601 string.
        pattern: strftime pattern. `%L` renders zero-padded milliseconds.
        tz: Time zone used to render the timestamp.

    Returns:
        The formatted timestamp, or the raw value verbatim when it cannot be
        interpreted as a point in time.
    """

    moment = as_datetime(value, tz=tz)
    if moment is None:
        return str(value)
    if "%L" in pattern:
        pattern = pattern.replace("%L", f"{moment.microsecond // 1000:03d}")
    return moment.strftime(pattern)


def as_datetime(value: object, *, tz: tzinfo = UTC) -> datetime | None:
    """Interpret a raw x value as an aware datetime in `tz`."""

    if isinstance(value, datetime):
        moment = value if value.tzinfo is not None else value.replace(tzinfo=tz)
        return moment.astimezone(tz)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=tz)
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            parsed = None
        if parsed is not None:
            return as_datetime(parsed, tz=tz)
    number = as_number(value)
    if number is None or math.isinf(number):
        return None
    try:
        return datetime.fromtimestamp(number / 1000, tz=tz)
    except (OverflowError, OSError, ValueError):
        return None


def _render_exact(number: int | float) -> str:
    """Render a number without padding; integral floats drop the ".0"."""

    if isinstance(number, int):
        return str(number)
    if math.isfinite(number) and number.is_integer():
        return str(int(number))
    return repr(number)
