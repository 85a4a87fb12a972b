"""Built-in theme tokens for chart composition.

Only the tokens the composition engine reads are modelled here: the area
defaults and the tooltip styling. Axis and grid tokens belong to the chart
container.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Literal

ThemeName = Literal["light", "dark"]


@dataclass(frozen=True, slots=True)
class AreaTheme:
    """Default styling for area layers."""

    fill_opacity: float
    marker_radius: float


@dataclass(frozen=True, slots=True)
class TooltipTheme:
    """Tooltip flyout and label styling."""

    flyout_fill: str
    flyout_fill_opacity: float
    flyout_stroke_width: float
    label_fill: str


@dataclass(frozen=True, slots=True)
class ChartTheme:
    """A named bundle of theme tokens."""

    name: ThemeName
    area: AreaTheme
    tooltip: TooltipTheme


LIGHT_THEME: Final[ChartTheme] = ChartTheme(
    name="light",
    area=AreaTheme(fill_opacity=0.5, marker_radius=4),
    tooltip=TooltipTheme(
        flyout_fill="#FFFFFF",
        flyout_fill_opacity=0.9,
        flyout_stroke_width=0.5,
        label_fill="#1D1D1D",
    ),
)

DARK_THEME: Final[ChartTheme] = ChartTheme(
    name="dark",
    area=AreaTheme(fill_opacity=0.5, marker_radius=4),
    tooltip=TooltipTheme(
        flyout_fill="#000000",
        flyout_fill_opacity=0.8,
        flyout_stroke_width=0.5,
        label_fill="#E6E6E6",
    ),
)


def get_theme(name: str | None) -> ChartTheme:
    """Return the theme selected by a theme flag.

    "light" selects the light theme; any other value selects the dark theme.
    """

    return LIGHT_THEME if name == "light" else DARK_THEME
