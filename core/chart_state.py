"""Session-backed chart state.

Each browser session owns one visibility set per chart panel. The set lives
only as long as the session and is replaced (never edited in place) after
every legend interaction.
"""

from __future__ import annotations

import logging
from typing import Any, Final

from django.http import HttpRequest

from analysis.dto import DataPoint
from core.charting.schema import AreaChartConfig
from core.charting.visibility import VisibilitySet, visibility_set

IGNORED_SESSION_KEY: Final[str] = "area_chart_ignored"
LAST_CLICK_SESSION_KEY: Final[str] = "area_chart_last_click"

logger = logging.getLogger(__name__)


def ignored_series(request: HttpRequest, *, panel_key: str, config: AreaChartConfig) -> VisibilitySet:
    """Return the session's visibility set for a panel.

    Panels the session has not interacted with start from the config's
    `hidden_series`.
    """

    stored = request.session.get(IGNORED_SESSION_KEY, {})
    if panel_key not in stored:
        return visibility_set(config.hidden_series)
    return visibility_set(stored[panel_key])


def store_ignored_series(request: HttpRequest, *, panel_key: str, visibility: VisibilitySet) -> None:
    """Replace the session's visibility set for a panel.

    Args:
        request: Incoming request whose session will be updated.
        panel_key: Chart panel identifier.
        visibility: New visibility set returned by the interaction router.
    """

    stored = dict(request.session.get(IGNORED_SESSION_KEY, {}))
    stored[panel_key] = sorted(visibility)
    request.session[IGNORED_SESSION_KEY] = stored
    request.session.modified = True
    logger.debug("Stored ignored series for %s: %s", panel_key, stored[panel_key])


def record_click(request: HttpRequest, *, panel_key: str, series_name: str, point: DataPoint) -> dict[str, Any]:
    """Record the last clicked point of a panel in the session.

    Returns:
        The JSON-serializable selection that was stored.
    """

    selection = {"series": series_name, **point.as_json()}
    stored = dict(request.session.get(LAST_CLICK_SESSION_KEY, {}))
    stored[panel_key] = selection
    request.session[LAST_CLICK_SESSION_KEY] = stored
    request.session.modified = True
    logger.info("Chart %s: selected %s", panel_key, selection)
    return selection


def last_click(request: HttpRequest, *, panel_key: str) -> dict[str, Any] | None:
    """Return the last clicked point recorded for a panel, if any."""

    return request.session.get(LAST_CLICK_SESSION_KEY, {}).get(panel_key)
