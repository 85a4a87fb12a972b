"""Views for the core app: JSON chart panels and their interactions."""

from __future__ import annotations

import logging
from datetime import UTC, tzinfo
from typing import Any
from zoneinfo import ZoneInfo

from django.conf import settings
from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import ensure_csrf_cookie
from django.views.decorators.http import require_GET, require_POST

from analysis.dto import DataPoint
from core.chart_state import ignored_series, last_click, record_click, store_ignored_series
from core.charting.classify import classify_for_config
from core.charting.configs import CHART_PANELS, ChartPanel, get_chart_panel
from core.charting.interaction import InteractionRouter
from core.charting.primitives import ClickHandler
from core.charting.render import RenderedChart, render_area_chart

logger = logging.getLogger(__name__)


@ensure_csrf_cookie
@require_GET
def chart_index(request: HttpRequest) -> JsonResponse:
    """List the registered chart panels."""

    return JsonResponse({"charts": [{"key": panel.key, "title": panel.title} for panel in CHART_PANELS]})


@ensure_csrf_cookie
@require_GET
def chart_detail(request: HttpRequest, key: str) -> JsonResponse:
    """Return the composed payload for a chart panel.

    Also sets the CSRF cookie the renderer echoes back on legend and marker
    POSTs.
    """

    panel = get_chart_panel(key)
    if panel is None:
        return _not_found(key)
    rendered = _render_panel(request, panel)
    return _panel_response(request, panel, rendered)


@require_POST
def legend_toggle(request: HttpRequest, key: str) -> JsonResponse:
    """Toggle a series from the legend and return the re-composed panel."""

    panel = get_chart_panel(key)
    if panel is None:
        return _not_found(key)
    series_name = (request.POST.get("series") or "").strip()
    if not series_name:
        return JsonResponse({"error": "Missing 'series'."}, status=400)

    resolved, _ = classify_for_config(panel.config, rows=panel.rows, metadata=panel.metadata)
    declared = {name for chart in resolved.charts for name in chart.data_set_names}
    if series_name not in declared:
        return JsonResponse({"error": f"Unknown series {series_name!r} for chart {key!r}."}, status=400)

    current = ignored_series(request, panel_key=key, config=panel.config)
    updated = InteractionRouter().on_legend_click(series_name, current)
    store_ignored_series(request, panel_key=key, visibility=updated)
    logger.info("Chart %s: legend toggled %r (ignored=%s)", key, series_name, sorted(updated))

    rendered = _render_panel(request, panel)
    return _panel_response(request, panel, rendered)


@require_POST
def mark_click(request: HttpRequest, key: str) -> JsonResponse:
    """Forward a marker click to the panel's click handler.

    The handler records the clicked point as the session's selection. Errors
    raised by the handler are not caught here.
    """

    panel = get_chart_panel(key)
    if panel is None:
        return _not_found(key)
    series_name = (request.POST.get("series") or "").strip()
    try:
        index = int(request.POST.get("index") or "")
    except ValueError:
        return JsonResponse({"error": "'index' must be an integer."}, status=400)

    def on_click(point: DataPoint) -> dict[str, Any]:
        return record_click(request, panel_key=key, series_name=series_name, point=point)

    rendered = _render_panel(request, panel, on_click=InteractionRouter(on_click).on_mark_click)
    if rendered.composition is None:
        return JsonResponse({"error": rendered.error}, status=400)
    unit = rendered.composition.find_series(series_name)
    if unit is None:
        return JsonResponse({"error": f"Series {series_name!r} is not rendered in chart {key!r}."}, status=400)
    if not 0 <= index < len(unit.data):
        return JsonResponse({"error": f"Point index {index} is out of range for series {series_name!r}."}, status=400)

    selection = unit.click(index)
    return JsonResponse({"key": key, "selection": selection})


def _render_panel(request: HttpRequest, panel: ChartPanel, *, on_click: ClickHandler | None = None) -> RenderedChart:
    """Classify, compose and serialize a panel for the current session."""

    resolved, classified = classify_for_config(panel.config, rows=panel.rows, metadata=panel.metadata)
    theme = request.GET.get("theme") or request.POST.get("theme") or settings.AREA_CHART_DEFAULT_THEME
    rendered = render_area_chart(
        config=resolved,
        datasets=classified.datasets,
        x_scale=classified.x_scale,
        visibility=ignored_series(request, panel_key=panel.key, config=panel.config),
        theme=theme,
        on_click=on_click,
        tz=_chart_time_zone(),
    )
    if rendered.error:
        logger.warning("Chart %s failed validation: %s", panel.key, rendered.error)
    return rendered


def _panel_response(request: HttpRequest, panel: ChartPanel, rendered: RenderedChart) -> JsonResponse:
    """Build the JSON response for a rendered panel."""

    return JsonResponse(
        {
            "key": panel.key,
            "title": panel.title,
            "chart": rendered.data,
            "error": rendered.error,
            "warnings": list(rendered.warnings),
            "selection": last_click(request, panel_key=panel.key),
        },
        status=400 if rendered.error else 200,
    )


def _chart_time_zone() -> tzinfo:
    """Return the configured tooltip time zone."""

    name = settings.AREA_CHART_TIME_ZONE
    return UTC if name.upper() == "UTC" else ZoneInfo(name)


def _not_found(key: str) -> JsonResponse:
    """Return the JSON 404 response for an unknown panel key."""

    return JsonResponse({"error": f"Unknown chart {key!r}."}, status=404)
