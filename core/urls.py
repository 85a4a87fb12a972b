"""URL configuration for core views."""

from __future__ import annotations

from django.urls import path

from core import views

app_name = "core"

urlpatterns = [
    path("charts/", views.chart_index, name="chart_index"),
    path("charts/<slug:key>/", views.chart_detail, name="chart_detail"),
    path("charts/<slug:key>/legend/", views.legend_toggle, name="legend_toggle"),
    path("charts/<slug:key>/click/", views.mark_click, name="mark_click"),
]
