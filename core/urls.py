"""URL configuration for core views."""

from __future__ import annotations

from django.urls import path

from core import views

app_name = "core"

urlpatterns = [
    path("", views.dashboard, name="dashboard"),
    path("analytics/", views.analytics, name="analytics"),
    path("search/", views.search, name="search"),
    path("search/<path:fir_number>/", views.case_detail_view, name="case_detail"),
]
