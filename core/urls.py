"""URL configuration for core views."""

from __future__ import annotations

from django.urls import path

from core import views

app_name = "core"

urlpatterns = [
    path("initiatives/", views.initiative_list, name="initiative_list"),
    path("initiatives/<int:initiative_id>/metrics/", views.metrics_dashboard, name="metrics_dashboard"),
]
