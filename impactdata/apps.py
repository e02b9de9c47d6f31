"""Django app configuration for impact data."""

from __future__ import annotations

from django.apps import AppConfig


class ImpactDataConfig(AppConfig):
    """AppConfig for initiatives, metrics and recorded data points."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "impactdata"
