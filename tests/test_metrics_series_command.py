"""Integration tests for the metrics_series management command."""

from __future__ import annotations

import json
from datetime import date
from decimal import Decimal
from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from impactdata.models import DataPoint, Metric

pytestmark = pytest.mark.integration


@pytest.mark.django_db
def test_command_prints_range_series(initiative) -> None:
    """The command emits the same payload shape as the JSON endpoint."""

    metric = Metric.objects.create(initiative=initiative, title="Meals")
    DataPoint.objects.create(metric=metric, value=Decimal("4"), date_represented=date(2024, 1, 2))

    out = StringIO()
    call_command(
        "metrics_series",
        str(initiative.pk),
        "--range-start",
        "2024-01-01",
        "--range-end",
        "2024-01-03",
        stdout=out,
    )
    payload = json.loads(out.getvalue())

    assert payload["filters"]["mode"] == "date_range"
    assert [row[str(metric.pk)] for row in payload["chart"]] == [0, 4.0, 4.0]


@pytest.mark.django_db
def test_command_summary_only(initiative) -> None:
    """--summary prints per-metric totals without daily rows."""

    metric = Metric.objects.create(initiative=initiative, title="Meals")
    DataPoint.objects.create(metric=metric, value=Decimal("4"), date_represented=date(2024, 1, 2))

    out = StringIO()
    call_command("metrics_series", str(initiative.pk), "--date", "2024-01-02", "--summary", stdout=out)
    payload = json.loads(out.getvalue())

    assert set(payload) == {"filters", "metrics"}
    assert payload["metrics"][0]["total"] == 4.0


@pytest.mark.django_db
def test_command_rejects_unknown_initiative() -> None:
    """Unknown initiative ids fail loudly."""

    with pytest.raises(CommandError, match="Unknown initiative"):
        call_command("metrics_series", "424242")


@pytest.mark.django_db
def test_command_rejects_half_range(initiative) -> None:
    """Filter validation errors surface as CommandError."""

    with pytest.raises(CommandError, match="Invalid filters"):
        call_command("metrics_series", str(initiative.pk), "--range-start", "2024-01-01")
