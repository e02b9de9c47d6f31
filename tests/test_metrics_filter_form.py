"""Integration tests for the metrics dashboard filter form."""

from __future__ import annotations

from datetime import date

import pytest
from django.test import override_settings

from core.forms import MetricsFilterForm, default_time_frame
from impactdata.models import Location, Metric

pytestmark = pytest.mark.integration


@pytest.fixture
def choices(initiative):
    """Return (metrics, locations) rows for the default initiative."""

    metrics = [
        Metric.objects.create(initiative=initiative, title="Meals"),
        Metric.objects.create(initiative=initiative, title="Volunteers"),
    ]
    locations = [Location.objects.create(initiative=initiative, name="North")]
    return metrics, locations


@pytest.mark.django_db
def test_empty_form_uses_rolling_default(choices) -> None:
    """No filters means the configured rolling window and no restrictions."""

    metrics, locations = choices
    form = MetricsFilterForm({}, metrics=metrics, locations=locations)
    assert form.is_valid(), form.errors

    filters = form.to_filter_state()
    assert filters.mode == "rolling_window"
    assert filters.rolling_window == "1month"
    assert filters.location_ids is None
    assert form.visible_metric_ids() is None


@pytest.mark.django_db
def test_all_filters_are_accepted_and_resolved_by_precedence(choices) -> None:
    """Combined selections are not rejected; the single date wins."""

    metrics, locations = choices
    form = MetricsFilterForm(
        {
            "selected_date": "2024-03-01",
            "range_start": "2024-01-01",
            "range_end": "2024-01-31",
            "time_frame": "1year",
        },
        metrics=metrics,
        locations=locations,
    )
    assert form.is_valid(), form.errors
    filters = form.to_filter_state()
    assert filters.mode == "single_date"
    assert filters.selected_date == date(2024, 3, 1)
    assert filters.rolling_window == "1year"


@pytest.mark.django_db
def test_half_range_is_rejected(choices) -> None:
    """An explicit range needs both bounds."""

    metrics, locations = choices
    form = MetricsFilterForm({"range_start": "2024-01-01"}, metrics=metrics, locations=locations)
    assert not form.is_valid()
    assert "both range_start and range_end" in str(form.non_field_errors())


@pytest.mark.django_db
def test_inverted_range_is_rejected(choices) -> None:
    """Range end must not precede range start."""

    metrics, locations = choices
    form = MetricsFilterForm(
        {"range_start": "2024-02-01", "range_end": "2024-01-01"}, metrics=metrics, locations=locations
    )
    assert not form.is_valid()
    assert "range_end" in form.errors


@pytest.mark.django_db
def test_unknown_time_frame_is_rejected(choices) -> None:
    """Only known rolling windows are accepted."""

    metrics, locations = choices
    form = MetricsFilterForm({"time_frame": "3weeks"}, metrics=metrics, locations=locations)
    assert not form.is_valid()
    assert "time_frame" in form.errors


@pytest.mark.django_db
def test_metric_and_location_selections_become_id_sets(choices) -> None:
    """Multi-selects convert to frozensets of string ids."""

    metrics, locations = choices
    form = MetricsFilterForm(
        {"metrics": [str(metrics[1].pk)], "locations": [str(locations[0].pk)]},
        metrics=metrics,
        locations=locations,
    )
    assert form.is_valid(), form.errors
    assert form.visible_metric_ids() == frozenset({str(metrics[1].pk)})
    assert form.to_filter_state().location_ids == frozenset({str(locations[0].pk)})


@pytest.mark.django_db
def test_foreign_metric_id_is_rejected(choices) -> None:
    """Metric ids outside the initiative are invalid choices."""

    metrics, locations = choices
    form = MetricsFilterForm({"metrics": ["999999"]}, metrics=metrics, locations=locations)
    assert not form.is_valid()
    assert "metrics" in form.errors


def test_default_time_frame_reads_settings() -> None:
    """The configured default is used when valid and ignored otherwise."""

    with override_settings(IMPACT_DEFAULT_TIME_FRAME="6months"):
        assert default_time_frame() == "6months"
    with override_settings(IMPACT_DEFAULT_TIME_FRAME="fortnight"):
        assert default_time_frame() == "1month"
