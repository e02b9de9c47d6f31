"""Golden tests for the composed metrics dashboard engine."""

from __future__ import annotations

from datetime import date

import pytest

from analysis import analyze_metrics_dashboard
from analysis.colors import PALETTE
from analysis.dto import DataPointInput, MetricInput
from analysis.filters import FilterState

pytestmark = pytest.mark.unit

MEALS = MetricInput(id="m1", title="Meals", unit="meals", category="output")
VOLUNTEERS = MetricInput(id="m2", title="Volunteers", unit="people", category="output")


def test_range_overlap_includes_and_excludes_ranged_point() -> None:
    """A ranged point counts only when its range overlaps the filter range."""

    points = [
        DataPointInput(metric_id="m1", value=20, range_start=date(2024, 1, 1), range_end=date(2024, 1, 10))
    ]

    overlapping = analyze_metrics_dashboard(
        [MEALS],
        points,
        filters=FilterState(range_start=date(2024, 1, 5), range_end=date(2024, 1, 20)),
        now=date(2024, 2, 1),
    )
    disjoint = analyze_metrics_dashboard(
        [MEALS],
        points,
        filters=FilterState(range_start=date(2024, 1, 11), range_end=date(2024, 1, 20)),
        now=date(2024, 2, 1),
    )

    assert overlapping.totals == {"m1": 20}
    assert len(overlapping.chart_points) == 16
    assert overlapping.chart_points[0].values["m1"] == 0
    assert overlapping.chart_points[5].day == date(2024, 1, 10)
    assert overlapping.chart_points[5].values["m1"] == 20
    assert disjoint.totals == {"m1": 0}
    assert disjoint.chart_points == ()
    assert disjoint.is_empty


def test_selected_date_yields_single_row() -> None:
    """Only the selected day's points count, in exactly one row."""

    points = [
        DataPointInput(metric_id="m1", value=4, represented_date=date(2024, 2, 29)),
        DataPointInput(metric_id="m1", value=9, represented_date=date(2024, 3, 1)),
        DataPointInput(metric_id="m1", value=6, represented_date=date(2024, 3, 2)),
    ]

    result = analyze_metrics_dashboard(
        [MEALS], points, filters=FilterState(selected_date=date(2024, 3, 1)), now=date(2024, 3, 10)
    )

    assert result.mode == "single_date"
    assert len(result.chart_points) == 1
    assert result.chart_points[0].day == date(2024, 3, 1)
    assert result.chart_points[0].values == {"m1": 9}
    assert result.totals == {"m1": 9}


def test_filter_precedence_changes_results() -> None:
    """The same snapshot resolves differently under each precedence level."""

    points = [
        DataPointInput(metric_id="m1", value=1, represented_date=date(2024, 3, 1)),
        DataPointInput(metric_id="m1", value=10, represented_date=date(2024, 1, 15)),
        DataPointInput(metric_id="m1", value=100, represented_date=date(2023, 6, 1)),
    ]
    everything = FilterState(
        selected_date=date(2024, 3, 1),
        range_start=date(2024, 1, 1),
        range_end=date(2024, 1, 31),
        rolling_window="1year",
    )
    now = date(2024, 3, 15)

    single = analyze_metrics_dashboard([MEALS], points, filters=everything, now=now)
    ranged = analyze_metrics_dashboard(
        [MEALS], points, filters=everything.with_range(date(2024, 1, 1), date(2024, 1, 31)), now=now
    )
    rolling = analyze_metrics_dashboard([MEALS], points, filters=FilterState(rolling_window="1year"), now=now)

    assert single.totals == {"m1": 1}
    assert ranged.totals == {"m1": 10}
    assert rolling.totals == {"m1": 111}


def test_visibility_does_not_change_totals_or_colors() -> None:
    """Hiding a metric only removes its chart field."""

    points = [
        DataPointInput(metric_id="m1", value=2, represented_date=date(2024, 1, 10)),
        DataPointInput(metric_id="m2", value=3, represented_date=date(2024, 1, 12)),
    ]
    filters = FilterState(range_start=date(2024, 1, 1), range_end=date(2024, 1, 31))

    full = analyze_metrics_dashboard([MEALS, VOLUNTEERS], points, filters=filters, now=date(2024, 2, 1))
    partial = analyze_metrics_dashboard(
        [MEALS, VOLUNTEERS], points, filters=filters, now=date(2024, 2, 1), visible_ids={"m2"}
    )

    assert partial.totals == full.totals == {"m1": 2, "m2": 3}
    assert partial.colors == full.colors == {"m1": PALETTE[0], "m2": PALETTE[1]}
    assert set(partial.chart_points[-1].values) == {"m2"}
    assert set(full.chart_points[-1].values) == {"m1", "m2"}


def test_no_visible_metrics_is_empty() -> None:
    """An empty visible selection charts nothing but keeps totals."""

    points = [DataPointInput(metric_id="m1", value=2, represented_date=date(2024, 1, 10))]

    result = analyze_metrics_dashboard(
        [MEALS], points, filters=FilterState(), now=date(2024, 2, 1), visible_ids=frozenset()
    )

    assert result.is_empty
    assert result.totals == {"m1": 2}


def test_summaries_follow_metric_order() -> None:
    """Summary rows carry totals, colors and included point counts."""

    points = [
        DataPointInput(metric_id="m2", value=3, represented_date=date(2024, 1, 12)),
        DataPointInput(metric_id="m2", value=4, represented_date=date(2024, 1, 13)),
    ]

    result = analyze_metrics_dashboard([MEALS, VOLUNTEERS], points, filters=FilterState(), now=date(2024, 2, 1))

    assert [summary.metric_id for summary in result.summaries] == ["m1", "m2"]
    assert result.summaries[0].total == 0
    assert result.summaries[0].point_count == 0
    assert result.summaries[1].total == 7
    assert result.summaries[1].point_count == 2
    assert result.summaries[1].as_json()["color"] == PALETTE[1]
    assert result.included_count == 2


def test_empty_snapshot_maps_every_metric_to_zero() -> None:
    """No data points yields no rows and zero totals."""

    result = analyze_metrics_dashboard([MEALS, VOLUNTEERS], [], filters=FilterState(), now=date(2024, 2, 1))

    assert result.chart_points == ()
    assert result.totals == {"m1": 0, "m2": 0}
    assert (result.start, result.end) == (date(2024, 1, 1), date(2024, 2, 1))
