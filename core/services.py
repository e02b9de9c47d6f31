"""Service helpers bridging persisted impact data and the metrics engine.

Views call into this module to read an initiative's snapshot, convert ORM rows
into analysis DTOs, and shape engine results into JSON payloads. Nothing here
writes to the database.
"""

from __future__ import annotations

import logging
from collections.abc import Collection
from dataclasses import dataclass
from datetime import date

from analysis.dto import DataPointInput, MetricInput, MetricsDashboardResult
from analysis.engine import analyze_metrics_dashboard
from analysis.filters import FilterState
from impactdata.models import DataPoint, Initiative, Location, Metric

logger = logging.getLogger(__name__)

NO_DATA_MESSAGE = "No data points match the current filters."
NO_METRICS_SELECTED_MESSAGE = "No metrics selected."


@dataclass(frozen=True, slots=True)
class InitiativeSnapshot:
    """Immutable read of one initiative's metrics and data points.

    Attributes:
        initiative: The owning initiative row.
        metric_rows: Metric rows in display order.
        location_rows: Location rows for filter choices.
        metrics: Metric DTOs aligned with `metric_rows`.
        data_points: Data point DTOs for every metric in the initiative.
    """

    initiative: Initiative
    metric_rows: tuple[Metric, ...]
    location_rows: tuple[Location, ...]
    metrics: tuple[MetricInput, ...]
    data_points: tuple[DataPointInput, ...]


def load_initiative_snapshot(initiative: Initiative) -> InitiativeSnapshot:
    """Read an initiative's metrics, locations and data points.

    Args:
        initiative: Initiative whose data should be charted.

    Returns:
        InitiativeSnapshot with ORM rows and their analysis DTOs.
    """

    metric_rows = tuple(Metric.objects.filter(initiative=initiative).order_by("display_order", "created_at", "id"))
    location_rows = tuple(Location.objects.filter(initiative=initiative).order_by("name", "id"))
    point_rows = DataPoint.objects.filter(metric__initiative=initiative).order_by("created_at", "id")

    metrics = tuple(metric_input_from_row(row) for row in metric_rows)
    data_points = tuple(data_point_input_from_row(row) for row in point_rows)
    logger.debug(
        "Loaded snapshot for initiative %s: %d metrics, %d data points",
        initiative.pk,
        len(metrics),
        len(data_points),
    )
    return InitiativeSnapshot(
        initiative=initiative,
        metric_rows=metric_rows,
        location_rows=location_rows,
        metrics=metrics,
        data_points=data_points,
    )


def metric_input_from_row(row: Metric) -> MetricInput:
    """Convert a Metric row into a MetricInput DTO."""

    return MetricInput(
        id=str(row.pk),
        title=row.title,
        unit=row.unit_of_measurement,
        category=row.category,
    )


def data_point_input_from_row(row: DataPoint) -> DataPointInput:
    """Convert a DataPoint row into a DataPointInput DTO."""

    return DataPointInput(
        id=str(row.pk),
        metric_id=str(row.metric_id),
        value=float(row.value),
        represented_date=row.date_represented,
        range_start=row.date_range_start,
        range_end=row.date_range_end,
        location_id=None if row.location_id is None else str(row.location_id),
    )


def build_metrics_dashboard(
    snapshot: InitiativeSnapshot,
    *,
    filters: FilterState,
    today: date,
    visible_ids: Collection[str] | None = None,
) -> MetricsDashboardResult:
    """Run the metrics engine over a snapshot.

    Args:
        snapshot: Snapshot returned by `load_initiative_snapshot`.
        filters: Validated filter selection.
        today: Anchor date for rolling windows.
        visible_ids: Optional subset of metric ids to chart.

    Returns:
        MetricsDashboardResult for the snapshot.
    """

    result = analyze_metrics_dashboard(
        snapshot.metrics,
        snapshot.data_points,
        filters=filters,
        now=today,
        visible_ids=visible_ids,
    )
    logger.info(
        "Metrics dashboard for initiative %s: mode=%s domain=%s..%s included=%d rows=%d",
        snapshot.initiative.pk,
        result.mode,
        result.start,
        result.end,
        result.included_count,
        len(result.chart_points),
    )
    return result


def empty_state_message(result: MetricsDashboardResult, *, visible_ids: Collection[str] | None) -> str | None:
    """Return a neutral empty-state message, or None when there is data to chart."""

    if visible_ids is not None and not visible_ids:
        return NO_METRICS_SELECTED_MESSAGE
    if result.is_empty:
        return NO_DATA_MESSAGE
    return None


def dashboard_payload(
    snapshot: InitiativeSnapshot,
    result: MetricsDashboardResult,
    *,
    filters: FilterState,
    visible_ids: Collection[str] | None,
) -> dict[str, object]:
    """Shape a dashboard result into the JSON payload served to the chart view."""

    initiative = snapshot.initiative
    return {
        "initiative": {"id": initiative.pk, "title": initiative.title},
        "filters": {
            "mode": result.mode,
            "start": result.start.isoformat() if result.start else None,
            "end": result.end.isoformat() if result.end else None,
            "selected_date": filters.selected_date.isoformat() if filters.selected_date else None,
            "range_start": filters.range_start.isoformat() if filters.range_start else None,
            "range_end": filters.range_end.isoformat() if filters.range_end else None,
            "time_frame": filters.rolling_window,
            "locations": None if filters.location_ids is None else sorted(filters.location_ids),
            "metrics": None if visible_ids is None else sorted(visible_ids),
        },
        "chart": [point.as_json() for point in result.chart_points],
        "metrics": [summary.as_json() for summary in result.summaries],
        "totals": dict(result.totals),
        "colors": dict(result.colors),
        "included_count": result.included_count,
        "empty_state": empty_state_message(result, visible_ids=visible_ids),
        "locations": [{"id": row.pk, "name": row.name} for row in snapshot.location_rows],
    }
