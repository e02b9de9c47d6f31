"""Orchestration entry point for the metrics engine.

The engine is a pure, non-Django module that accepts an in-memory snapshot and
returns DTOs. It must not import Django or perform database writes, and it
keeps no state between calls.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable, Sequence
from datetime import date, datetime

from .colors import color_map
from .dto import DataPointInput, MetricInput, MetricsDashboardResult, MetricSummary
from .filters import FilterState, resolve_filters
from .series import build_series
from .visibility import select_visible


def analyze_metrics_dashboard(
    metrics: Sequence[MetricInput],
    data_points: Iterable[DataPointInput],
    *,
    filters: FilterState,
    now: date | datetime,
    visible_ids: Collection[str] | None = None,
) -> MetricsDashboardResult:
    """Compute chart rows, totals, colors and summaries for a snapshot.

    Args:
        metrics: Full, consistently ordered metric list for one initiative.
        data_points: Data points belonging to those metrics.
        filters: Current filter selection.
        now: Anchor for rolling windows.
        visible_ids: Optional subset of metric ids to chart. None charts all.

    Returns:
        MetricsDashboardResult. Colors always come from the full metric list so
        toggling visibility never reshuffles them.
    """

    resolved = resolve_filters(filters, now=now)
    series = build_series(
        metrics,
        data_points,
        start=resolved.start,
        end=resolved.end,
        includes=resolved.includes,
    )
    colors = color_map(metrics)

    summaries = tuple(
        MetricSummary(
            metric_id=metric.id,
            title=metric.title,
            unit=metric.unit,
            category=metric.category,
            total=series.totals.get(metric.id, 0),
            color=colors[metric.id],
            point_count=series.point_counts.get(metric.id, 0),
        )
        for metric in metrics
    )

    return MetricsDashboardResult(
        mode=resolved.mode,
        start=resolved.start,
        end=resolved.end,
        chart_points=select_visible(series.chart_points, visible_ids),
        totals=series.totals,
        colors=colors,
        summaries=summaries,
        included_count=series.included_count,
    )
