"""Cumulative daily series construction.

Given a resolved domain and inclusion predicate, this module groups data points
by metric and produces one row per calendar day carrying each metric's running
total up to and including that day.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable, Iterable, Iterator, Sequence
from datetime import date, timedelta

from .dto import ChartPoint, DataPointInput, MetricInput, SeriesResult
from .windows import as_day


def build_series(
    metrics: Sequence[MetricInput],
    data_points: Iterable[DataPointInput],
    *,
    start: date | None,
    end: date | None,
    includes: Callable[[DataPointInput], bool],
) -> SeriesResult:
    """Build cumulative per-metric daily rows and totals.

    Args:
        metrics: Metric definitions; every id gets a field on every row.
        data_points: Unordered data points for those metrics.
        start: Inclusive domain start, or None when undefined.
        end: Inclusive domain end, or None when undefined.
        includes: Predicate deciding which points participate.

    Returns:
        SeriesResult with daily rows and included totals.

    Notes:
        Excluded points contribute to neither totals nor rows, and neither do
        points whose metric id is not in `metrics`. Rows are empty when the
        domain is undefined or no point survives; totals still map every
        metric id (0 when nothing survived). Points without a usable date are
        skipped.
    """

    metric_ids = frozenset(metric.id for metric in metrics)
    grouped = group_included_points(
        (point for point in data_points if point.metric_id in metric_ids),
        includes=includes,
    )
    point_counts = {metric.id: len(grouped.get(metric.id, ())) for metric in metrics}
    included_count = sum(point_counts.values())
    totals: dict[str, float] = {
        metric.id: sum(point.value for point in grouped.get(metric.id, ())) for metric in metrics
    }

    if start is None or end is None or included_count == 0:
        return SeriesResult(
            chart_points=(), totals=totals, included_count=included_count, point_counts=point_counts
        )

    cursors = {metric.id: _RunningTotal(grouped.get(metric.id, ())) for metric in metrics}
    rows: list[ChartPoint] = []
    for day in iter_days(start, end):
        values = {metric_id: cursor.advance_to(day) for metric_id, cursor in cursors.items()}
        rows.append(ChartPoint(label=day_label(day), day=day, values=values))

    return SeriesResult(
        chart_points=tuple(rows), totals=totals, included_count=included_count, point_counts=point_counts
    )


def group_included_points(
    data_points: Iterable[DataPointInput],
    *,
    includes: Callable[[DataPointInput], bool],
) -> dict[str, list[DataPointInput]]:
    """Group included points by metric id, each group sorted by effective date.

    Sorting is stable so points sharing an effective date keep their input order.
    """

    grouped: dict[str, list[DataPointInput]] = defaultdict(list)
    for point in data_points:
        if point.effective_date is None or not includes(point):
            continue
        grouped[point.metric_id].append(point)
    for points in grouped.values():
        points.sort(key=_effective_day)
    return dict(grouped)


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every calendar day from `start` to `end` inclusive."""

    day = start
    step = timedelta(days=1)
    while day <= end:
        yield day
        day += step


def day_label(day: date) -> str:
    """Return a short display label such as "Jan 1"."""

    return f"{day:%b} {day.day}"


def _effective_day(point: DataPointInput) -> date:
    effective = point.effective_date
    assert effective is not None
    return as_day(effective)


class _RunningTotal:
    """Cursor over one metric's sorted points accumulating values up to a day."""

    __slots__ = ("_points", "_index", "_total")

    def __init__(self, points: Sequence[DataPointInput]) -> None:
        self._points = points
        self._index = 0
        self._total: float = 0

    def advance_to(self, day: date) -> float:
        """Consume every point with effective day <= `day` and return the total.

        Calls must use non-decreasing days.
        """

        while self._index < len(self._points) and _effective_day(self._points[self._index]) <= day:
            self._total += self._points[self._index].value
            self._index += 1
        return self._total
