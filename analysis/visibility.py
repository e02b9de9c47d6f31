"""Visible-metric projection applied after series construction.

Visibility is a display concern only: it never changes totals or colors.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable

from .dto import ChartPoint


def select_visible(
    chart_points: Iterable[ChartPoint],
    visible_ids: Collection[str] | None,
) -> tuple[ChartPoint, ...]:
    """Restrict chart rows to the visible metric fields.

    Args:
        chart_points: Rows produced by the series builder.
        visible_ids: Metric ids to keep. None keeps every metric.

    Returns:
        Projected rows, or an empty tuple when no metric is visible.
    """

    if visible_ids is None:
        return tuple(chart_points)
    if not visible_ids:
        return ()
    keep = frozenset(visible_ids)
    return tuple(
        ChartPoint(
            label=point.label,
            day=point.day,
            values={key: value for key, value in point.values.items() if key in keep},
        )
        for point in chart_points
    )
