"""Deterministic per-metric chart colors.

Colors are chosen by a metric's ordinal position in the full metric list, so
legends stay stable while the visible subset changes. Category is ignored.
"""

from __future__ import annotations

from collections.abc import Sequence

from .dto import MetricInput


PALETTE: tuple[str, ...] = (
    "#3b82f6",
    "#10b981",
    "#8b5cf6",
    "#f59e0b",
    "#ef4444",
    "#06b6d4",
    "#ec4899",
    "#84cc16",
    "#f97316",
    "#6366f1",
    "#14b8a6",
    "#a855f7",
    "#22c55e",
    "#eab308",
    "#64748b",
)
FALLBACK_COLOR = "#9ca3af"


def color_for(metrics: Sequence[MetricInput], metric_id: str) -> str:
    """Return the display color for a metric.

    Args:
        metrics: The full, consistently ordered metric list.
        metric_id: Metric whose color is requested.

    Returns:
        Palette color at the metric's index (wrapping around), or
        FALLBACK_COLOR when the id is not in `metrics`.
    """

    for index, metric in enumerate(metrics):
        if metric.id == metric_id:
            return PALETTE[index % len(PALETTE)]
    return FALLBACK_COLOR


def color_map(metrics: Sequence[MetricInput]) -> dict[str, str]:
    """Return a color for every metric, keyed by metric id."""

    colors: dict[str, str] = {}
    for index, metric in enumerate(metrics):
        colors.setdefault(metric.id, PALETTE[index % len(PALETTE)])
    return colors
