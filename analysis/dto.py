"""DTO types consumed and returned by the metrics engine.

DTOs are plain data containers used to transport snapshot rows into the engine
and chart-ready results back out. They intentionally avoid any Django/ORM
dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from datetime import date
from typing import Literal


FilterMode = Literal["single_date", "date_range", "rolling_window"]


@dataclass(frozen=True, slots=True)
class MetricInput:
    """A tracked metric definition.

    Attributes:
        id: Opaque metric identifier (stringified primary key in the host app).
        title: Human-friendly label.
        unit: Display unit string (e.g. "meals", "%").
        category: Free-form display tag; not used by aggregation or colors.
    """

    id: str
    title: str
    unit: str = ""
    category: str = ""


@dataclass(frozen=True, slots=True)
class DataPointInput:
    """One recorded observation of a metric.

    A point carries either `represented_date` or a `range_start`/`range_end`
    pair. When a range end is present it wins as the effective date.

    Attributes:
        metric_id: Identifier of the owning metric.
        value: Observed value; sign is not enforced.
        represented_date: Single date the observation represents.
        range_start: Inclusive start of a ranged observation.
        range_end: Inclusive end of a ranged observation.
        location_id: Optional location identifier.
        id: Optional identifier for the underlying persisted record.
    """

    metric_id: str
    value: float
    represented_date: date | None = None
    range_start: date | None = None
    range_end: date | None = None
    location_id: str | None = None
    id: str | None = None

    @property
    def effective_date(self) -> date | None:
        """Return the date used for filtering, ordering and placement."""

        if self.range_end is not None:
            return self.range_end
        return self.represented_date

    @property
    def is_ranged(self) -> bool:
        """Return True when both range bounds are present."""

        return self.range_start is not None and self.range_end is not None


@dataclass(frozen=True, slots=True)
class ChartPoint:
    """A single daily row of cumulative metric values.

    Attributes:
        label: Display label such as "Jan 1".
        day: Calendar day the row represents.
        values: Cumulative value per metric id, with explicit zeros.
    """

    label: str
    day: date
    values: dict[str, float] = field(default_factory=dict)

    def as_json(self) -> dict[str, object]:
        """Return a flat JSON-friendly mapping for chart libraries."""

        payload: dict[str, object] = {"date": self.label, "fullDate": self.day.isoformat()}
        payload.update(self.values)
        return payload


@dataclass(frozen=True, slots=True)
class SeriesResult:
    """Output of the series builder.

    Attributes:
        chart_points: One row per day in the domain, or empty when there is
            nothing to chart.
        totals: Sum of included values per metric id.
        included_count: Number of points that passed the filter predicate.
        point_counts: Included point count per metric id.
    """

    chart_points: tuple[ChartPoint, ...] = ()
    totals: dict[str, float] = field(default_factory=dict)
    included_count: int = 0
    point_counts: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class MetricSummary:
    """Per-metric row for the metrics list beside the chart."""

    metric_id: str
    title: str
    unit: str
    category: str
    total: float
    color: str
    point_count: int

    def as_json(self) -> dict[str, object]:
        """Return a JSON-friendly mapping."""

        return {
            "id": self.metric_id,
            "title": self.title,
            "unit": self.unit,
            "category": self.category,
            "total": self.total,
            "color": self.color,
            "point_count": self.point_count,
        }


@dataclass(frozen=True)
class MetricsDashboardResult:
    """Composed dashboard output for one snapshot and filter state.

    Attributes:
        mode: Filter mode that won precedence.
        start: Inclusive domain start.
        end: Inclusive domain end.
        chart_points: Daily rows restricted to visible metrics.
        totals: Included totals per metric id.
        colors: Stable color per metric id, computed from the full metric list.
        summaries: Per-metric rows in metric order.
        included_count: Number of data points that passed the filter.
    """

    mode: FilterMode
    start: date | None
    end: date | None
    chart_points: tuple[ChartPoint, ...] = ()
    totals: dict[str, float] = field(default_factory=dict)
    colors: dict[str, str] = field(default_factory=dict)
    summaries: tuple[MetricSummary, ...] = ()
    included_count: int = 0

    @property
    def is_empty(self) -> bool:
        """Return True when there is nothing to chart."""

        return not self.chart_points
