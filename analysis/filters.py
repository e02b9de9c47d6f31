"""Filter resolution for the metrics dashboard.

Turns the dashboard filter selection into a concrete inclusive domain and a
predicate deciding which data points participate. Modes are resolved by
precedence (single date, then explicit range, then rolling window) rather than
by rejecting combined selections.
"""

from __future__ import annotations

from collections.abc import Callable, Collection
from dataclasses import dataclass
from datetime import date, datetime

from .dto import DataPointInput, FilterMode
from .windows import DEFAULT_ROLLING_WINDOW, DateWindow, as_day, rolling_window


@dataclass(frozen=True, slots=True)
class FilterState:
    """Current dashboard filter selection.

    Attributes:
        selected_date: Optional single day; wins over every other date filter.
        range_start: Optional inclusive explicit range start.
        range_end: Optional inclusive explicit range end.
        rolling_window: Rolling window key used when no explicit filter is set.
        location_ids: Optional location restriction. None disables the
            location filter; an empty collection matches nothing.
    """

    selected_date: date | None = None
    range_start: date | None = None
    range_end: date | None = None
    rolling_window: str = DEFAULT_ROLLING_WINDOW
    location_ids: frozenset[str] | None = None

    @property
    def has_range(self) -> bool:
        """Return True when both explicit range bounds are set."""

        return self.range_start is not None and self.range_end is not None

    @property
    def mode(self) -> FilterMode:
        """Return the filter mode that wins precedence."""

        if self.selected_date is not None:
            return "single_date"
        if self.has_range:
            return "date_range"
        return "rolling_window"

    def with_selected_date(self, selected_date: date | None) -> "FilterState":
        """Return a copy selecting a single day and clearing the range."""

        return FilterState(
            selected_date=selected_date,
            rolling_window=self.rolling_window,
            location_ids=self.location_ids,
        )

    def with_range(self, range_start: date | None, range_end: date | None) -> "FilterState":
        """Return a copy selecting an explicit range and clearing the single day."""

        return FilterState(
            range_start=range_start,
            range_end=range_end,
            rolling_window=self.rolling_window,
            location_ids=self.location_ids,
        )


@dataclass(frozen=True, slots=True)
class ResolvedFilter:
    """A resolved domain plus inclusion predicate.

    Attributes:
        mode: Filter mode that won precedence.
        start: Inclusive domain start date.
        end: Inclusive domain end date.
        includes: Predicate returning True for participating points.
    """

    mode: FilterMode
    start: date
    end: date
    includes: Callable[[DataPointInput], bool]


def resolve_filters(filters: FilterState, *, now: date | datetime) -> ResolvedFilter:
    """Resolve a filter selection into a domain and inclusion predicate.

    Args:
        filters: Current filter selection.
        now: Anchor for rolling windows (datetimes are truncated to a day).

    Returns:
        ResolvedFilter whose predicate combines the winning date rule with the
        optional location restriction.
    """

    mode = filters.mode
    if mode == "single_date":
        assert filters.selected_date is not None
        start = end = filters.selected_date
        date_rule = _single_date_rule(filters.selected_date)
    elif mode == "date_range":
        assert filters.range_start is not None and filters.range_end is not None
        start, end = filters.range_start, filters.range_end
        date_rule = _range_overlap_rule(DateWindow(start=start, end=end))
    else:
        window = rolling_window(now=now, window=filters.rolling_window)
        start, end = window.start, window.end
        date_rule = _at_least_since_rule(start)

    location_rule = _location_rule(filters.location_ids)

    def includes(point: DataPointInput) -> bool:
        if point.effective_date is None:
            return False
        return date_rule(point) and location_rule(point)

    return ResolvedFilter(mode=mode, start=start, end=end, includes=includes)


def _single_date_rule(selected: date) -> Callable[[DataPointInput], bool]:
    """Match points whose effective day equals `selected`."""

    def rule(point: DataPointInput) -> bool:
        effective = point.effective_date
        return effective is not None and as_day(effective) == selected

    return rule


def _range_overlap_rule(window: DateWindow) -> Callable[[DataPointInput], bool]:
    """Match ranged points overlapping `window` and single days inside it."""

    def rule(point: DataPointInput) -> bool:
        if point.is_ranged:
            assert point.range_start is not None and point.range_end is not None
            return as_day(point.range_start) <= window.end and as_day(point.range_end) >= window.start
        effective = point.effective_date
        return effective is not None and window.contains(as_day(effective))

    return rule


def _at_least_since_rule(start: date) -> Callable[[DataPointInput], bool]:
    """Match points whose effective day is on or after `start` (no upper bound)."""

    def rule(point: DataPointInput) -> bool:
        effective = point.effective_date
        return effective is not None and as_day(effective) >= start

    return rule


def _location_rule(location_ids: Collection[str] | None) -> Callable[[DataPointInput], bool]:
    """Match points by location when a location restriction is active."""

    if location_ids is None:
        return lambda point: True
    allowed = frozenset(location_ids)
    return lambda point: point.location_id is not None and point.location_id in allowed
