"""Rolling time-frame helpers for the metrics dashboard.

Rolling windows are expressed in calendar units (months/years), not fixed day
counts. This module provides pure helpers (no Django imports) to compute those
windows deterministically from a caller-supplied "now".
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Literal

from dateutil.relativedelta import relativedelta


RollingWindow = Literal["1month", "6months", "1year", "5years", "10years", "max"]

ROLLING_WINDOW_OFFSETS: dict[str, relativedelta] = {
    "1month": relativedelta(months=1),
    "6months": relativedelta(months=6),
    "1year": relativedelta(years=1),
    "5years": relativedelta(years=5),
    "10years": relativedelta(years=10),
}
MAX_WINDOW_START = date(2020, 1, 1)
DEFAULT_ROLLING_WINDOW: RollingWindow = "1month"


@dataclass(frozen=True, slots=True)
class DateWindow:
    """An inclusive calendar-day window.

    Attributes:
        start: Inclusive window start date.
        end: Inclusive window end date.
    """

    start: date
    end: date

    def contains(self, day: date) -> bool:
        """Return True when `day` falls inside the window."""

        return self.start <= day <= self.end


def as_day(value: date | datetime) -> date:
    """Truncate a datetime to its calendar day; dates pass through."""

    if isinstance(value, datetime):
        return value.date()
    return value


def rolling_window_start(*, now: date | datetime, window: str) -> date:
    """Return the inclusive start date of a rolling window ending at `now`.

    Args:
        now: Anchor date (datetimes are truncated to their calendar day).
        window: Rolling window key, e.g. "1month" or "5years".

    Returns:
        The calendar date `window` before `now`. Month-end anchors clamp to
        the last day of the target month (Mar 31 minus one month is Feb 28/29).

    Raises:
        ValueError: When `window` is not a known rolling window key.
    """

    today = as_day(now)
    if window == "max":
        return min(MAX_WINDOW_START, today)
    offset = ROLLING_WINDOW_OFFSETS.get(window)
    if offset is None:
        raise ValueError(f"Unknown rolling window: {window!r}.")
    return today - offset


def rolling_window(*, now: date | datetime, window: str = DEFAULT_ROLLING_WINDOW) -> DateWindow:
    """Return the inclusive rolling window ending at `now`.

    Args:
        now: Anchor date (datetimes are truncated to their calendar day).
        window: Rolling window key (defaults to one month).

    Returns:
        DateWindow spanning `[now - window, now]`.
    """

    today = as_day(now)
    return DateWindow(start=rolling_window_start(now=today, window=window), end=today)
