"""Unit tests for visible-metric projection."""

from __future__ import annotations

from datetime import date

import pytest

from analysis.dto import ChartPoint
from analysis.visibility import select_visible

pytestmark = pytest.mark.unit

ROWS = (
    ChartPoint(label="Jan 1", day=date(2024, 1, 1), values={"m1": 1, "m2": 0}),
    ChartPoint(label="Jan 2", day=date(2024, 1, 2), values={"m1": 3, "m2": 5}),
)


def test_none_keeps_every_metric() -> None:
    """No visibility restriction returns rows unchanged."""

    assert select_visible(ROWS, None) == ROWS


def test_subset_drops_hidden_fields() -> None:
    """Hidden metrics are removed from every row."""

    projected = select_visible(ROWS, {"m2"})
    assert [row.values for row in projected] == [{"m2": 0}, {"m2": 5}]
    assert [row.label for row in projected] == ["Jan 1", "Jan 2"]


def test_empty_selection_means_nothing_to_chart() -> None:
    """Zero selected metrics yields an empty result."""

    assert select_visible(ROWS, frozenset()) == ()
