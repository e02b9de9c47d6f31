"""Shared metric category definitions.

MetricCategory tags a metric for display grouping only. The aggregation engine
never reads it, and color assignment deliberately ignores it.
"""

from __future__ import annotations

from enum import StrEnum


class MetricCategory(StrEnum):
    """Display category for a tracked metric.

    Values are stable identifiers shared by the ORM choices and JSON payloads.
    """

    input = "input"
    output = "output"
    impact = "impact"
