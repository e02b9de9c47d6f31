"""Pure metrics analysis package for impactStats.

This package contains deterministic, testable computations that operate on
in-memory inputs and return DTOs. It must not import Django or perform any
database I/O.
"""

from .colors import color_for, color_map
from .engine import analyze_metrics_dashboard
from .filters import FilterState, resolve_filters
from .series import build_series

__all__ = [
    "FilterState",
    "analyze_metrics_dashboard",
    "build_series",
    "color_for",
    "color_map",
    "resolve_filters",
]
