"""Forms for core dashboard workflows.

The metrics dashboard accepts its filter selection as query parameters; this
form validates them and converts the result into an analysis FilterState.
"""

from __future__ import annotations

from collections.abc import Sequence

from django import forms
from django.conf import settings

from analysis.filters import FilterState
from analysis.windows import ROLLING_WINDOW_OFFSETS
from impactdata.models import Location, Metric

TIME_FRAME_CHOICES = (
    ("1month", "Last month"),
    ("6months", "Last 6 months"),
    ("1year", "Last year"),
    ("5years", "Last 5 years"),
    ("10years", "Last 10 years"),
    ("max", "All time"),
)


class MetricsFilterForm(forms.Form):
    """Validate metrics dashboard filters.

    A single date, an explicit range and a rolling time frame may all be sent
    together; precedence is applied by FilterState, not by rejecting input.
    """

    selected_date = forms.DateField(
        required=False,
        widget=forms.DateInput(attrs={"type": "date"}),
        label="Date",
    )
    range_start = forms.DateField(
        required=False,
        widget=forms.DateInput(attrs={"type": "date"}),
        label="Range start",
    )
    range_end = forms.DateField(
        required=False,
        widget=forms.DateInput(attrs={"type": "date"}),
        label="Range end",
    )
    time_frame = forms.ChoiceField(
        required=False,
        choices=TIME_FRAME_CHOICES,
        label="Time frame",
        help_text="Used when neither a date nor a date range is selected.",
    )
    locations = forms.MultipleChoiceField(
        required=False,
        choices=(),
        label="Locations",
        help_text="Only data points recorded at these locations are counted.",
    )
    metrics = forms.MultipleChoiceField(
        required=False,
        choices=(),
        label="Metrics",
        help_text="Metrics drawn on the chart. Totals and colors are unaffected.",
    )

    def __init__(self, *args, **kwargs) -> None:
        """Initialize the form with the initiative's metric and location choices."""

        metrics: Sequence[Metric] = kwargs.pop("metrics", ())
        locations: Sequence[Location] = kwargs.pop("locations", ())
        super().__init__(*args, **kwargs)
        self.fields["metrics"].choices = [(str(metric.pk), metric.title) for metric in metrics]
        self.fields["locations"].choices = [(str(location.pk), location.name) for location in locations]

    def clean(self) -> dict[str, object]:
        """Validate range bounds and apply the default time frame."""

        cleaned = super().clean()
        range_start = cleaned.get("range_start")
        range_end = cleaned.get("range_end")
        if (range_start is None) != (range_end is None) and not self.errors:
            raise forms.ValidationError("Provide both range_start and range_end, or neither.")
        if range_start and range_end and range_start > range_end:
            self.add_error("range_end", "Range end must be on or after range start.")
        if not cleaned.get("time_frame"):
            cleaned["time_frame"] = default_time_frame()
        return cleaned

    def to_filter_state(self) -> FilterState:
        """Return the FilterState described by the cleaned data."""

        return FilterState(
            selected_date=self.cleaned_data.get("selected_date"),
            range_start=self.cleaned_data.get("range_start"),
            range_end=self.cleaned_data.get("range_end"),
            rolling_window=self.cleaned_data["time_frame"],
            location_ids=self._selection("locations"),
        )

    def visible_metric_ids(self) -> frozenset[str] | None:
        """Return the requested visible metric ids, or None when unrestricted."""

        return self._selection("metrics")

    def _selection(self, name: str) -> frozenset[str] | None:
        """Return a multi-select value, or None when the parameter was omitted."""

        if name not in self.data:
            return None
        return frozenset(str(value) for value in self.cleaned_data.get(name) or ())


def default_time_frame() -> str:
    """Return the configured default rolling window, falling back to one month."""

    configured = getattr(settings, "IMPACT_DEFAULT_TIME_FRAME", "1month")
    if configured == "max" or configured in ROLLING_WINDOW_OFFSETS:
        return configured
    return "1month"
