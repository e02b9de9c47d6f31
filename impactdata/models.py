"""Database models for initiatives, metrics and recorded data points."""

from __future__ import annotations

from datetime import date

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models

from analysis.categories import MetricCategory


class Initiative(models.Model):
    """A tracked program owning metrics, locations and data points."""

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="initiatives"
    )
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["title", "id"]

    def __str__(self) -> str:
        """Return a concise display string for admin/debug usage."""

        return self.title


class Location(models.Model):
    """A named place where an initiative records activity."""

    initiative = models.ForeignKey(Initiative, on_delete=models.CASCADE, related_name="locations")
    name = models.CharField(max_length=255)
    latitude = models.FloatField(null=True, blank=True)
    longitude = models.FloatField(null=True, blank=True)

    class Meta:
        ordering = ["name", "id"]

    def __str__(self) -> str:
        """Return a concise display string for admin/debug usage."""

        return self.name


class Metric(models.Model):
    """A named, unit-bearing quantity tracked by an initiative."""

    class MetricType(models.TextChoices):
        NUMBER = "number", "Number"
        PERCENTAGE = "percentage", "Percentage"

    initiative = models.ForeignKey(Initiative, on_delete=models.CASCADE, related_name="metrics")
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    metric_type = models.CharField(
        max_length=20, choices=MetricType.choices, default=MetricType.NUMBER
    )
    unit_of_measurement = models.CharField(max_length=100, blank=True)
    category = models.CharField(
        max_length=20,
        choices=[(category.value, category.value.title()) for category in MetricCategory],
        default=MetricCategory.output.value,
    )
    display_order = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        # Chart colors are assigned by position, so this ordering must stay stable.
        ordering = ["display_order", "created_at", "id"]

    def __str__(self) -> str:
        """Return a concise display string for admin/debug usage."""

        return self.title


class DataPoint(models.Model):
    """One recorded observation of a Metric at a date or over a date range.

    A data point carries `date_represented`, optionally refined by an inclusive
    `date_range_start`/`date_range_end` pair. When a range is present its end
    date is the effective date used by charts and filters.
    """

    metric = models.ForeignKey(Metric, on_delete=models.CASCADE, related_name="data_points")
    value = models.DecimalField(max_digits=16, decimal_places=4)
    date_represented = models.DateField(null=True, blank=True)
    date_range_start = models.DateField(null=True, blank=True)
    date_range_end = models.DateField(null=True, blank=True)
    location = models.ForeignKey(
        Location, on_delete=models.SET_NULL, null=True, blank=True, related_name="data_points"
    )
    label = models.CharField(max_length=255, blank=True)
    note = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(fields=["metric", "date_represented"], name="datapoint_metric_date_idx"),
            models.Index(fields=["metric", "date_range_end"], name="datapoint_metric_rangeend_idx"),
        ]

    def __str__(self) -> str:
        """Return a concise display string for admin/debug usage."""

        return f"DataPoint(metric={self.metric_id}, value={self.value}, date={self.effective_date})"

    @property
    def effective_date(self) -> date | None:
        """Return the range end when present, otherwise the represented date."""

        return self.date_range_end or self.date_represented

    def clean(self) -> None:
        """Enforce that every data point has a usable, well-formed date."""

        has_start = self.date_range_start is not None
        has_end = self.date_range_end is not None
        if has_start != has_end:
            raise ValidationError("Provide both date_range_start and date_range_end, or neither.")
        if has_start and has_end and self.date_range_start > self.date_range_end:
            raise ValidationError("date_range_start must be on or before date_range_end.")
        if not has_end and self.date_represented is None:
            raise ValidationError("A data point needs date_represented or a date range.")
        if self.location_id and self.metric_id:
            if self.location.initiative_id != self.metric.initiative_id:
                raise ValidationError("DataPoint.location must belong to the metric's initiative.")

    def save(self, *args, **kwargs) -> None:
        """Persist the data point after validating its dates."""

        self.full_clean()
        super().save(*args, **kwargs)
