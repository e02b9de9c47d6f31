"""Print an initiative's cumulative metrics series as JSON (read-only)."""

from __future__ import annotations

import json

from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from core.forms import TIME_FRAME_CHOICES, MetricsFilterForm
from core.services import build_metrics_dashboard, dashboard_payload, load_initiative_snapshot
from impactdata.models import Initiative


class Command(BaseCommand):
    """Run the metrics engine for one initiative and print the payload."""

    help = "Print cumulative metric series, totals and colors for an initiative as JSON."

    def add_arguments(self, parser) -> None:
        """Add command arguments."""

        parser.add_argument("initiative_id", type=int, help="Initiative primary key.")
        parser.add_argument("--date", dest="selected_date", help="Single day (YYYY-MM-DD).")
        parser.add_argument("--range-start", help="Inclusive range start (YYYY-MM-DD).")
        parser.add_argument("--range-end", help="Inclusive range end (YYYY-MM-DD).")
        parser.add_argument(
            "--time-frame",
            choices=[key for key, _ in TIME_FRAME_CHOICES],
            help="Rolling window used when no date or range is given.",
        )
        parser.add_argument(
            "--summary",
            action="store_true",
            help="Print only per-metric totals instead of daily rows.",
        )

    def handle(self, *args, **options) -> str | None:
        """Run the command."""

        initiative = Initiative.objects.filter(pk=options["initiative_id"]).first()
        if initiative is None:
            raise CommandError(f"Unknown initiative: {options['initiative_id']!r}")

        data = {
            key: options[key]
            for key in ("selected_date", "range_start", "range_end", "time_frame")
            if options.get(key)
        }
        snapshot = load_initiative_snapshot(initiative)
        form = MetricsFilterForm(data, metrics=snapshot.metric_rows, locations=snapshot.location_rows)
        if not form.is_valid():
            raise CommandError(f"Invalid filters: {form.errors.as_text()}")

        filters = form.to_filter_state()
        result = build_metrics_dashboard(snapshot, filters=filters, today=timezone.localdate())
        payload = dashboard_payload(snapshot, result, filters=filters, visible_ids=None)
        if options["summary"]:
            payload = {"filters": payload["filters"], "metrics": payload["metrics"]}
        self.stdout.write(json.dumps(payload, indent=2))
        return None
