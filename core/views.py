"""Views for the core app."""

from __future__ import annotations

import logging

from django.conf import settings
from django.contrib.auth import login as auth_login
from django.contrib.auth.decorators import login_required
from django.contrib.auth.forms import AuthenticationForm
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.shortcuts import get_object_or_404, redirect
from django.utils import timezone
from django.views.decorators.http import require_GET, require_http_methods

from core.forms import MetricsFilterForm
from core.redirects import safe_redirect
from core.services import build_metrics_dashboard, dashboard_payload, load_initiative_snapshot
from impactdata.models import Initiative

logger = logging.getLogger(__name__)


@login_required
def initiative_list(request: HttpRequest) -> JsonResponse:
    """Return the authenticated user's initiatives."""

    initiatives = Initiative.objects.filter(owner=request.user).order_by("title", "id")
    return JsonResponse(
        {"initiatives": [{"id": row.pk, "title": row.title} for row in initiatives]}
    )


@login_required
@require_GET
def metrics_dashboard(request: HttpRequest, initiative_id: int) -> JsonResponse:
    """Return chart rows, totals and colors for an initiative's metrics.

    Filters arrive as query parameters (see MetricsFilterForm). Invalid
    filters produce HTTP 400 with form errors; an empty chart is a normal 200
    response carrying an `empty_state` message.
    """

    initiative = get_object_or_404(Initiative, pk=initiative_id, owner=request.user)
    snapshot = load_initiative_snapshot(initiative)
    form = MetricsFilterForm(
        request.GET,
        metrics=snapshot.metric_rows,
        locations=snapshot.location_rows,
    )
    if not form.is_valid():
        logger.warning("Rejected metrics dashboard filters for initiative %s: %s", initiative.pk, form.errors.as_json())
        return JsonResponse({"errors": form.errors.get_json_data()}, status=400)

    filters = form.to_filter_state()
    visible_ids = form.visible_metric_ids()
    result = build_metrics_dashboard(
        snapshot,
        filters=filters,
        today=timezone.localdate(),
        visible_ids=visible_ids,
    )
    return JsonResponse(dashboard_payload(snapshot, result, filters=filters, visible_ids=visible_ids))


@require_http_methods(["GET", "POST"])
def login_view(request: HttpRequest) -> HttpResponse:
    """Sign a user in with username and password.

    GET describes the expected POST fields. A valid POST logs the user in and
    redirects to a safe `next` target; invalid credentials return HTTP 400 with
    the form errors.
    """

    if request.user.is_authenticated:
        return redirect(settings.LOGIN_REDIRECT_URL)

    next_url = request.POST.get("next") or request.GET.get("next", "")
    if request.method == "POST":
        form = AuthenticationForm(request, data=request.POST)
        if form.is_valid():
            auth_login(request, form.get_user())
            logger.info("User %s signed in", form.get_user().pk)
            return safe_redirect(request, candidates=[next_url], fallback=settings.LOGIN_REDIRECT_URL)
        return JsonResponse({"errors": form.errors.get_json_data(), "next": next_url}, status=400)

    return JsonResponse(
        {
            "detail": "Authentication required.",
            "fields": ["username", "password"],
            "next": next_url,
        }
    )
