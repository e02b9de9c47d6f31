"""Post-login redirect validation.

The `next` parameter is user supplied, so only same-host targets (and https
targets on secure requests) are followed.
"""

from __future__ import annotations

from collections.abc import Iterable

from django.conf import settings
from django.core.exceptions import DisallowedHost
from django.http import HttpRequest, HttpResponseRedirect
from django.shortcuts import redirect
from django.utils.http import url_has_allowed_host_and_scheme


def safe_redirect(
    request: HttpRequest,
    *,
    candidates: Iterable[str | None],
    fallback: str,
) -> HttpResponseRedirect:
    """Redirect to the first candidate URL that passes host validation.

    Args:
        request: Incoming request; its host is trusted alongside ALLOWED_HOSTS.
        candidates: Possible targets in priority order (blank values skipped).
        fallback: Target used when no candidate is safe.

    Returns:
        An HttpResponseRedirect.
    """

    allowed_hosts = set(settings.ALLOWED_HOSTS)
    try:
        allowed_hosts.add(request.get_host())
    except DisallowedHost:
        pass

    for candidate in candidates:
        target = (candidate or "").strip()
        if target and url_has_allowed_host_and_scheme(
            url=target,
            allowed_hosts=allowed_hosts,
            require_https=request.is_secure(),
        ):
            return redirect(target)
    return redirect(fallback)
