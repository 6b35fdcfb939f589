"""Custom middleware helpers."""

from __future__ import annotations

import uuid
from collections.abc import Callable

from django.conf import settings
from django.http import HttpRequest, HttpResponse

from facility_planner.apps.core.ip import get_real_ip
from facility_planner.logging import bind_log_context, reset_log_context


class RequestContextMiddleware:
    """Attach a request ID and path/client metadata to log records."""

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]):
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        request_id = request.META.get("HTTP_X_REQUEST_ID") or uuid.uuid4().hex

        token = bind_log_context(
            request_id=request_id,
            path=request.path,
            method=request.method,
            remote_ip=get_real_ip(request),
        )
        request.request_id = request_id  # type: ignore[attr-defined]
        try:
            response = self.get_response(request)
        finally:
            reset_log_context(token)

        response.headers.setdefault("X-Request-ID", request_id)
        return response


def is_allowed_origin(origin: str | None) -> bool:
    """Return True when the browser origin may call the JSON API."""
    if not origin:
        return False
    if origin in settings.CORS_ALLOWED_ORIGINS:
        return True
    return any(suffix and origin.endswith(suffix) for suffix in settings.CORS_ALLOWED_ORIGIN_SUFFIXES)


class CorsAllowListMiddleware:
    """Answer preflights and add CORS headers for allow-listed origins on /api/ paths.

    Requests from other origins get the first allow-listed origin echoed back,
    which browsers treat as a mismatch.
    """

    allow_headers = "authorization, x-client-info, apikey, content-type"
    allow_methods = "POST, GET, OPTIONS"

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]):
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        if not request.path.startswith("/api/"):
            return self.get_response(request)

        if request.method == "OPTIONS":
            response = HttpResponse(status=204)
        else:
            response = self.get_response(request)

        origin = request.headers.get("Origin")
        allowed = list(settings.CORS_ALLOWED_ORIGINS)
        if is_allowed_origin(origin):
            response["Access-Control-Allow-Origin"] = origin
        elif allowed:
            response["Access-Control-Allow-Origin"] = allowed[0]
        response["Access-Control-Allow-Headers"] = self.allow_headers
        response["Access-Control-Allow-Methods"] = self.allow_methods
        response["Vary"] = "Origin"
        return response
