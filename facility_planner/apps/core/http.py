"""Helpers shared by the JSON API views."""

from __future__ import annotations

import json
import logging
from typing import Any

from django.core.exceptions import PermissionDenied
from django.forms import Form
from django.http import Http404, HttpRequest, JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

logger = logging.getLogger(__name__)


class InvalidJSONError(ValueError):
    """Raised when a request body is not a JSON object."""


def parse_json_body(request: HttpRequest) -> dict[str, Any]:
    """Decode the request body as a JSON object. An empty body decodes to {}."""
    if not request.body:
        return {}
    try:
        data = json.loads(request.body)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise InvalidJSONError("Request body must be valid JSON") from exc
    if not isinstance(data, dict):
        raise InvalidJSONError("Request body must be a JSON object")
    return data


def json_error(message: str, status: int = 400, **extra: Any) -> JsonResponse:
    return JsonResponse({"error": message, **extra}, status=status)


def form_error_response(form: Form, message: str = "Invalid submission") -> JsonResponse:
    """400 response listing each field's validation messages."""
    details = {field: [str(e) for e in errors] for field, errors in form.errors.items()}
    return json_error(message, status=400, details=details)


@method_decorator(csrf_exempt, name="dispatch")
class JsonApiView(View):
    """Base view for cross-origin JSON endpoints.

    Subclasses implement `get`/`post` and may read `self.payload`, the decoded
    body. Malformed bodies become a 400; any unexpected exception is logged
    and answered with a generic 500 body.
    """

    error_message = "An error occurred while processing your request"

    def dispatch(self, request, *args, **kwargs):
        try:
            self.payload = parse_json_body(request) if request.method == "POST" else {}
        except InvalidJSONError as exc:
            return json_error(str(exc))

        try:
            return super().dispatch(request, *args, **kwargs)
        except (Http404, PermissionDenied):
            raise
        except Exception:
            logger.exception("Unhandled error in %s", type(self).__name__)
            return json_error(self.error_message, status=500)
