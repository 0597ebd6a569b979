"""
Shared helpers for the JSON API views.
Includes type hints for better code clarity and IDE support.
"""

import json
import logging
from functools import wraps
from typing import Any, Callable

from django import forms
from django.core.exceptions import ValidationError
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.middleware.csrf import CsrfViewMiddleware
from django.views.decorators.csrf import csrf_exempt

from ..exceptions import CsrfFailed, InvalidInput, ShoppingListError
from ..identity import authenticate_request

logger = logging.getLogger(__name__)


# -------------------------------------------------------------------------------------------------
# JSON Response Helpers
# -------------------------------------------------------------------------------------------------

def json_ok(status: int = 200, **payload: Any) -> JsonResponse:
    """Return a successful JSON response with ok=True."""
    data = {"ok": True}
    data.update(payload)
    return JsonResponse(data, status=status)


def json_err(msg: str, status: int = 400, **extra: Any) -> JsonResponse:
    """Return an error JSON response with ok=False."""
    data = {"ok": False, "error": msg}
    data.update(extra)
    return JsonResponse(data, status=status)


def no_content() -> HttpResponse:
    return HttpResponse(status=204)


# -------------------------------------------------------------------------------------------------
# Request Parsing Helpers
# -------------------------------------------------------------------------------------------------

def parse_json_body(request: HttpRequest) -> dict[str, Any]:
    """Decode the JSON object in the request body; an empty body is {}."""
    if not request.body:
        return {}
    try:
        payload = json.loads(request.body)
    except (ValueError, UnicodeDecodeError):
        raise InvalidInput("Invalid JSON body")
    if not isinstance(payload, dict):
        raise InvalidInput("Expected a JSON object")
    return payload


def validated(form_class: type[forms.Form], payload: dict[str, Any]) -> forms.Form:
    """Bind and validate a form, raising InvalidInput with field errors."""
    form = form_class(payload)
    if not form.is_valid():
        raise InvalidInput(errors={field: list(msgs) for field, msgs in form.errors.items()})
    return form


# -------------------------------------------------------------------------------------------------
# Request boundary
# -------------------------------------------------------------------------------------------------

class _CsrfCheck(CsrfViewMiddleware):
    """Runs Django's CSRF validation on demand and reports the reason instead of a 403 page."""

    def _reject(self, request: HttpRequest, reason: str) -> str:
        return reason


def enforce_csrf(request: HttpRequest) -> None:
    """Session-authenticated writes must carry the CSRF token (X-CSRFToken header)."""
    check = _CsrfCheck(lambda req: None)
    check.process_request(request)
    reason = check.process_view(request, None, (), {})
    if reason:
        raise CsrfFailed(f"CSRF check failed: {reason}")


def _model_errors(error: ValidationError) -> dict[str, list[str]]:
    if hasattr(error, "error_dict"):
        return {field: list(msgs) for field, msgs in error.message_dict.items()}
    return {"__all__": list(error.messages)}


def api_view(view: Callable[..., HttpResponse]) -> Callable[..., HttpResponse]:
    """
    Authenticate the request and call ``view(request, identity, *args, **kwargs)``.

    This is the one place where core errors become HTTP statuses:
    401 no session, 404 no visibility, 403 wrong role or missing CSRF token,
    400 bad payload. CSRF is checked here, after authentication, so a request
    without a session always gets 401.
    """
    @csrf_exempt
    @wraps(view)
    def wrapper(request: HttpRequest, *args: Any, **kwargs: Any) -> HttpResponse:
        try:
            identity = authenticate_request(request)
            enforce_csrf(request)
            try:
                return view(request, identity, *args, **kwargs)
            except ValidationError as e:
                raise InvalidInput(errors=_model_errors(e))
        except ShoppingListError as e:
            logger.info(f"{request.method} {request.path} -> {e.status_code} {e.code}")
            extra = {"code": e.code}
            if isinstance(e, InvalidInput) and e.errors:
                extra["errors"] = e.errors
            return json_err(e.message, e.status_code, **extra)

    return wrapper
