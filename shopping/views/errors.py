"""
Error handling views.
JSON 404 and 500 handlers, so API clients never receive HTML error pages.
"""

import logging

from django.http import HttpRequest, JsonResponse

from .helpers import json_err

logger = logging.getLogger(__name__)


def error_404(request: HttpRequest, exception: Exception) -> JsonResponse:
    """Custom 404 error handler."""
    logger.warning(f"404 error for path: {request.path}")
    return json_err("Not found", 404, code="NOT_FOUND")


def error_500(request: HttpRequest) -> JsonResponse:
    """Custom 500 error handler."""
    logger.error(f"500 error for path: {request.path}")
    return json_err("Internal server error", 500, code="INTERNAL_ERROR")
