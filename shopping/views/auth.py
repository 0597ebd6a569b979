"""
Identity views.
Login, logout and signup are served by allauth under /accounts/; this module
only exposes who the current session belongs to.
"""

import logging

from django.http import HttpRequest, HttpResponse
from django.views.decorators.csrf import ensure_csrf_cookie
from django.views.decorators.http import require_GET

from ..models import User
from ..serializers import serialize_user
from .helpers import api_view, json_ok

logger = logging.getLogger(__name__)


@require_GET
@ensure_csrf_cookie
@api_view
def current_user(request: HttpRequest, identity) -> HttpResponse:
    """
    Return the authenticated user's id, name and normalized email.

    Also sets the ``csrftoken`` cookie; clients echo it in the X-CSRFToken
    header on POST, PATCH and DELETE.
    """
    user = User.objects.get(pk=identity.user_id)
    return json_ok(user=serialize_user(user))
