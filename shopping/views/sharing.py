"""
Sharing views.
Owner-only management of list shares: create/refresh, list and revoke.
"""

import logging

from django.http import HttpRequest, HttpResponse
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from ..access import require_owner
from ..exceptions import InvalidInput
from ..invites import create_or_refresh_share, revoke_share
from ..serializers import serialize_share
from .helpers import api_view, json_ok, no_content, parse_json_body

logger = logging.getLogger(__name__)


@require_POST
@api_view
def share_list(request: HttpRequest, identity, list_id) -> HttpResponse:
    """
    Share a list with an email address.
    201 when a new share was created, 200 when an existing one was refreshed.
    """
    # The email (or its absence) is validated after the owner check,
    # so a malformed body from an outsider still gets NotFound
    try:
        email = parse_json_body(request).get("email")
    except InvalidInput:
        email = None
    share, created = create_or_refresh_share(list_id, identity, email)
    return json_ok(status=201 if created else 200, share=serialize_share(share))


@require_GET
@api_view
def list_shares(request: HttpRequest, identity, list_id) -> HttpResponse:
    """All shares of a list, pending and active, newest first."""
    access = require_owner(list_id, identity)
    shares = access.list.shares.select_related("invitee_user").order_by("-created_at")
    return json_ok(shares=[serialize_share(share, include_invitee=True) for share in shares])


@require_http_methods(["DELETE"])
@api_view
def share_revoke(request: HttpRequest, identity, list_id, share_id) -> HttpResponse:
    """Revoke a share; the invitee loses access on their next request."""
    revoke_share(list_id, share_id, identity)
    return no_content()
