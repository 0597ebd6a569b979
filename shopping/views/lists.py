"""
Shopping list views.
Owned and shared list collections, list detail, rename and delete.
"""

import logging

from django.db.models import Count
from django.http import HttpRequest, HttpResponse
from django.views.decorators.http import require_GET, require_http_methods

from ..access import require_access, require_owner
from ..forms import ListForm
from ..models import ShareStatus, ShoppingList
from ..serializers import serialize_list
from .helpers import api_view, json_ok, no_content, parse_json_body, validated

logger = logging.getLogger(__name__)


@require_http_methods(["GET", "POST"])
@api_view
def lists_collection(request: HttpRequest, identity) -> HttpResponse:
    """GET: lists owned by the caller. POST: create a list owned by the caller."""
    if request.method == "POST":
        form = validated(ListForm, parse_json_body(request))
        shopping_list = ShoppingList.objects.create(
            name=form.cleaned_data["name"],
            owner_id=identity.user_id,
        )
        logger.info(f"User {identity.user_id} created list {shopping_list.pk}")
        return json_ok(status=201, list=serialize_list(shopping_list))

    lists = (
        ShoppingList.objects
        .filter(owner_id=identity.user_id)
        .annotate(item_count=Count("items"))
        .order_by("-updated_at")
    )
    return json_ok(lists=[serialize_list(lst) for lst in lists])


@require_GET
@api_view
def shared_lists(request: HttpRequest, identity) -> HttpResponse:
    """Lists other users have shared with the caller (ACTIVE shares only)."""
    lists = (
        ShoppingList.objects
        .filter(shares__invitee_user_id=identity.user_id, shares__status=ShareStatus.ACTIVE)
        .select_related("owner")
        .annotate(item_count=Count("items", distinct=True))
        .order_by("-updated_at")
        .distinct()
    )
    return json_ok(lists=[serialize_list(lst, include_owner=True) for lst in lists])


@require_http_methods(["GET", "PATCH", "DELETE"])
@api_view
def list_detail(request: HttpRequest, identity, list_id) -> HttpResponse:
    """
    GET: list with items and the caller's role (owner or participant).
    PATCH: rename (owner only). DELETE: delete with items and shares (owner only).
    """
    if request.method == "PATCH":
        access = require_owner(list_id, identity)
        form = validated(ListForm, parse_json_body(request))
        shopping_list = access.list
        shopping_list.name = form.cleaned_data["name"]
        shopping_list.save(update_fields=["name", "updated_at"])
        return json_ok(list=serialize_list(shopping_list))

    if request.method == "DELETE":
        access = require_owner(list_id, identity)
        access.list.delete()
        logger.info(f"User {identity.user_id} deleted list {list_id}")
        return no_content()

    access = require_access(list_id, identity)
    items = list(access.list.items.order_by("created_at"))
    return json_ok(
        list=serialize_list(access.list, include_owner=True, items=items),
        role=access.role.value,
    )
