"""
Shopping item views.
Any caller with access to the parent list (owner or participant) may mutate its items.
"""

import logging

from django.http import HttpRequest, HttpResponse
from django.views.decorators.http import require_http_methods, require_POST

from ..access import get_list_item, require_access
from ..forms import ItemCheckForm, ItemCreateForm, ItemUpdateForm
from ..models import ShoppingItem
from ..serializers import serialize_item
from .helpers import api_view, json_ok, no_content, parse_json_body, validated

logger = logging.getLogger(__name__)


@require_POST
@api_view
def item_create(request: HttpRequest, identity, list_id) -> HttpResponse:
    """Add an item to a list."""
    access = require_access(list_id, identity)
    form = validated(ItemCreateForm, parse_json_body(request))

    item = ShoppingItem.objects.create(
        shopping_list=access.list,
        name=form.cleaned_data["name"],
        quantity=form.cleaned_data.get("quantity"),
        unit=form.cleaned_data.get("unit"),
    )
    return json_ok(status=201, item=serialize_item(item))


@require_http_methods(["PATCH", "DELETE"])
@api_view
def item_detail(request: HttpRequest, identity, list_id, item_id) -> HttpResponse:
    """PATCH: partial update of name/quantity/unit. DELETE: remove the item."""
    access = require_access(list_id, identity)
    item = get_list_item(access, item_id)

    if request.method == "DELETE":
        item.delete()
        return no_content()

    form = validated(ItemUpdateForm, parse_json_body(request))
    changes = form.changed_fields()
    for field, value in changes.items():
        setattr(item, field, value)
    if changes:
        item.save(update_fields=[*changes, "updated_at"])
    return json_ok(item=serialize_item(item))


@require_http_methods(["PATCH"])
@api_view
def item_check(request: HttpRequest, identity, list_id, item_id) -> HttpResponse:
    """Set the checked flag of an item."""
    access = require_access(list_id, identity)
    item = get_list_item(access, item_id)
    form = validated(ItemCheckForm, parse_json_body(request))

    item.checked = form.cleaned_data["checked"]
    item.save(update_fields=["checked", "updated_at"])
    return json_ok(item=serialize_item(item))
