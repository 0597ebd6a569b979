"""
Plain-dict representations of the shopping models for JSON responses.
Values are left as UUID/datetime objects; JsonResponse's encoder renders them.
"""

from typing import Any

from .models import ListShare, ShoppingItem, ShoppingList


def serialize_user(user) -> dict[str, Any] | None:
    if user is None:
        return None
    return {
        "id": user.pk,
        "name": user.display_name,
        "email": user.email,
    }


def serialize_item(item: ShoppingItem) -> dict[str, Any]:
    return {
        "id": item.pk,
        "list_id": item.shopping_list_id,
        "name": item.name,
        "quantity": item.quantity,
        "unit": item.unit,
        "checked": item.checked,
        "created_at": item.created_at,
        "updated_at": item.updated_at,
    }


def serialize_list(
    shopping_list: ShoppingList,
    *,
    include_owner: bool = False,
    items: list[ShoppingItem] | None = None,
) -> dict[str, Any]:
    data = {
        "id": shopping_list.pk,
        "name": shopping_list.name,
        "owner_id": shopping_list.owner_id,
        "created_at": shopping_list.created_at,
        "updated_at": shopping_list.updated_at,
    }
    # Set by .annotate(item_count=Count("items")) on list endpoints
    if hasattr(shopping_list, "item_count"):
        data["item_count"] = shopping_list.item_count
    if include_owner:
        data["owner"] = serialize_user(shopping_list.owner)
    if items is not None:
        data["items"] = [serialize_item(item) for item in items]
    return data


def serialize_share(share: ListShare, *, include_invitee: bool = False) -> dict[str, Any]:
    data = {
        "id": share.pk,
        "list_id": share.shopping_list_id,
        "inviter_id": share.inviter_id,
        "invitee_email": share.invitee_email,
        "invitee_user_id": share.invitee_user_id,
        "role": share.role,
        "status": share.status,
        "created_at": share.created_at,
        "accepted_at": share.accepted_at,
    }
    if include_invitee:
        data["invitee_user"] = serialize_user(share.invitee_user)
    return data
