"""
Access resolution for shopping lists.

Roles:
    - OWNER: created the list; may rename/delete it and manage its shares.
    - PARTICIPANT: holds an ACTIVE share; may read the list and edit its items.

Invariants:
    - A caller with no role on a list gets NotFound, never Forbidden, so list
      ids cannot be probed.
    - Forbidden is reserved for participants attempting owner-only operations.
    - Nothing is cached: a revoked share stops working on the next request.
"""

import enum
import logging
from dataclasses import dataclass

from django.core.exceptions import ValidationError

from .exceptions import Forbidden, NotFound
from .models import ListShare, ShoppingItem, ShoppingList

logger = logging.getLogger(__name__)


class Role(enum.Enum):
    OWNER = "OWNER"
    PARTICIPANT = "PARTICIPANT"


@dataclass(frozen=True)
class ListAccess:
    list: ShoppingList
    role: Role

    @property
    def is_owner(self) -> bool:
        return self.role is Role.OWNER


def resolve_access(list_id, user_id) -> ListAccess | None:
    """Return the caller's access to a list, or None when they have none."""
    try:
        shopping_list = ShoppingList.objects.select_related("owner").filter(pk=list_id).first()
    except (ValidationError, ValueError):
        # Malformed id: same answer as an unknown one
        return None

    if shopping_list is None:
        return None

    if shopping_list.is_owned_by(user_id):
        return ListAccess(list=shopping_list, role=Role.OWNER)

    is_participant = ListShare.objects.active().filter(
        shopping_list=shopping_list,
        invitee_user_id=user_id,
    ).exists()

    if not is_participant:
        return None

    return ListAccess(list=shopping_list, role=Role.PARTICIPANT)


def require_access(list_id, identity) -> ListAccess:
    """Any role will do; otherwise the list does not exist for this caller."""
    access = resolve_access(list_id, identity.user_id)
    if access is None:
        raise NotFound("List not found")
    return access


def require_owner(list_id, identity) -> ListAccess:
    """Owner-only operations: outsiders get NotFound, participants get Forbidden."""
    access = require_access(list_id, identity)
    if not access.is_owner:
        logger.info(f"User {identity.user_id} denied owner operation on list {access.list.pk}")
        raise Forbidden()
    return access


def get_list_item(access: ListAccess, item_id) -> ShoppingItem:
    """Fetch an item that belongs to the already-authorized list."""
    try:
        item = ShoppingItem.objects.filter(pk=item_id, shopping_list=access.list).first()
    except (ValidationError, ValueError):
        item = None
    if item is None:
        raise NotFound("Item not found")
    return item
