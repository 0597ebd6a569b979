"""
Share invitations and their PENDING -> ACTIVE reconciliation.

A share is addressed to an email, not to an account. If the account already
exists the share starts ACTIVE; otherwise it stays PENDING until somebody
authenticates with that email, at which point ``reconcile_pending_invites``
attaches the account and activates it.
"""

import logging

from django.core.exceptions import ValidationError
from django.core.validators import validate_email
from django.db import transaction
from django.utils import timezone

from .access import require_owner
from .exceptions import InvalidInput, NotFound
from .models import ListShare, ShareRole, ShareStatus, User
from .utils import normalize_email

logger = logging.getLogger(__name__)


def create_or_refresh_share(list_id, inviter, email: str) -> tuple[ListShare, bool]:
    """
    Share a list with ``email``, or refresh the existing share for it.

    Returns ``(share, created)``. Re-sharing is idempotent and monotonic: an
    existing share is only ever moved from PENDING to ACTIVE, never back, and
    its invitee is never cleared.
    """
    # Authorize first: outsiders get NotFound whatever the payload
    access = require_owner(list_id, inviter)

    if not isinstance(email, str):
        raise InvalidInput("Invalid email address", errors={"email": ["Enter a valid email address."]})
    email = normalize_email(email)
    try:
        validate_email(email)
    except ValidationError:
        raise InvalidInput("Invalid email address", errors={"email": ["Enter a valid email address."]})

    if email == inviter.email:
        raise InvalidInput("Owner already has access", errors={"email": ["You cannot share a list with yourself."]})

    with transaction.atomic():
        invitee = User.objects.filter(email=email).first()

        share, created = ListShare.objects.select_for_update().get_or_create(
            shopping_list=access.list,
            invitee_email=email,
            defaults={
                "inviter_id": inviter.user_id,
                "invitee_user": invitee,
                "role": ShareRole.PARTICIPANT,
                "status": ShareStatus.ACTIVE if invitee else ShareStatus.PENDING,
                "accepted_at": timezone.now() if invitee else None,
            },
        )

        if not created and invitee is not None:
            share.activate(invitee)

    logger.info(
        f"List {access.list.pk} {'shared with' if created else 're-shared with'} {email} "
        f"[{share.status}]"
    )
    return share, created


def reconcile_pending_invites(user_id, email: str) -> int:
    """
    Activate every PENDING share addressed to ``email`` for ``user_id``.

    Safe to call on every authentication: once reconciled, no PENDING rows
    match and the update touches nothing. Returns the number activated.
    """
    email = normalize_email(email)
    if not email:
        return 0

    activated = ListShare.objects.activate_pending(user_id, email)
    if activated:
        logger.info(f"Activated {activated} pending share(s) for user {user_id}")
    return activated


def revoke_share(list_id, share_id, owner) -> None:
    """Delete a share (pending or active) from a list the caller owns."""
    access = require_owner(list_id, owner)

    try:
        deleted, _ = ListShare.objects.filter(pk=share_id, shopping_list=access.list).delete()
    except (ValidationError, ValueError):
        deleted = 0

    if not deleted:
        raise NotFound("Share not found")

    logger.info(f"Share {share_id} on list {access.list.pk} revoked by user {owner.user_id}")
