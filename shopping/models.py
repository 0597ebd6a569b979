import math
import uuid

from django.conf import settings
from django.contrib.auth.models import AbstractUser
from django.contrib.auth.signals import user_logged_in
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q, CheckConstraint, UniqueConstraint
from django.dispatch import receiver
from django.utils import timezone

from .constants import (
    ITEM_NAME_MAX_LENGTH,
    ITEM_UNIT_MAX_LENGTH,
    LIST_NAME_MAX_LENGTH,
    SHARE_ROLE_MAX_LENGTH,
    SHARE_STATUS_MAX_LENGTH,
    USER_NAME_MAX_LENGTH,
)
from .utils import normalize_email


# === Users =====================================================================

class User(AbstractUser):
    """
    Account created by the identity provider (allauth) on signup.
    Email is the identity that share invitations are matched against,
    so it is unique and always stored normalized.
    """
    email = models.EmailField("email address", unique=True)
    name = models.CharField(max_length=USER_NAME_MAX_LENGTH, blank=True)

    def save(self, *args, **kwargs):
        self.email = normalize_email(self.email)
        super().save(*args, **kwargs)

    @property
    def display_name(self) -> str:
        return self.name or self.get_full_name() or self.username

    def __str__(self):
        return self.email or self.username


# === Lists & items =============================================================

class ShoppingList(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=LIST_NAME_MAX_LENGTH)
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="owned_lists"
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-updated_at"]
        indexes = [
            # "My lists" page, newest first
            models.Index(fields=["owner", "-updated_at"], name="shoplist_owner_updated_idx"),
        ]

    def save(self, *args, **kwargs):
        """Override save to ensure clean() is called."""
        self.full_clean()
        super().save(*args, **kwargs)

    def is_owned_by(self, user_id) -> bool:
        return self.owner_id == user_id

    def __str__(self):
        return self.name


class ShoppingItem(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    shopping_list = models.ForeignKey(ShoppingList, on_delete=models.CASCADE, related_name="items")
    name = models.CharField(max_length=ITEM_NAME_MAX_LENGTH)
    quantity = models.FloatField(null=True, blank=True)
    unit = models.CharField(max_length=ITEM_UNIT_MAX_LENGTH, null=True, blank=True)
    checked = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at"]
        indexes = [
            models.Index(fields=["shopping_list", "created_at"], name="shopitem_list_created_idx"),
        ]

    def clean(self):
        super().clean()
        if isinstance(self.quantity, float) and not math.isfinite(self.quantity):
            raise ValidationError({"quantity": "Quantity must be a finite number."})

    def save(self, *args, **kwargs):
        """Override save to ensure clean() is called."""
        self.full_clean()
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.name} ({self.shopping_list_id})"


# === Sharing ===================================================================

class ShareStatus(models.TextChoices):
    PENDING = "PENDING", "Pending"
    ACTIVE = "ACTIVE", "Active"


class ShareRole(models.TextChoices):
    PARTICIPANT = "PARTICIPANT", "Participant"


class ListShareQuerySet(models.QuerySet):
    def pending(self):
        return self.filter(status=ShareStatus.PENDING)

    def active(self):
        return self.filter(status=ShareStatus.ACTIVE)

    def activate_pending(self, user_id, email: str) -> int:
        """
        Bulk PENDING -> ACTIVE transition for every share addressed to ``email``.
        One conditional UPDATE, so concurrent logins converge on the same rows.
        """
        return self.pending().filter(invitee_email=normalize_email(email)).update(
            invitee_user_id=user_id,
            status=ShareStatus.ACTIVE,
            accepted_at=timezone.now(),
        )


class ListShare(models.Model):
    """
    One participant grant on a list, keyed by email.

    - PENDING: nobody has an account with ``invitee_email`` yet; invitee_user is NULL.
    - ACTIVE: invitee_user is the account owning ``invitee_email``.

    Status only ever moves PENDING -> ACTIVE. Revocation deletes the row.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    shopping_list = models.ForeignKey(ShoppingList, on_delete=models.CASCADE, related_name="shares")
    inviter = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="sent_shares"
    )
    invitee_email = models.EmailField()
    invitee_user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, null=True, blank=True,
        related_name="received_shares"
    )
    role = models.CharField(
        max_length=SHARE_ROLE_MAX_LENGTH, choices=ShareRole.choices, default=ShareRole.PARTICIPANT
    )
    status = models.CharField(
        max_length=SHARE_STATUS_MAX_LENGTH, choices=ShareStatus.choices, default=ShareStatus.PENDING
    )
    created_at = models.DateTimeField(auto_now_add=True)
    accepted_at = models.DateTimeField(null=True, blank=True)

    objects = ListShareQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["invitee_user", "status"], name="listshare_invitee_status_idx"),
            models.Index(fields=["invitee_email", "status"], name="listshare_email_status_idx"),
        ]
        constraints = [
            # Re-sharing to the same address updates the existing row
            UniqueConstraint(
                fields=["shopping_list", "invitee_email"],
                name="uniq_share_list_email",
            ),
            # ACTIVE exactly when an invitee account is attached
            CheckConstraint(
                condition=(
                    Q(status=ShareStatus.ACTIVE, invitee_user__isnull=False)
                    | Q(status=ShareStatus.PENDING, invitee_user__isnull=True)
                ),
                name="share_status_matches_invitee",
            ),
        ]

    @property
    def is_pending(self) -> bool:
        return self.status == ShareStatus.PENDING

    @property
    def is_active(self) -> bool:
        return self.status == ShareStatus.ACTIVE

    def clean(self):
        super().clean()
        self.invitee_email = normalize_email(self.invitee_email)
        owner = self.shopping_list.owner if self.shopping_list_id else None
        if owner is not None and normalize_email(owner.email) == self.invitee_email:
            raise ValidationError({"invitee_email": "The list owner cannot be invited to their own list."})
        if owner is not None and self.inviter_id and self.inviter_id != owner.pk:
            raise ValidationError({"inviter": "Only the list owner can share a list."})

    def activate(self, user) -> bool:
        """
        PENDING -> ACTIVE for a single share. Returns False when already active.
        """
        if self.is_active:
            return False
        if normalize_email(user.email) != self.invitee_email:
            raise ValueError("Share was issued to a different email address.")
        if self.shopping_list.is_owned_by(user.pk):
            raise ValueError("Owner cannot accept a share of their own list.")
        self.invitee_user = user
        self.status = ShareStatus.ACTIVE
        self.accepted_at = timezone.now()
        self.save(update_fields=["invitee_user", "status", "accepted_at"])
        return True

    def __str__(self):
        return f"{self.shopping_list_id} → {self.invitee_email} [{self.status}]"


@receiver(user_logged_in)
def reconcile_on_login(sender, request, user, **kwargs):
    """Activate invitations sent to this address before the account existed."""
    from .invites import reconcile_pending_invites

    reconcile_pending_invites(user.pk, user.email)
