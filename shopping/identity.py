"""
Request-scoped identity.

The identity provider (Django sessions + allauth) decides who is logged in.
Views never read ``request.user`` themselves: ``authenticate_request`` turns
the session into an explicit ``Identity`` that is passed to every handler.
"""

import logging
from dataclasses import dataclass

from django.http import HttpRequest

from .exceptions import Unauthenticated
from .invites import reconcile_pending_invites
from .utils import normalize_email

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """Verified (user id, normalized email) pair for the current request."""

    user_id: int
    email: str

    @classmethod
    def from_user(cls, user) -> "Identity":
        return cls(user_id=user.pk, email=normalize_email(user.email))


def authenticate_request(request: HttpRequest) -> Identity:
    """
    Resolve the caller's identity or raise ``Unauthenticated``.

    Every successful authentication also activates invitations that were
    sent to the caller's email before their account existed.
    """
    user = getattr(request, "user", None)
    if user is None or not user.is_authenticated or not user.email:
        raise Unauthenticated()

    identity = Identity.from_user(user)
    reconcile_pending_invites(identity.user_id, identity.email)
    return identity
