from allauth.account.adapter import DefaultAccountAdapter
from django.conf import settings

from .utils import normalize_email


class AccountAdapter(DefaultAccountAdapter):
    def is_open_for_signup(self, request):
        return bool(getattr(settings, "ALLOW_REGISTRATION", True))

    def clean_email(self, email):
        # Stored form must match how share invitations are addressed
        return normalize_email(super().clean_email(email))
