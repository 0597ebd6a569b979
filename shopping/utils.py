import html

import bleach

from .constants import MAX_TEXT_LENGTH


def normalize_email(email: str | None) -> str:
    """
    Normalize an email address for storage and comparison.

    Every email that enters the system (user accounts, share invitations,
    identities coming from the session) goes through here, so two spellings
    of the same address always compare equal.
    """
    return (email or "").strip().lower()


def sanitize_text(text: str) -> str:
    """
    Strip HTML markup from plain-text input.

    Entities produced by bleach are decoded again, so "Salt & Pepper" is
    stored as sent; escaping is left to whatever renders the text.

    Args:
        text: The text to sanitize

    Returns:
        Sanitized text string
    """
    if not text:
        return ""

    cleaned = html.unescape(bleach.clean(text, tags=[], attributes={}, strip=True))

    # Limit length to prevent DoS
    if len(cleaned) > MAX_TEXT_LENGTH:
        cleaned = cleaned[:MAX_TEXT_LENGTH]

    return cleaned.strip()
