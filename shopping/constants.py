"""
Constants for the shopping application.
Centralizes field limits and other magic numbers.
"""

# --------------------------------------------------------------------------------------
# Field limits
# --------------------------------------------------------------------------------------
LIST_NAME_MAX_LENGTH = 120        # Shopping list name
ITEM_NAME_MAX_LENGTH = 200        # Shopping item name
ITEM_UNIT_MAX_LENGTH = 40         # e.g. "kg", "pack", "bottles"
USER_NAME_MAX_LENGTH = 150        # Display name of a user

# --------------------------------------------------------------------------------------
# Text Limits
# --------------------------------------------------------------------------------------
MAX_TEXT_LENGTH = 10_000          # Maximum length for sanitized text

# --------------------------------------------------------------------------------------
# Status strings stored in the database
# --------------------------------------------------------------------------------------
SHARE_STATUS_MAX_LENGTH = 16
SHARE_ROLE_MAX_LENGTH = 16

# --------------------------------------------------------------------------------------
# Management commands
# --------------------------------------------------------------------------------------
VERBOSE_LISTING_LIMIT = 10        # Rows printed per section with --verbose
