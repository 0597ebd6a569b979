"""
Error taxonomy for the shopping API.

The access resolver and invite reconciler raise these; the ``api_view``
decorator converts them into JSON responses with the matching HTTP status.

``NotFound`` covers both "does not exist" and "exists but you may not see it":
callers must not be able to tell the two apart. ``Forbidden`` is only raised
when the caller already has some access to the resource.
"""


class ShoppingListError(Exception):
    """Base exception for shopping list errors."""

    status_code = 500
    code = "INTERNAL_ERROR"
    default_message = "Internal error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(ShoppingListError):
    """No valid identity on the request."""

    status_code = 401
    code = "UNAUTHENTICATED"
    default_message = "Unauthorized"


class NotFound(ShoppingListError):
    """Resource absent, or invisible to the caller."""

    status_code = 404
    code = "NOT_FOUND"
    default_message = "Not found"


class Forbidden(ShoppingListError):
    """Caller can see the resource but lacks the required role."""

    status_code = 403
    code = "FORBIDDEN"
    default_message = "Forbidden"


class CsrfFailed(ShoppingListError):
    """Authenticated write without a valid CSRF token."""

    status_code = 403
    code = "CSRF_FAILED"
    default_message = "CSRF check failed"


class InvalidInput(ShoppingListError):
    """Payload failed validation."""

    status_code = 400
    code = "INVALID_INPUT"
    default_message = "Invalid payload"

    def __init__(self, message: str | None = None, errors: dict | None = None):
        super().__init__(message)
        self.errors = errors or {}


class Conflict(ShoppingListError):
    """State conflict. Re-sharing is an update, so sharing never raises this."""

    status_code = 409
    code = "CONFLICT"
    default_message = "Conflict"
