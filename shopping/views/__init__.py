"""
Views package for the shopping application.

This package is organized into logical modules:
- lists: owned/shared list collections, list detail, rename and delete
- items: item create, update, check and delete
- sharing: share creation, listing and revocation (owner only)
- auth: current identity
- health: liveness, readiness, health and metrics endpoints
- helpers: JSON responses, request parsing and the api_view boundary
"""

# Import all views so urls.py and the error handlers can reference them
from .lists import (
    lists_collection,
    shared_lists,
    list_detail,
)

from .items import (
    item_create,
    item_detail,
    item_check,
)

from .sharing import (
    share_list,
    list_shares,
    share_revoke,
)

from .auth import (
    current_user,
)

from .errors import (
    error_404,
    error_500,
)

from .health import (
    health_check,
    liveness_check,
    readiness_check,
    metrics,
)

__all__ = [
    # Lists
    'lists_collection',
    'shared_lists',
    'list_detail',
    # Items
    'item_create',
    'item_detail',
    'item_check',
    # Sharing
    'share_list',
    'list_shares',
    'share_revoke',
    # Auth
    'current_user',
    # Errors
    'error_404',
    'error_500',
    # Health
    'health_check',
    'liveness_check',
    'readiness_check',
    'metrics',
]
