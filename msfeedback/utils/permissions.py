"""
Capability checks.

A principal is either a ``User`` (admin session) or an ``ExternalSystem``
(partner API key). ``can`` is the single place that decides whether a
principal may perform an action.
"""

from functools import wraps
from flask import g

from msfeedback.utils.enums import Permission
from msfeedback.utils.http import error

FEEDBACK_CREATE = "feedback:create"
FEEDBACK_UPDATE = "feedback:update"
FEEDBACK_DELETE = "feedback:delete"
FEEDBACK_PROCESS = "feedback:process"
CATEGORY_MANAGE = "category:manage"
USER_MANAGE = "user:manage"

ADMIN_ACTIONS = frozenset({
    FEEDBACK_CREATE,
    FEEDBACK_UPDATE,
    FEEDBACK_DELETE,
    FEEDBACK_PROCESS,
    CATEGORY_MANAGE,
    USER_MANAGE,
    Permission.FEEDBACK_QUERY.value,
    Permission.STATS_VIEW.value,
})


def can(principal, action: str) -> bool:
    from msfeedback.models.user import User
    from msfeedback.models.external_system import ExternalSystem

    if principal is None:
        return False
    if isinstance(principal, User):
        return principal.is_active and action in ADMIN_ACTIONS
    if isinstance(principal, ExternalSystem):
        return bool(principal.status) and principal.has_permission(action)
    return False


def require_capability(action: str):
    """Must be stacked under ``require_auth`` so ``g.current_user`` is set."""
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            if not can(g.get("current_user"), action):
                return error("FORBIDDEN", f"Not allowed to perform {action}", 403)
            return f(*args, **kwargs)
        return wrapper
    return decorator
