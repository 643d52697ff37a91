"""
Access gate for back office operations.

Every public service operation starts with :func:`require_role`, which
resolves the caller and compares its role level against the minimum the
operation needs.
"""

import logging

from django.core.exceptions import ValidationError

from .exceptions import WithoutPermission
from .models import RoleLevel, User

logger = logging.getLogger(__name__)


def resolve_caller(caller_id):
    """
    Resolve a caller id to an active user.

    Returns:
        The User, or None when the id does not match an active user.
    """
    if caller_id is None:
        return None

    try:
        return User.objects.filter(pk=caller_id, is_active=True).first()
    except (ValueError, TypeError, ValidationError):
        # Ids of the wrong shape cannot match any user
        return None


def require_role(caller_id, minimum=RoleLevel.OPERATOR):
    """
    Ensure the caller exists and holds at least ``minimum``.

    Raises:
        WithoutPermission: If the caller is unknown or its role is too low
    """
    user = resolve_caller(caller_id)

    if user is None:
        logger.warning("Rejected unknown caller %r", caller_id)
        raise WithoutPermission()

    if not user.has_role_level(minimum):
        logger.warning(
            "Rejected caller %s: role %s is below %s", user.pk, user.role, RoleLevel(minimum).name
        )
        raise WithoutPermission()

    return user
