"""
Permission classes for role-based access control on the REST API.
"""

from rest_framework import permissions

from .models import RoleLevel


class HasRoleLevel(permissions.BasePermission):
    """
    Permission class to ensure the authenticated user holds a minimum role.

    Views set ``minimum_role_level``; it defaults to operator, the lowest level.
    """

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False

        minimum = getattr(view, "minimum_role_level", RoleLevel.OPERATOR)
        return user.has_role_level(minimum)