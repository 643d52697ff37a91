"""
Core models for the retail back office.
"""

from enum import IntEnum

from django.contrib.auth.models import AbstractUser
from django.db import models


class RoleLevel(IntEnum):
    """
    Ordered access levels.

    Comparing two levels is a plain integer comparison, so
    ``user.role_level >= RoleLevel.ADMIN`` reads the way it should.
    """

    OPERATOR = 1
    ADMIN = 2
    SUPER_ADMIN = 3


class User(AbstractUser):
    """
    Back office user with a role used to gate access to operations.

    Authentication itself is handled by Django; this model only adds
    the role that the access gate compares against.
    """

    # Role choices
    OPERATOR = "operator"
    ADMIN = "admin"
    SUPER_ADMIN = "super-admin"

    ROLE_CHOICES = [
        (OPERATOR, "Operator"),
        (ADMIN, "Administrator"),
        (SUPER_ADMIN, "Super Administrator"),
    ]

    ROLE_LEVELS = {
        OPERATOR: RoleLevel.OPERATOR,
        ADMIN: RoleLevel.ADMIN,
        SUPER_ADMIN: RoleLevel.SUPER_ADMIN,
    }

    role = models.CharField(
        max_length=20,
        choices=ROLE_CHOICES,
        default=OPERATOR,
        help_text="User's role in the back office",
    )

    class Meta:
        db_table = "users"
        ordering = ["username"]
        verbose_name = "User"
        verbose_name_plural = "Users"
        indexes = [
            models.Index(fields=["role"], name="user_role_idx"),
        ]

    def __str__(self):
        return f"{self.username} ({self.get_role_display()})"

    @property
    def role_level(self):
        """Return the ordered level of this user's role."""
        return self.ROLE_LEVELS[self.role]

    def has_role_level(self, minimum):
        """Check if the user's role is at least ``minimum``."""
        return self.role_level >= minimum

    def is_admin(self):
        """Check if user is an administrator or above."""
        return self.has_role_level(RoleLevel.ADMIN)
