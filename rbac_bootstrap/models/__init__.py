# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Database models package."""

from rbac_bootstrap.models.base import (
    Base,
    EntityMixin,
    SoftDeleteMixin,
    TimestampMixin,
    utcnow,
)
from rbac_bootstrap.models.permission import Permission
from rbac_bootstrap.models.role import Role
from rbac_bootstrap.models.role_permission import RolePermission
from rbac_bootstrap.models.user import User
from rbac_bootstrap.models.user_role import UserRole

__all__ = [
    "Base",
    "EntityMixin",
    "Permission",
    "Role",
    "RolePermission",
    "SoftDeleteMixin",
    "TimestampMixin",
    "User",
    "UserRole",
    "utcnow",
]
