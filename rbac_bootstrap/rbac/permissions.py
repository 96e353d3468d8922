# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Canonical permission catalog, seeded in this order."""

CORE_PERMISSIONS = [
    # User management
    {"name": "user:create", "description": "Can create users"},
    {"name": "user:read", "description": "Can read users"},
    {"name": "user:update", "description": "Can update users"},
    {"name": "user:delete", "description": "Can delete users"},
    # Role management
    {"name": "role:create", "description": "Can create roles"},
    {"name": "role:read", "description": "Can read roles"},
    {"name": "role:update", "description": "Can update roles"},
    {"name": "role:delete", "description": "Can delete roles"},
    # Permission catalog
    {"name": "permission:read", "description": "Can read permissions"},
]
