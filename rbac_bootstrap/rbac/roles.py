# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Default roles and the default administrator account."""

ADMIN_ROLE = {
    "name": "admin",
    "description": "System administrator with full access",
}

# Baseline role for later assignment; the seeder does not wire it
USER_ROLE = {
    "name": "user",
    "description": "Regular user with limited access",
}

DEFAULT_ROLES = [ADMIN_ROLE, USER_ROLE]

# The default credential must be rotated after first login
DEFAULT_ADMIN_EMAIL = "admin@example.com"
DEFAULT_ADMIN_PASSWORD = "Admin@123!"  # nosec  # noqa: S105
DEFAULT_ADMIN_FIRST_NAME = "Admin"
DEFAULT_ADMIN_LAST_NAME = "User"
