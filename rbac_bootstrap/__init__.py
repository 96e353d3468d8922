# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Role-based access control bootstrap for service startup."""

__version__ = "0.1.0"
