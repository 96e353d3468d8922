# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Idempotent, all-or-nothing seeding of the RBAC tables."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from rbac_bootstrap.rbac.permissions import CORE_PERMISSIONS
from rbac_bootstrap.rbac.roles import (
    ADMIN_ROLE,
    DEFAULT_ADMIN_EMAIL,
    DEFAULT_ADMIN_FIRST_NAME,
    DEFAULT_ADMIN_LAST_NAME,
    DEFAULT_ADMIN_PASSWORD,
    DEFAULT_ROLES,
)
from rbac_bootstrap.security import PasswordError, PasswordPolicy

from . import rbac_service
from .rbac_service import PersistenceError

logger = logging.getLogger(__name__)


class TransactionError(Exception):
    """Seeding failed and every write of the run was rolled back.

    The original failure is available as ``__cause__``.
    """


def seed_rbac_data(db: Session, password_policy: PasswordPolicy | None = None) -> None:
    """Seeds the database with the permission catalog, default roles and admin.

    This function is idempotent: every run converges to the same state, and
    the admin role and admin user associations are fully replaced, not
    merged. It either commits everything or rolls back everything.
    @param db: SQLAlchemy Session object, used only for this call
    @param password_policy: policy used to hash the default admin password
    """
    policy = password_policy or PasswordPolicy()

    try:
        _seed(db, policy)
        try:
            db.commit()
        except SQLAlchemyError as e:
            raise PersistenceError("rbac seed", "commit") from e
    except (PersistenceError, PasswordError) as e:
        db.rollback()
        logger.error(f"RBAC seeding aborted, all changes rolled back: {e}")
        raise TransactionError(f"RBAC seeding failed: {e}") from e
    except Exception:
        db.rollback()
        raise

    logger.info(f"RBAC seeding complete, admin account: {DEFAULT_ADMIN_EMAIL}")
    logger.info("Please change the default admin password after first login")


def _seed(db: Session, policy: PasswordPolicy) -> None:
    # Seed permissions
    for perm_data in CORE_PERMISSIONS:
        permission = rbac_service.get_permission_by_name(db, perm_data["name"])
        if permission is None:
            rbac_service.create_permission(db, **perm_data)
            logger.info(f"Added default permission: {perm_data['name']}")
        else:
            logger.debug(f"Permission already present: {perm_data['name']}")

    # Seed roles, keeping the admin row
    admin_role = None
    for role_data in DEFAULT_ROLES:
        role = rbac_service.get_role_by_name(db, role_data["name"])
        if role is None:
            role = rbac_service.create_role(db, **role_data)
            logger.info(f"Added default role: {role_data['name']}")
        if role_data["name"] == ADMIN_ROLE["name"]:
            admin_role = role

    # Admin always holds every permission in the store
    all_permissions = rbac_service.list_permissions(db)
    rbac_service.replace_role_permissions(db, admin_role, all_permissions)

    # Seed the default admin account
    admin_user = rbac_service.get_user_by_email(db, DEFAULT_ADMIN_EMAIL)
    if admin_user is None:
        admin_user = rbac_service.create_user(
            db,
            email=DEFAULT_ADMIN_EMAIL,
            password_hash=policy.hash(DEFAULT_ADMIN_PASSWORD),
            first_name=DEFAULT_ADMIN_FIRST_NAME,
            last_name=DEFAULT_ADMIN_LAST_NAME,
            active=True,
        )
        logger.info(f"Created default admin user: {DEFAULT_ADMIN_EMAIL}")

    rbac_service.replace_user_roles(db, admin_user, [admin_role])
