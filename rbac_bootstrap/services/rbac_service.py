# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Persistence operations on the RBAC tables.

Every function takes the session explicitly and never commits; transaction
boundaries belong to the caller. Lookups return ``None`` for "not found" and
raise ``PersistenceError`` for anything else.
"""

import logging
from collections.abc import Sequence
from typing import Any, TypeVar

from sqlalchemy import delete, insert, inspect, select
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import InstrumentedAttribute, Session

from rbac_bootstrap.models import (
    Base,
    Permission,
    Role,
    RolePermission,
    User,
    UserRole,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class PersistenceError(Exception):
    """A store operation failed for a reason other than "not found"."""

    def __init__(self, entity: str, operation: str, key: Any = None) -> None:
        self.entity = entity
        self.operation = operation
        self.key = key
        target = entity if key is None else f"{entity} {key!r}"
        super().__init__(f"failed to {operation} {target}")


def _find_active(
    db: Session,
    model: type[ModelT],
    field: InstrumentedAttribute,
    value: Any,
    entity: str,
) -> ModelT | None:
    """Find the non-deleted row whose unique ``field`` equals ``value``."""
    try:
        return db.scalars(
            select(model).where(field == value, model.deleted_at.is_(None))
        ).first()
    except SQLAlchemyError as e:
        raise PersistenceError(entity, "lookup", value) from e


def _row_values(entity: Base) -> dict[str, Any]:
    mapper = inspect(type(entity))
    return {
        attr.columns[0].name: getattr(entity, attr.key)
        for attr in mapper.column_attrs
    }


def _insert_ignoring_conflict(db: Session, entity: Base) -> None:
    """Insert a row, treating a unique-key conflict as "already exists".

    PostgreSQL and SQLite use ``ON CONFLICT DO NOTHING``; other backends
    fall back to a savepoint that absorbs the ``IntegrityError``.
    """
    table = type(entity).__table__
    values = _row_values(entity)
    dialect = db.get_bind().dialect.name

    if dialect == "postgresql":
        db.execute(postgresql_insert(table).values(values).on_conflict_do_nothing())
    elif dialect == "sqlite":
        db.execute(sqlite_insert(table).values(values).on_conflict_do_nothing())
    else:
        try:
            with db.begin_nested():
                db.execute(insert(table).values(values))
        except IntegrityError:
            logger.debug(f"Row already present in {table.name}, keeping existing one")


def _create(
    db: Session,
    entity: ModelT,
    field: InstrumentedAttribute,
    value: Any,
    label: str,
) -> ModelT:
    try:
        _insert_ignoring_conflict(db, entity)
    except SQLAlchemyError as e:
        raise PersistenceError(label, "insert", value) from e

    # Re-read so a row inserted concurrently by someone else is returned
    created = _find_active(db, type(entity), field, value, label)
    if created is None:
        raise PersistenceError(label, "insert", value)
    return created


def get_permission_by_name(db: Session, name: str) -> Permission | None:
    """Get a non-deleted permission by its name."""
    return _find_active(db, Permission, Permission.name, name, "permission")


def get_role_by_name(db: Session, name: str) -> Role | None:
    """Get a non-deleted role by its name."""
    return _find_active(db, Role, Role.name, name, "role")


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a non-deleted user by email."""
    return _find_active(db, User, User.email, email, "user")


def list_permissions(db: Session) -> list[Permission]:
    """Get every non-deleted permission, ordered by name."""
    try:
        return list(
            db.scalars(
                select(Permission)
                .where(Permission.deleted_at.is_(None))
                .order_by(Permission.name)
            )
        )
    except SQLAlchemyError as e:
        raise PersistenceError("permission", "fetch") from e


def create_permission(
    db: Session, name: str, description: str | None = None
) -> Permission:
    """Create a permission, or return the one that already holds ``name``."""
    permission = Permission.new(name=name, description=description)
    return _create(db, permission, Permission.name, name, "permission")


def create_role(db: Session, name: str, description: str | None = None) -> Role:
    """Create a role, or return the one that already holds ``name``."""
    role = Role.new(name=name, description=description)
    return _create(db, role, Role.name, name, "role")


def create_user(
    db: Session,
    email: str,
    password_hash: str,
    first_name: str | None = None,
    last_name: str | None = None,
    active: bool = True,
) -> User:
    """Create a user, or return the one that already holds ``email``.

    ``password_hash`` must already be a hash; this function never hashes.
    """
    user = User.new(
        email=email,
        password_hash=password_hash,
        first_name=first_name,
        last_name=last_name,
        active=active,
    )
    return _create(db, user, User.email, email, "user")


def replace_role_permissions(
    db: Session, role: Role, permissions: Sequence[Permission]
) -> None:
    """Make the role's permission set exactly ``permissions``.

    This is a full replace: grants not in ``permissions`` are removed.
    """
    permission_ids = {permission.id for permission in permissions}
    try:
        db.execute(
            delete(RolePermission)
            .where(RolePermission.role_id == role.id)
            .execution_options(synchronize_session="fetch")
        )
        db.add_all(
            RolePermission.new(role_id=role.id, permission_id=permission_id)
            for permission_id in permission_ids
        )
        db.flush()
    except SQLAlchemyError as e:
        raise PersistenceError("role permissions", "associate", role.name) from e
    db.expire(role, ["permissions"])
    logger.info(f"Role '{role.name}' now holds {len(permission_ids)} permissions")


def replace_user_roles(db: Session, user: User, roles: Sequence[Role]) -> None:
    """Make the user's role set exactly ``roles`` (full replace)."""
    role_ids = {role.id for role in roles}
    try:
        db.execute(
            delete(UserRole)
            .where(UserRole.user_id == user.id)
            .execution_options(synchronize_session="fetch")
        )
        db.add_all(
            UserRole.new(user_id=user.id, role_id=role_id) for role_id in role_ids
        )
        db.flush()
    except SQLAlchemyError as e:
        raise PersistenceError("user roles", "associate", user.email) from e
    db.expire(user, ["roles"])
    logger.info(f"User '{user.email}' now holds {len(role_ids)} roles")


def get_role_permissions(db: Session, role: Role) -> list[Permission]:
    """Get the non-deleted permissions granted to a role."""
    try:
        return list(
            db.scalars(
                select(Permission)
                .join(RolePermission, RolePermission.permission_id == Permission.id)
                .where(
                    RolePermission.role_id == role.id,
                    Permission.deleted_at.is_(None),
                )
                .order_by(Permission.name)
            )
        )
    except SQLAlchemyError as e:
        raise PersistenceError("role permissions", "fetch", role.name) from e


def get_user_roles(db: Session, user: User) -> list[Role]:
    """Get the non-deleted roles assigned to a user."""
    try:
        return list(
            db.scalars(
                select(Role)
                .join(UserRole, UserRole.role_id == Role.id)
                .where(UserRole.user_id == user.id, Role.deleted_at.is_(None))
                .order_by(Role.name)
            )
        )
    except SQLAlchemyError as e:
        raise PersistenceError("user roles", "fetch", user.email) from e
