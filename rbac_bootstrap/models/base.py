# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Declarative base and shared column mixins.

Identifiers and timestamps are assigned by the explicit factory
``EntityMixin.new`` rather than by column defaults or ORM events, so a
freshly built entity is fully initialized before it reaches the session.
"""

from __future__ import annotations

import uuid as uuid_lib
from datetime import UTC, datetime
from typing import Any, Self

from sqlalchemy import DateTime, Index, Uuid, text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Declarative base for all RBAC models."""


class TimestampMixin:
    """Creation and last-modification timestamps."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )


class SoftDeleteMixin:
    """Soft-delete marker; a non-null value means logically deleted."""

    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, index=True
    )

    @property
    def is_deleted(self) -> bool:
        """Check if the row has been soft-deleted."""
        return self.deleted_at is not None

    def soft_delete(self) -> None:
        """Mark the row as deleted while keeping it physically."""
        now = utcnow()
        self.deleted_at = now
        self.updated_at = now


class EntityMixin(TimestampMixin, SoftDeleteMixin):
    """Columns shared by every primary entity."""

    id: Mapped[uuid_lib.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)

    @classmethod
    def new(cls, **fields: Any) -> Self:
        """Build a new entity with a fresh identifier and timestamps."""
        now = utcnow()
        return cls(id=uuid_lib.uuid4(), created_at=now, updated_at=now, **fields)


def active_unique_index(table: str, column: str) -> Index:
    """Unique index on ``column`` that only covers non-deleted rows."""
    return Index(
        f"uq_{table}_{column}_active",
        column,
        unique=True,
        postgresql_where=text("deleted_at IS NULL"),
        sqlite_where=text("deleted_at IS NULL"),
    )
