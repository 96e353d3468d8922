# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
from __future__ import annotations

import uuid as uuid_lib
from datetime import datetime
from typing import Self

from sqlalchemy import DateTime, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from rbac_bootstrap.models.base import Base, utcnow


class UserRole(Base):
    """Association between a user and a role assigned to it."""

    __tablename__ = "user_roles"

    user_id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    role_id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("roles.id", ondelete="CASCADE"),
        primary_key=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )

    @classmethod
    def new(cls, user_id: uuid_lib.UUID, role_id: uuid_lib.UUID) -> Self:
        """Build an association row stamped with the current time."""
        return cls(user_id=user_id, role_id=role_id, created_at=utcnow())
