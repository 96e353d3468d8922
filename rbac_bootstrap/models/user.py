# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""User account model."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rbac_bootstrap.models.base import Base, EntityMixin, active_unique_index

if TYPE_CHECKING:
    from rbac_bootstrap.models.role import Role


class User(Base, EntityMixin):
    """User account holding a bcrypt credential hash, never a plaintext."""

    __tablename__ = "users"
    __table_args__ = (active_unique_index("users", "email"),)

    email: Mapped[str] = mapped_column(String(100), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    first_name: Mapped[str | None] = mapped_column(String(50), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(50), nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False)

    # Relationships
    roles: Mapped[list[Role]] = relationship(
        "Role",
        secondary="user_roles",
        back_populates="users",
        viewonly=True,
    )

    def __repr__(self) -> str:
        return f"<User {self.email}>"
