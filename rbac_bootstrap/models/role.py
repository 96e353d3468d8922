# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rbac_bootstrap.models.base import Base, EntityMixin, active_unique_index

if TYPE_CHECKING:
    from rbac_bootstrap.models.permission import Permission
    from rbac_bootstrap.models.user import User


class Role(Base, EntityMixin):
    """Model representing a role and the permissions it grants.

    Association rows are written through ``rbac_service``; the relationships
    here are read-only views.
    """

    __tablename__ = "roles"
    __table_args__ = (active_unique_index("roles", "name"),)

    name: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[str | None] = mapped_column(String(200), nullable=True)

    permissions: Mapped[list[Permission]] = relationship(
        "Permission",
        secondary="role_permissions",
        back_populates="roles",
        viewonly=True,
    )
    users: Mapped[list[User]] = relationship(
        "User",
        secondary="user_roles",
        back_populates="roles",
        viewonly=True,
    )

    def __repr__(self) -> str:
        return f"<Role {self.name}>"
