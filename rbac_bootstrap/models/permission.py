# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rbac_bootstrap.models.base import Base, EntityMixin, active_unique_index

if TYPE_CHECKING:
    from rbac_bootstrap.models.role import Role


class Permission(Base, EntityMixin):
    """A named capability that can be granted to roles."""

    __tablename__ = "permissions"
    __table_args__ = (active_unique_index("permissions", "name"),)

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(String(200), nullable=True)

    roles: Mapped[list[Role]] = relationship(
        "Role",
        secondary="role_permissions",
        back_populates="permissions",
        viewonly=True,
    )

    def __repr__(self) -> str:
        return f"<Permission {self.name}>"
