# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""create rbac tables

Revision ID: 0001_rbac_schema
Revises:
Create Date: 2025-12-20

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0001_rbac_schema"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

ACTIVE_ONLY = sa.text("deleted_at IS NULL")


def _entity_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    ]


def _create_active_unique_index(table: str, column: str) -> None:
    # Uniqueness only applies to rows that are not soft-deleted
    op.create_index(
        f"uq_{table}_{column}_active",
        table,
        [column],
        unique=True,
        postgresql_where=ACTIVE_ONLY,
        sqlite_where=ACTIVE_ONLY,
    )


def upgrade() -> None:
    op.create_table(
        "permissions",
        *_entity_columns(),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.String(length=200), nullable=True),
    )
    op.create_table(
        "roles",
        *_entity_columns(),
        sa.Column("name", sa.String(length=50), nullable=False),
        sa.Column("description", sa.String(length=200), nullable=True),
    )
    op.create_table(
        "users",
        *_entity_columns(),
        sa.Column("email", sa.String(length=100), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("first_name", sa.String(length=50), nullable=True),
        sa.Column("last_name", sa.String(length=50), nullable=True),
        sa.Column("active", sa.Boolean(), nullable=False),
    )
    for table in ("permissions", "roles", "users"):
        op.create_index(f"ix_{table}_deleted_at", table, ["deleted_at"])
    _create_active_unique_index("permissions", "name")
    _create_active_unique_index("roles", "name")
    _create_active_unique_index("users", "email")

    op.create_table(
        "role_permissions",
        sa.Column(
            "role_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("roles.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "permission_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("permissions.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("role_id", "permission_id"),
    )
    op.create_table(
        "user_roles",
        sa.Column(
            "user_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "role_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("roles.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("user_id", "role_id"),
    )


def downgrade() -> None:
    op.drop_table("user_roles")
    op.drop_table("role_permissions")
    for table, column in (
        ("users", "email"),
        ("roles", "name"),
        ("permissions", "name"),
    ):
        op.drop_index(f"uq_{table}_{column}_active", table_name=table)
        op.drop_index(f"ix_{table}_deleted_at", table_name=table)
    op.drop_table("users")
    op.drop_table("roles")
    op.drop_table("permissions")
