# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Tests for RBAC database models."""

import uuid

import pytest
from sqlalchemy.exc import IntegrityError

from rbac_bootstrap.models import Permission, Role, RolePermission, User, UserRole


class TestEntityFactory:
    """Tests for the explicit entity factories."""

    def test_new_assigns_id_and_timestamps(self):
        """Test that new() returns a fully initialized entity."""
        permission = Permission.new(name="user:read", description="Can read users")

        assert isinstance(permission.id, uuid.UUID)
        assert permission.created_at is not None
        assert permission.created_at == permission.updated_at
        assert permission.created_at.tzinfo is not None
        assert permission.deleted_at is None
        assert permission.is_deleted is False

    def test_new_ids_are_unique(self):
        """Test that every factory call gets its own identifier."""
        first = Role.new(name="a")
        second = Role.new(name="b")
        assert first.id != second.id

    def test_soft_delete_sets_marker(self):
        """Test that soft_delete marks the row without removing it."""
        role = Role.new(name="temp")
        role.soft_delete()
        assert role.is_deleted is True
        assert role.updated_at == role.deleted_at

    def test_association_factories_stamp_created_at(self):
        """Test that association rows carry a creation time."""
        role_id, permission_id, user_id = uuid.uuid4(), uuid.uuid4(), uuid.uuid4()

        role_permission = RolePermission.new(
            role_id=role_id, permission_id=permission_id
        )
        user_role = UserRole.new(user_id=user_id, role_id=role_id)

        assert role_permission.created_at is not None
        assert user_role.created_at is not None
        assert user_role.role_id == role_id


class TestUniqueness:
    """Tests for uniqueness among non-deleted rows."""

    def test_permission_name_unique(self, db_session):
        """Test that two live permissions cannot share a name."""
        db_session.add(Permission.new(name="user:read"))
        db_session.commit()

        db_session.add(Permission.new(name="user:read"))
        with pytest.raises(IntegrityError):
            db_session.commit()

    def test_deleted_row_frees_name(self, db_session):
        """Test that a soft-deleted role does not block its name."""
        old = Role.new(name="admin")
        old.soft_delete()
        db_session.add(old)
        db_session.commit()

        db_session.add(Role.new(name="admin"))
        db_session.commit()

        assert db_session.query(Role).filter(Role.name == "admin").count() == 2

    def test_user_email_unique(self, db_session):
        """Test that two live users cannot share an email."""
        db_session.add(
            User.new(email="dup@example.com", password_hash="h", active=True)
        )
        db_session.commit()

        db_session.add(
            User.new(email="dup@example.com", password_hash="h", active=True)
        )
        with pytest.raises(IntegrityError):
            db_session.commit()

    def test_role_permission_pair_unique(self, db_session):
        """Test that the same grant cannot be stored twice."""
        role = Role.new(name="admin")
        permission = Permission.new(name="user:read")
        db_session.add_all([role, permission])
        db_session.flush()
        role_id, permission_id = role.id, permission.id

        db_session.add(RolePermission.new(role_id=role_id, permission_id=permission_id))
        db_session.commit()
        db_session.expunge_all()

        db_session.add(RolePermission.new(role_id=role_id, permission_id=permission_id))
        with pytest.raises(IntegrityError):
            db_session.commit()

    def test_relationships_read_associations(self, db_session):
        """Test the read-only many-to-many views."""
        role = Role.new(name="admin")
        permission = Permission.new(name="user:read")
        user = User.new(email="u@example.com", password_hash="h", active=True)
        db_session.add_all([role, permission, user])
        db_session.flush()
        db_session.add_all(
            [
                RolePermission.new(role_id=role.id, permission_id=permission.id),
                UserRole.new(user_id=user.id, role_id=role.id),
            ]
        )
        db_session.commit()

        assert [p.name for p in role.permissions] == ["user:read"]
        assert [r.name for r in user.roles] == ["admin"]
        assert [u.email for u in role.users] == ["u@example.com"]
        assert [r.name for r in permission.roles] == ["admin"]
