# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from rbac_bootstrap.models import Base
from rbac_bootstrap.security import PasswordPolicy

# Lowest bcrypt cost keeps hashing fast in tests
TEST_HASH_COST = 4


@pytest.fixture(scope="function")
def database_url(tmp_path) -> str:
    """URL of a fresh SQLite file for the current test."""
    return f"sqlite:///{tmp_path / 'test.db'}"


@pytest.fixture(scope="function")
def engine(database_url):
    """Engine with all RBAC tables created."""
    engine = create_engine(database_url, connect_args={"check_same_thread": False})
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture(scope="function")
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session(session_factory):
    """Create a fresh database session for each test."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def password_policy() -> PasswordPolicy:
    """Password policy with a cheap work factor."""
    return PasswordPolicy(cost=TEST_HASH_COST)
