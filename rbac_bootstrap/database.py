# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Database engine and session factory."""

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import sessionmaker

from rbac_bootstrap.config import Settings


def create_db_engine(config: Settings) -> Engine:
    """Create an engine for the configured database.

    SQLite uses the default pool; server databases get a bounded pool.
    """
    if config.is_sqlite:
        return create_engine(
            config.database_url,
            connect_args={"check_same_thread": False},
        )
    return create_engine(
        config.database_url,
        pool_size=config.db_pool_size,
        max_overflow=config.db_max_overflow,
        pool_pre_ping=True,
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    """Create a session factory bound to ``engine``."""
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)
