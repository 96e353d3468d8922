# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Startup sequence: apply the schema, then seed access control."""

import logging

from rbac_bootstrap.config import Settings
from rbac_bootstrap.database import create_db_engine, create_session_factory
from rbac_bootstrap.schema import SchemaMigrator
from rbac_bootstrap.security import PasswordPolicy
from rbac_bootstrap.services.rbac_seed_service import seed_rbac_data

logger = logging.getLogger(__name__)


def bootstrap_access_control(config: Settings) -> None:
    """Prepare the RBAC store before any request is served.

    Any exception is fatal to startup and propagates unchanged.
    """
    SchemaMigrator(config.database_url).apply()

    engine = create_db_engine(config)
    session_factory = create_session_factory(engine)
    try:
        with session_factory() as db:
            seed_rbac_data(db, PasswordPolicy(cost=config.password_hash_cost))
    finally:
        engine.dispose()
    logger.info("Access control bootstrap finished")
