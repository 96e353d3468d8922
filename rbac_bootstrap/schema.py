# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Schema management using Alembic."""

import logging
from pathlib import Path

from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy import create_engine

from alembic import command

logger = logging.getLogger(__name__)

MIGRATIONS_PATH = Path(__file__).resolve().parent / "migrations"


class SchemaMigrator:
    """Brings the RBAC tables and their unique constraints up to date.

    Must run before the RBAC seed.
    """

    def __init__(self, database_url: str) -> None:
        """Initialize the migrator.

        Args:
            database_url: SQLAlchemy URL of the target database
        """
        self.database_url = database_url

    def get_alembic_config(self) -> Config:
        """Create the Alembic config pointing at the bundled migrations."""
        alembic_cfg = Config()
        alembic_cfg.set_main_option("script_location", str(MIGRATIONS_PATH))
        # ConfigParser interpolation treats % specially
        alembic_cfg.set_main_option(
            "sqlalchemy.url", self.database_url.replace("%", "%%")
        )
        return alembic_cfg

    def current_revision(self) -> str | None:
        """Return the revision the database is currently at."""
        engine = create_engine(self.database_url)
        try:
            with engine.connect() as conn:
                return MigrationContext.configure(conn).get_current_revision()
        finally:
            engine.dispose()

    def apply(self) -> str | None:
        """Upgrade the schema to head.

        Returns:
            The head revision if an upgrade ran, None if already current
        """
        alembic_cfg = self.get_alembic_config()
        head_rev = ScriptDirectory.from_config(alembic_cfg).get_current_head()
        current_rev = self.current_revision()

        if current_rev == head_rev:
            logger.debug(f"Schema up to date (at {current_rev})")
            return None

        logger.info(f"Upgrading schema ({current_rev} -> {head_rev})")
        try:
            command.upgrade(alembic_cfg, "head")
        except Exception as e:
            logger.error(f"Schema upgrade failed: {e}")
            raise
        logger.info(f"Schema upgraded to {head_rev}")
        return head_rev
