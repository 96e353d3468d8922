# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Application settings loaded from environment variables and .env."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration.

    Every field can be overridden by an environment variable of the same
    name in upper case (e.g. ``DATABASE_URL``).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "rbac-bootstrap"
    database_url: str = "sqlite:///./rbac.db"
    db_pool_size: int = Field(default=10, ge=1)
    db_max_overflow: int = Field(default=90, ge=0)
    # bcrypt work factor used for newly minted hashes
    password_hash_cost: int = Field(default=12, ge=4, le=31)
    log_level: str = "INFO"

    @property
    def is_sqlite(self) -> bool:
        """Return True when the configured database is SQLite."""
        return self.database_url.startswith("sqlite")


settings = Settings()
