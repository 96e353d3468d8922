# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.concurrency import run_in_threadpool

from rbac_bootstrap import __version__
from rbac_bootstrap.config import settings
from rbac_bootstrap.startup import bootstrap_access_control

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup and shutdown events."""
    # Startup: the store must be seeded before serving, so failures are fatal.
    # bcrypt is CPU bound, keep it off the event loop.
    logger.info("Bootstrapping access control...")
    try:
        await run_in_threadpool(bootstrap_access_control, settings)
    except Exception as e:
        logger.error(f"Access control bootstrap failed, refusing to start: {e}")
        raise

    yield

    logger.info("Shutting down...")


app = FastAPI(
    title=settings.app_name,
    description="Role-based access control bootstrap service",
    version=__version__,
    lifespan=lifespan,
)


@app.get("/health")
def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "healthy"}
