"""Application lifespan: startup and shutdown.

Only wiring of infrastructure (logging, DB engine dispose); no business logic.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from backoffice.core.config import get_settings
from backoffice.infrastructure.persistence.database import dispose_engine
from backoffice.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging on startup; dispose the SQL engine on shutdown."""
    settings = get_settings()
    setup_logging()
    logger.info("%s %s starting", settings.app_name, settings.app_version)

    yield

    await dispose_engine()
    logger.info("%s stopped", settings.app_name)
