"""
Database engine management with SQLAlchemy
"""

from typing import Optional
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from core.config import settings
import logging

logger = logging.getLogger(__name__)


def get_engine(database_url: Optional[str] = None) -> Engine:
    """
    Create an engine for the store being exported.

    The engine is only used for reads; every export opens its own
    connection from it (see SQLAlchemyStore).
    """
    url = database_url or settings.DATABASE_URL
    logger.debug(f"Creating engine for {url}")
    return create_engine(
        url,
        echo=settings.ENVIRONMENT == "development" and settings.LOG_LEVEL.upper() == "DEBUG",
        future=True
    )
