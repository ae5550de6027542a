"""
Create the catalog database (CREATE DATABASE) and its tables
"""

import asyncio
import logging
import sys
import os

# Add current directory to path to allow imports from core, models, etc.
sys.path.append(os.getcwd())

from core.database import create_database, create_engine_from_settings, init_models
from core.exceptions import CatalogException
from core.logging import setup_logging

logger = logging.getLogger(__name__)


async def init_database():
    await create_database()

    logger.info("Connecting to database...")
    engine = create_engine_from_settings()
    try:
        await init_models(engine)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    setup_logging()
    try:
        asyncio.run(init_database())
    except CatalogException as e:
        logger.error(str(e))
        sys.exit(1)
