"""
Run the insert / query / filter / update / delete walkthrough against
the configured database
"""

import asyncio
import logging
import sys
import os

# Add current directory to path to allow imports from core, models, etc.
sys.path.append(os.getcwd())

from catalog.walkthrough import run_walkthrough
from core.database import (
    create_engine_from_settings,
    create_session_factory,
    init_models,
    session_scope,
)
from core.exceptions import CatalogException
from core.logging import setup_logging

logger = logging.getLogger(__name__)


async def main():
    # Engine
    engine = create_engine_from_settings()
    try:
        # Tables
        await init_models(engine)

        # Session: closed on exit of the block
        async with session_scope(create_session_factory(engine)) as session:
            report = await run_walkthrough(session)

        logger.info(f"Remaining datasets: {report.remaining_filenames}")
    finally:
        await engine.dispose()


if __name__ == "__main__":
    setup_logging()
    try:
        asyncio.run(main())
    except CatalogException as e:
        logger.error(str(e))
        sys.exit(1)
