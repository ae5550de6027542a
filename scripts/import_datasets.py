"""
Bulk import dataset catalog entries from a CSV file
"""

import argparse
import asyncio
import logging
import sys
import os

# Add current directory to path to allow imports from core, models, etc.
sys.path.append(os.getcwd())

from catalog.importer import DatasetImporter
from core.database import create_engine_from_settings, create_session_factory, session_scope
from core.exceptions import CatalogException
from core.logging import setup_logging

logger = logging.getLogger(__name__)


async def run_import(file_path: str, batch_size: int = None):
    engine = create_engine_from_settings()
    try:
        async with session_scope(create_session_factory(engine)) as session:
            importer = DatasetImporter(session, batch_size=batch_size)
            result = await importer.import_csv(file_path)
    finally:
        await engine.dispose()

    for error in result.errors:
        logger.warning(error)
    return result


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("file_path", help="CSV file with one dataset per row")
    parser.add_argument("--batch-size", type=int, default=None)
    args = parser.parse_args()

    setup_logging()
    try:
        asyncio.run(run_import(args.file_path, args.batch_size))
    except CatalogException as e:
        logger.error(str(e))
        sys.exit(1)
