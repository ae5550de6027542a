"""
Logging setup for scripts and the API process
"""

import logging
import sys
from typing import Optional
from core.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def setup_logging(level: Optional[str] = None, sql_echo: Optional[bool] = None):
    """
    Route catalog logs to stdout.

    ``level`` and ``sql_echo`` override ``settings.LOG_LEVEL`` and
    ``settings.SQL_ECHO``. Unknown level names fall back to INFO.
    """
    level_name = (level or settings.LOG_LEVEL).upper()
    log_level = getattr(logging, level_name, logging.INFO)
    echo = settings.SQL_ECHO if sql_echo is None else sql_echo

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Emitted SQL is only shown when SQL_ECHO is on
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if echo else logging.WARNING)
    logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)

    logging.getLogger("catalog").debug(f"Catalog logging ready (level={level_name}, sql_echo={echo})")
