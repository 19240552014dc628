"""
Load the JSON artifact into the SQLite store
"""

import asyncio
import logging
import sys

from core.config import settings
from core.exceptions import ETLException
from core.logging import setup_logging
from ingestion.runner import LoadRunner

logger = logging.getLogger(__name__)


async def import_names():
    runner = LoadRunner(
        database_path=settings.DATABASE_PATH,
        artifact_path=settings.ARTIFACT_PATH,
        progress_interval=settings.PROGRESS_INTERVAL,
        notes=settings.IMPORT_NOTES,
        extension=settings.SOURCE_EXTENSION
    )
    return await runner.run()


def main():
    setup_logging()

    try:
        asyncio.run(import_names())
    except ETLException as e:
        logger.error(f"Error during import: {e.message}")
        sys.exit(1)


if __name__ == "__main__":
    main()
