import asyncio
import logging
import sys

from core.config import settings
from core.database import default_database_url, store_connection
from core.exceptions import SchemaError
from core.logging import setup_logging
from ingestion.loaders.sqlite_loader import SQLiteLoader

logger = logging.getLogger(__name__)


async def init_database():
    logger.info(f"Connecting to {settings.DATABASE_PATH}...")

    async with store_connection(default_database_url()) as conn:
        logger.info("Creating tables...")
        await SQLiteLoader(conn).apply_schema()


def main():
    setup_logging()

    try:
        asyncio.run(init_database())
    except SchemaError as e:
        logger.error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
