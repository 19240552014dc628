"""
Print name statistics computed from the JSON artifact
"""

import asyncio
import logging
import sys

from analytics.statistics import statistics_report
from core.config import settings
from core.exceptions import ArtifactError
from core.logging import setup_logging
from ingestion.artifact import load_records, read_artifact

logger = logging.getLogger(__name__)


async def name_stats():
    entries = await read_artifact(settings.ARTIFACT_PATH)
    records = load_records(entries)
    logger.info(f"Loaded {len(records)} records from {settings.ARTIFACT_PATH}")

    for table in statistics_report(records, settings.STATS_GENDER_FILTER, settings.STATS_TOP_N):
        logger.info(table)


def main():
    setup_logging()

    try:
        asyncio.run(name_stats())
    except ArtifactError as e:
        logger.error(e.message)
        sys.exit(1)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
