"""
Parse the yearly HTML documents into the JSON artifact
"""

import asyncio
import logging
import sys

from core.config import settings
from core.exceptions import ArtifactWriteError
from core.logging import setup_logging
from ingestion.runner import ExtractionRunner

logger = logging.getLogger(__name__)


async def parse_names():
    runner = ExtractionRunner(
        data_dir=settings.DATA_DIR,
        years=settings.YEARS,
        artifact_path=settings.ARTIFACT_PATH,
        extension=settings.SOURCE_EXTENSION,
        female_marker=settings.FEMALE_CAPTION_MARKER
    )
    return await runner.run()


def main():
    setup_logging()

    try:
        asyncio.run(parse_names())
    except ArtifactWriteError as e:
        logger.error(f"{e.message}: {e.original_exception}")
        sys.exit(1)


if __name__ == "__main__":
    main()
