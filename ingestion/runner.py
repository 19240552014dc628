# ============================================================================
# File: ingestion/runner.py
# Description: Orchestrates the parse run and the import run
# ============================================================================
"""
Pipeline runners.

The parse run turns the yearly HTML documents into the JSON artifact. The
import run loads that artifact into the SQLite store. The two only share the
artifact file, so either can be repeated on its own.
"""

from pathlib import Path
from typing import Iterable, List, Tuple, Union
import logging

from analytics.diagnostics import format_diagnostic, run_diagnostics
from core.database import build_database_url, store_connection
from core.exceptions import ArtifactError, DatabaseError, ETLException
from ingestion.artifact import read_artifact, write_artifact
from ingestion.extractors.html_table_extractor import DEFAULT_FEMALE_MARKER, HTMLTableExtractor
from ingestion.loaders.sqlite_loader import DEFAULT_NOTES, SQLiteLoader
from models.base import LoadStage
from schemas.records import NameStatRecord
from schemas.summaries import ExtractionSummary, LoadSummary

logger = logging.getLogger(__name__)


class ExtractionRunner:
    """
    Parse every configured year and write the artifact.

    Missing or unreadable documents are skipped; only a failure to write
    the artifact ends the run.
    """

    def __init__(
        self,
        data_dir: Union[str, Path],
        years: Iterable[int],
        artifact_path: Union[str, Path],
        extension: str = ".html",
        female_marker: str = DEFAULT_FEMALE_MARKER
    ):
        self.extractor = HTMLTableExtractor(
            data_dir=data_dir,
            years=years,
            extension=extension,
            female_marker=female_marker
        )
        self.artifact_path = Path(artifact_path)

    async def run(self) -> Tuple[List[NameStatRecord], ExtractionSummary]:
        """
        Returns:
            The records written and the run summary

        Raises:
            ArtifactWriteError: If the artifact cannot be written
        """
        logger.info("Parsing HTML files...")

        records, summary = await self.extractor.extract_all()
        await write_artifact(records, self.artifact_path)

        logger.info(f"Successfully parsed {summary.total_records} total records")
        logger.info(
            "Summary: "
            f"Years={', '.join(str(year) for year in summary.years_found)}, "
            f"Total={summary.total_records}, "
            f"Male={summary.male_records}, "
            f"Female={summary.female_records}"
        )
        if summary.skipped_years:
            logger.warning(f"Skipped years: {', '.join(str(year) for year in summary.skipped_years)}")

        return records, summary


class LoadRunner:
    """
    Load the artifact into the store.

    Stages:
        start → schema_ready → cleared → inserting → metadata_written
        → reporting → closed

    Clearing, inserting and the metadata row share one transaction, so a
    failure in any of them leaves the previous import in place. Entries that
    fail validation or insert are counted and skipped.
    """

    def __init__(
        self,
        database_path: Union[str, Path],
        artifact_path: Union[str, Path],
        progress_interval: int = 100,
        notes: str = DEFAULT_NOTES,
        extension: str = ".html"
    ):
        self.database_path = Path(database_path)
        self.artifact_path = Path(artifact_path)
        self.progress_interval = progress_interval
        self.notes = notes
        self.extension = extension
        self.summary = LoadSummary()

    async def run(self) -> LoadSummary:
        """
        Returns:
            LoadSummary with counts, derived metadata and diagnostics

        Raises:
            ArtifactError: If the artifact is missing or malformed
            DatabaseError: If the schema, clear or metadata step fails
        """
        summary = self.summary = LoadSummary()

        try:
            logger.info("Loading JSON data...")
            entries = await read_artifact(self.artifact_path)
            summary.records_in_artifact = len(entries)
            logger.info(f"Loaded {len(entries)} records from JSON")

            async with store_connection(build_database_url(self.database_path)) as conn:
                loader = SQLiteLoader(
                    conn,
                    progress_interval=self.progress_interval,
                    notes=self.notes,
                    extension=self.extension
                )

                try:
                    await loader.apply_schema()

                    async with conn.begin():
                        await loader.clear()
                        counts = await loader.insert_records(entries)
                        metadata = await loader.write_metadata(counts.inserted, entries)
                finally:
                    summary.stage = loader.stage

                summary.records_inserted = counts.inserted
                summary.records_failed = counts.failed
                summary.years_covered = metadata["years_covered"]
                summary.source_files = metadata["source_files"]

                # --------------------------------------------------
                # Diagnostics (read-only)
                # --------------------------------------------------
                summary.stage = LoadStage.REPORTING
                logger.info("=== Sample Analysis Queries ===")
                summary.diagnostics = await run_diagnostics(conn)
                for result in summary.diagnostics:
                    logger.info(format_diagnostic(result))

        except (ArtifactError, DatabaseError) as e:
            summary.stage = LoadStage.FAILED
            logger.error(
                f"Import failed: {e.message}",
                extra={"error_context": e.to_dict()}
            )
            raise

        except Exception as e:
            summary.stage = LoadStage.FAILED
            logger.exception("Unexpected error during import")
            raise ETLException(
                "Unexpected error during import",
                context={
                    "database_path": str(self.database_path),
                    "artifact_path": str(self.artifact_path),
                    "records_inserted": summary.records_inserted
                },
                original_exception=e
            )

        summary.stage = LoadStage.CLOSED
        logger.info("Database import completed successfully!")
        logger.info(f"Database file: {self.database_path}")
        return summary
