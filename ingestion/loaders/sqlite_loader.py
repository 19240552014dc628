"""
Load name statistics into SQLite, replacing the previous generation of data
"""

from typing import Any, Dict, List, NamedTuple, Tuple
from pydantic import ValidationError
from sqlalchemy import delete, insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection
from core.exceptions import ClearTableError, MetadataWriteError, RecordInsertError, SchemaError
from models.base import Base, LoadStage
from models.import_metadata import ImportMetadata
from models.name_row import NameRow
from schemas.records import NameStatRecord
import logging

logger = logging.getLogger(__name__)

DEFAULT_NOTES = "Imported from HTML files via CLI parser"


class InsertCounts(NamedTuple):
    inserted: int
    failed: int


def derive_years(entries: List[Dict[str, Any]]) -> List[int]:
    """Sorted, de-duplicated integer years present in the entries"""
    years = set()
    for entry in entries:
        year = entry.get("year") if isinstance(entry, dict) else None
        if isinstance(year, int) and not isinstance(year, bool):
            years.add(year)
    return sorted(years)


def describe_years(entries: List[Dict[str, Any]], extension: str = ".html") -> Tuple[str, str]:
    """
    Render the years covered and their source file names.

    Returns:
        ("2015, 2016", "2015.html, 2016.html")
    """
    years = derive_years(entries)
    years_covered = ", ".join(str(year) for year in years)
    source_files = ", ".join(f"{year}{extension}" for year in years)
    return years_covered, source_files


class SQLiteLoader:
    """
    Load artifact entries into the names table.

    Ensures:
    - The schema exists before loading (create-if-missing)
    - The names table holds only the latest import (delete, then insert)
    - One bad entry never stops the rest of the batch
    - Every import leaves one import_metadata row behind

    The caller owns the transaction around clear(), insert_records() and
    write_metadata().
    """

    def __init__(
        self,
        connection: AsyncConnection,
        progress_interval: int = 100,
        notes: str = DEFAULT_NOTES,
        extension: str = ".html"
    ):
        self.conn = connection
        self.progress_interval = max(progress_interval, 1)
        self.notes = notes
        self.extension = extension
        self.stage = LoadStage.START

    async def apply_schema(self) -> None:
        """Create any missing tables"""
        try:
            async with self.conn.begin():
                await self.conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as e:
            self.stage = LoadStage.FAILED
            raise SchemaError(
                "Failed to apply schema",
                context={"operation": "CREATE", "stage": LoadStage.START.value},
                original_exception=e
            )

        self.stage = LoadStage.SCHEMA_READY
        logger.info("Schema created successfully")

    async def clear(self) -> None:
        """Delete every row of the names table"""
        try:
            await self.conn.execute(delete(NameRow.__table__))
        except SQLAlchemyError as e:
            self.stage = LoadStage.FAILED
            raise ClearTableError(
                "Failed to clear existing data",
                context={
                    "operation": "DELETE",
                    "table_name": NameRow.__tablename__,
                    "stage": LoadStage.SCHEMA_READY.value
                },
                original_exception=e
            )

        self.stage = LoadStage.CLEARED
        logger.info("Cleared existing data")

    async def insert_records(self, entries: List[Dict[str, Any]]) -> InsertCounts:
        """
        Insert every entry, each inside its own savepoint.

        Args:
            entries: Raw artifact entries

        Returns:
            Number of entries inserted and failed
        """
        self.stage = LoadStage.INSERTING
        inserted = 0
        failed = 0
        total = len(entries)
        statement = insert(NameRow.__table__)

        for index, entry in enumerate(entries):
            try:
                record = NameStatRecord.model_validate(entry)
                async with self.conn.begin_nested():
                    await self.conn.execute(statement, record.to_row())
                inserted += 1
            except (ValidationError, SQLAlchemyError) as e:
                failed += 1
                error = RecordInsertError(
                    "Error inserting record",
                    context={"record_index": index, "record": entry},
                    original_exception=e
                )
                logger.error(str(error), extra={"error_context": error.to_dict()})

            if (index + 1) % self.progress_interval == 0 or index + 1 == total:
                logger.info(f"Imported {inserted}/{total} records")

        logger.info(f"Successfully imported {inserted} records")
        return InsertCounts(inserted=inserted, failed=failed)

    async def write_metadata(self, total_records: int, entries: List[Dict[str, Any]]) -> Dict[str, Any]:
        """
        Append the import_metadata row for this run.

        Returns:
            The values written
        """
        years_covered, source_files = describe_years(entries, self.extension)
        values = {
            "total_records": total_records,
            "years_covered": years_covered,
            "source_files": source_files,
            "notes": self.notes,
        }

        try:
            await self.conn.execute(insert(ImportMetadata.__table__).values(**values))
        except SQLAlchemyError as e:
            self.stage = LoadStage.FAILED
            raise MetadataWriteError(
                "Failed to add import metadata",
                context={
                    "operation": "INSERT",
                    "table_name": ImportMetadata.__tablename__,
                    "stage": LoadStage.INSERTING.value
                },
                original_exception=e
            )

        self.stage = LoadStage.METADATA_WRITTEN
        logger.info("Metadata added successfully")
        return values
