"""
Abstract base class for yearly document sources
"""

from abc import ABC, abstractmethod
from collections import Counter
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union
from core.exceptions import DocumentReadError
from models.base import Gender
from schemas.records import NameStatRecord
from schemas.summaries import ExtractionSummary
import asyncio
import logging

logger = logging.getLogger(__name__)


class DocumentSource(ABC):
    """
    Abstract base class for sources that publish one document per year.

    Responsibilities:
    - Locating and reading each year's document
    - Isolating failures so one bad year never stops the others
    - Aggregating records and run statistics in year order
    """

    def __init__(
        self,
        data_dir: Union[str, Path],
        years: Iterable[int],
        extension: str = ".html"
    ):
        self.data_dir = Path(data_dir)
        self.years = list(years)
        self.extension = extension

    @abstractmethod
    def parse_document(self, content: str, year: int) -> List[NameStatRecord]:
        """
        Parse one document into records.

        Args:
            content: Raw document text
            year: Statistics year the document represents

        Returns:
            Records in document order
        """
        pass

    def document_name(self, year: int) -> str:
        return f"{year}{self.extension}"

    def document_path(self, year: int) -> Path:
        return self.data_dir / self.document_name(year)

    async def read_document(self, year: int) -> Optional[str]:
        """Read a year's document, or None when it does not exist"""
        file_path = self.document_path(year)

        if not file_path.exists():
            logger.warning(f"File not found: {file_path}")
            return None

        try:
            return await asyncio.to_thread(file_path.read_text, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentReadError(
                f"Could not read {self.document_name(year)}",
                context={"file_path": str(file_path), "year": year},
                original_exception=e
            )

    async def extract_year(self, year: int) -> Optional[List[NameStatRecord]]:
        """
        Extract one year's records.

        Returns:
            Records for the year, or None when the document was missing or
            could not be read or parsed
        """
        try:
            content = await self.read_document(year)
            if content is None:
                return None

            records = self.parse_document(content, year)
        except DocumentReadError as e:
            logger.error(
                f"Error parsing {self.document_name(year)}: {e.message}",
                extra={"error_context": e.to_dict()}
            )
            return None
        except Exception as e:
            logger.error(f"Error parsing {self.document_name(year)}: {str(e)}")
            return None

        logger.info(f"Parsed {len(records)} records from {self.document_name(year)}")
        return records

    async def extract_all(self) -> Tuple[List[NameStatRecord], ExtractionSummary]:
        """
        Extract every configured year in order.

        Returns:
            All records (year order, then document order) and run statistics
        """
        all_records: List[NameStatRecord] = []
        skipped_years: List[int] = []

        for year in self.years:
            records = await self.extract_year(year)
            if records is None:
                skipped_years.append(year)
                continue
            all_records.extend(records)

        return all_records, self._summarize(all_records, skipped_years)

    @staticmethod
    def _summarize(records: List[NameStatRecord], skipped_years: List[int]) -> ExtractionSummary:
        genders = Counter(record.gender for record in records)
        per_year = Counter(record.year for record in records)

        return ExtractionSummary(
            years_found=sorted(per_year),
            male_records=genders.get(Gender.MALE.value, 0),
            female_records=genders.get(Gender.FEMALE.value, 0),
            total_records=len(records),
            records_per_year=dict(sorted(per_year.items())),
            skipped_years=skipped_years
        )
