"""
HTML Table Extractor

Extracts yearly name statistics from the tables of saved HTML pages.
"""

from html import unescape
from pathlib import Path
from typing import Iterable, List, Optional, Union
from ingestion.base import DocumentSource
from ingestion.transformers.normalizer import RowNormalizer
from models.base import Gender
from schemas.records import NameStatRecord
import logging
import re

logger = logging.getLogger(__name__)

TABLE_PATTERN = re.compile(r"<table[^>]*>.*?</table>", re.IGNORECASE | re.DOTALL)
CAPTION_PATTERN = re.compile(r"<caption[^>]*>([^<]+)</caption>", re.IGNORECASE)
ROW_PATTERN = re.compile(r"<tr[^>]*>.*?</tr>", re.IGNORECASE | re.DOTALL)
HEADER_CELL_PATTERN = re.compile(r"<th[\s>]", re.IGNORECASE)
DATA_CELL_PATTERN = re.compile(r"<td[^>]*>([^<]+)</td>", re.IGNORECASE)

DEFAULT_FEMALE_MARKER = "Pigenavne"


class HTMLTableExtractor(DocumentSource):
    """
    Extract name listings from HTML tables.

    Each table is one listing. Its caption decides the gender: a caption
    containing the female marker is a girls' listing, anything else
    (including no caption at all) is a boys' listing.
    """

    def __init__(
        self,
        data_dir: Union[str, Path],
        years: Iterable[int],
        extension: str = ".html",
        female_marker: str = DEFAULT_FEMALE_MARKER
    ):
        super().__init__(data_dir=data_dir, years=years, extension=extension)
        self.female_marker = female_marker

    def parse_document(self, content: str, year: int) -> List[NameStatRecord]:
        results: List[NameStatRecord] = []

        tables = TABLE_PATTERN.findall(content)
        if not tables:
            logger.warning(f"No tables found in {self.document_name(year)}")
            return results

        for table in tables:
            normalizer = RowNormalizer(year=year, gender=self.classify_gender(table))

            for row in ROW_PATTERN.findall(table):
                # Skip header rows
                if HEADER_CELL_PATTERN.search(row):
                    continue

                record = normalizer.normalize(self.extract_cells(row))
                if record is not None:
                    results.append(record)

        return results

    def classify_gender(self, table: str) -> Gender:
        caption = self.extract_caption(table)
        if caption is not None and self.female_marker in caption:
            return Gender.FEMALE
        return Gender.MALE

    @staticmethod
    def extract_caption(table: str) -> Optional[str]:
        match = CAPTION_PATTERN.search(table)
        if match is None:
            return None
        return unescape(match.group(1))

    @staticmethod
    def extract_cells(row: str) -> List[str]:
        """Text of each data cell in document order, unescaped and stripped"""
        return [unescape(text).strip() for text in DATA_CELL_PATTERN.findall(row)]
