"""
Transform extracted table cells into validated name statistics records
"""

from typing import Any, List, Optional, Union
from pydantic import ValidationError
from schemas.records import NameStatRecord
from models.base import Gender
import logging
import math
import re

logger = logging.getLogger(__name__)

LEADING_INT_PATTERN = re.compile(r"^[+-]?\d+")
NUMBER_PATTERN = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)$")

MIN_CELLS = 4


class RowNormalizer:
    """
    Map one table row's cells onto a NameStatRecord.

    Cells are positional: [rank, name, count, perThousand]. Extra cells are
    ignored. Rows that cannot produce a valid rank, name and count are
    dropped; an unreadable perThousand is kept as None.
    """

    def __init__(self, year: int, gender: Gender):
        self.year = year
        self.gender = gender

    def normalize(self, cells: List[str]) -> Optional[NameStatRecord]:
        """
        Build a record from a row's cell texts.

        Returns:
            Validated NameStatRecord, or None when the row is not a data row
        """
        if len(cells) < MIN_CELLS:
            return None

        rank = self._parse_int(cells[0])
        name = cells[1]
        count = self._parse_int(cells[2])
        per_thousand = self._parse_number(cells[3])

        # Zero rank or count is treated the same as a missing one
        if not rank or not name or not count:
            return None

        try:
            return NameStatRecord(
                year=self.year,
                gender=self.gender,
                rank=rank,
                name=name,
                count=count,
                per_thousand=per_thousand
            )
        except ValidationError as e:
            logger.debug(f"Dropping row {cells!r} for {self.year}: {e.error_count()} validation errors")
            return None

    @staticmethod
    def _parse_int(value: Any) -> Optional[int]:
        """
        Read the leading integer of a cell ("12", "12 navne", "+3").

        Anything after the leading digits is ignored, so "1.234" is 1.
        """
        if value is None:
            return None
        text = str(value).strip()
        if not text:
            return None
        match = LEADING_INT_PATTERN.match(text)
        if match is None:
            return None
        return int(match.group(0))

    @staticmethod
    def _parse_number(value: Any) -> Optional[Union[int, float]]:
        """Parse an integer or decimal, accepting a decimal comma"""
        if value is None:
            return None
        text = str(value).strip().replace(",", ".")
        if not NUMBER_PATTERN.match(text):
            return None
        number = float(text)
        if not math.isfinite(number):
            return None
        if number.is_integer() and "." not in text:
            return int(text)
        return number
