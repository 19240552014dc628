"""
Pydantic schema for name statistics records with validation
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, Union
from models.base import Gender


class NameStatRecord(BaseModel):
    """
    One (year, gender, rank, name, count, perThousand) tuple.

    Ensures:
    - rank and count are positive integers
    - name is non-empty after stripping
    - gender is one of the two recognised listings

    Serialized with ``by_alias=True`` the field names match the artifact
    consumed by the front end: year, gender, rank, name, count, perThousand.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
        frozen=True
    )

    year: int = Field(..., ge=1)
    gender: Gender
    rank: int = Field(..., gt=0)
    name: str = Field(..., min_length=1)
    count: int = Field(..., gt=0)
    per_thousand: Optional[Union[int, float]] = Field(None, alias="perThousand")

    @field_validator("name", mode="before")
    @classmethod
    def clean_name(cls, v):
        """Strip surrounding whitespace"""
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("Name cannot be empty after stripping")
        return v

    def to_artifact(self) -> dict:
        """Artifact entry with the front end's field names"""
        return self.model_dump(by_alias=True, mode="json")

    def to_row(self) -> dict:
        """Column values for the names table"""
        return self.model_dump(by_alias=False, mode="json")
