"""
Run summaries returned by the parser, the importer and the diagnostics
"""

from pydantic import BaseModel, Field
from typing import Any, Dict, List
from models.base import LoadStage


class ExtractionSummary(BaseModel):
    """Counts gathered while parsing the yearly documents"""

    years_found: List[int] = Field(default_factory=list)
    male_records: int = 0
    female_records: int = 0
    total_records: int = 0
    records_per_year: Dict[int, int] = Field(default_factory=dict)
    skipped_years: List[int] = Field(default_factory=list)


class DiagnosticResult(BaseModel):
    """Result set of one diagnostic query"""

    title: str
    columns: List[str]
    rows: List[List[Any]] = Field(default_factory=list)


class LoadSummary(BaseModel):
    """Outcome of one import run"""

    records_in_artifact: int = 0
    records_inserted: int = 0
    records_failed: int = 0
    years_covered: str = ""
    source_files: str = ""
    stage: LoadStage = LoadStage.START
    diagnostics: List[DiagnosticResult] = Field(default_factory=list)
