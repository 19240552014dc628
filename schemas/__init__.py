"""
Pydantic schemas for record validation and run summaries.

Schemas:
    records: NameStatRecord, the unit of data passed from parser to importer
    summaries: ExtractionSummary, LoadSummary and DiagnosticResult

Usage:
    from schemas import NameStatRecord, ExtractionSummary

Example:
    record = NameStatRecord(
        year=2020,
        gender="female",
        rank=1,
        name="Ida",
        count=512,
        perThousand=17
    )

    assert record.to_artifact()["perThousand"] == 17
    assert record.to_row()["per_thousand"] == 17
"""

from schemas.records import NameStatRecord
from schemas.summaries import ExtractionSummary, LoadSummary, DiagnosticResult

__all__ = [
    "NameStatRecord",
    "ExtractionSummary",
    "LoadSummary",
    "DiagnosticResult",
]
