"""
Pipeline components for name statistics ingestion.

Modules:
    base: Abstract base class for sources with one document per year
    artifact: Read and write the intermediate JSON artifact
    runner: Parse run (HTML → artifact) and import run (artifact → SQLite)

Subpackages:
    extractors: HTML table extractor
    transformers: Cell-to-record normalization and validation
    loaders: SQLite loader with full-replace semantics

Architecture:
    The pipeline runs as two independent batch jobs:

    1. Parse - Read data/<year>.html, extract table rows, write the artifact
    2. Import - Read the artifact, replace the names table, record metadata

    Each job handles per-item failures (a missing document, a bad row)
    locally and only stops on run-level failures.

Usage:
    from ingestion.runner import ExtractionRunner, LoadRunner

Example:
    records, summary = await ExtractionRunner(
        data_dir="data",
        years=range(2015, 2025),
        artifact_path="parsed-names.json"
    ).run()

    result = await LoadRunner("names.db", "parsed-names.json").run()
    print(f"Loaded {result.records_inserted} records")

Error Handling:
    All components raise exceptions from core.exceptions with structured
    context for logging.
"""

__all__ = [
    "DocumentSource",
    "HTMLTableExtractor",
    "RowNormalizer",
    "SQLiteLoader",
    "ExtractionRunner",
    "LoadRunner",
]

from ingestion.base import DocumentSource
from ingestion.extractors.html_table_extractor import HTMLTableExtractor
from ingestion.transformers.normalizer import RowNormalizer
from ingestion.loaders.sqlite_loader import SQLiteLoader
from ingestion.runner import ExtractionRunner, LoadRunner
