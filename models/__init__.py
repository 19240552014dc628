"""
SQLAlchemy ORM models for the statistics store.

Models:
    base: Base declarative class and shared enums (Gender, LoadStage)
    name_row: Per-year, per-gender name statistics (table "names")
    import_metadata: One summary row per import run (table "import_metadata")

Database Schema:
    The schema is applied with Base.metadata.create_all, which only creates
    missing tables, so it can run before every import.

Usage:
    from models import Base, NameRow, ImportMetadata
    from models.base import Gender, LoadStage
"""

from models.base import Base, Gender, LoadStage
from models.name_row import NameRow
from models.import_metadata import ImportMetadata

__all__ = [
    "Base",
    "Gender",
    "LoadStage",
    "NameRow",
    "ImportMetadata",
]
