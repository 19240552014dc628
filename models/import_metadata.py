from sqlalchemy import Column, Integer, Text, DateTime, func
from models.base import Base


class ImportMetadata(Base):
    """
    Summary of one import run.

    Purpose:
    - History of imports (one row per run, never updated)
    - Provenance of the data currently in the names table
    """
    __tablename__ = "import_metadata"

    id = Column(Integer, primary_key=True, autoincrement=True)
    imported_at = Column(DateTime, nullable=False, server_default=func.current_timestamp())

    total_records = Column(Integer, nullable=False)
    years_covered = Column(Text, nullable=True)  # "2015, 2016, 2017"
    source_files = Column(Text, nullable=True)  # "2015.html, 2016.html, 2017.html"
    notes = Column(Text, nullable=True)
