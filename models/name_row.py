from sqlalchemy import Column, Integer, String, Text, Float, CheckConstraint, Index
from models.base import Base


class NameRow(Base):
    """
    One name's statistics for a single year and gender.

    The table holds exactly one generation of imported data: every import
    deletes all rows before inserting the new batch, so ids are not stable
    across imports.
    """
    __tablename__ = "names"

    id = Column(Integer, primary_key=True, autoincrement=True)

    year = Column(Integer, nullable=False, index=True)
    gender = Column(String(10), nullable=False)
    rank = Column(Integer, nullable=False)
    name = Column(Text, nullable=False, index=True)
    count = Column(Integer, nullable=False)
    per_thousand = Column(Float, nullable=True)  # NULL when the source value was not numeric

    __table_args__ = (
        CheckConstraint("gender IN ('male', 'female')", name="ck_names_gender"),
        CheckConstraint("rank > 0", name="ck_names_rank_positive"),
        CheckConstraint("count > 0", name="ck_names_count_positive"),
        Index("idx_names_year_gender", "year", "gender"),
    )

    def __repr__(self) -> str:
        return f"<NameRow {self.year} {self.gender} #{self.rank} {self.name}>"
