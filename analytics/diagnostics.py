"""
Diagnostic queries run after every import
"""

from typing import List, Tuple
from sqlalchemy import Select, desc, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection
from models.name_row import NameRow
from schemas.summaries import DiagnosticResult
import logging
import pandas as pd

logger = logging.getLogger(__name__)

names = NameRow.__table__


def diagnostic_queries() -> List[Tuple[str, Select]]:
    """The fixed set of (title, query) pairs reported after an import"""
    total_count = func.sum(names.c["count"]).label("total_count")
    total_births = func.sum(names.c["count"]).label("total_births")

    return [
        (
            "Total records by gender",
            select(names.c.gender, func.count().label("count"))
            .group_by(names.c.gender)
            .order_by(names.c.gender)
        ),
        (
            "Records by year",
            select(names.c.year, func.count().label("count"))
            .group_by(names.c.year)
            .order_by(names.c.year)
        ),
        (
            "Top 5 names by total count",
            select(names.c["name"], names.c.gender, total_count)
            .group_by(names.c["name"], names.c.gender)
            .order_by(desc("total_count"), names.c["name"])
            .limit(5)
        ),
        (
            "Year with most births",
            select(names.c.year, total_births)
            .group_by(names.c.year)
            .order_by(desc("total_births"), names.c.year)
            .limit(1)
        ),
    ]


async def run_diagnostics(conn: AsyncConnection) -> List[DiagnosticResult]:
    """
    Run every diagnostic query in one read-only transaction.

    A failing query is logged and left out of the results.
    """
    results = []

    async with conn.begin():
        for title, query in diagnostic_queries():
            try:
                result = await conn.execute(query)
                rows = [list(row) for row in result.all()]
            except SQLAlchemyError as e:
                logger.error(f'Error in query "{title}": {str(e)}')
                continue

            results.append(
                DiagnosticResult(title=title, columns=list(result.keys()), rows=rows)
            )

    return results


def format_diagnostic(result: DiagnosticResult) -> str:
    """Render a result set as a plain-text table"""
    if not result.rows:
        return f"{result.title}:\n(no rows)"
    frame = pd.DataFrame(result.rows, columns=result.columns)
    return f"{result.title}:\n{frame.to_string(index=False)}"
