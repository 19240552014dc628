"""
Pytest configuration and fixtures
"""

import json
import pytest
import pytest_asyncio
from typing import AsyncGenerator, Dict, List, Optional, Sequence
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncConnection
from core.database import build_database_url, store_connection
from models.base import Base
from models.import_metadata import ImportMetadata
from models.name_row import NameRow
from schemas.records import NameStatRecord

NAME_COLUMNS = ("year", "gender", "rank", "name", "count", "per_thousand")


def render_table(rows: Sequence[Sequence[str]], caption: Optional[str] = None, header: bool = True) -> str:
    """Render a name listing the way the statistics pages publish them"""
    parts = ["<table class=\"names\">"]
    if caption is not None:
        parts.append(f"<caption>{caption}</caption>")
    if header:
        parts.append("<tr><th>Nr.</th><th>Navn</th><th>Antal</th><th>Pr. 1.000</th></tr>")
    for row in rows:
        cells = "".join(f"<td>{cell}</td>" for cell in row)
        parts.append(f"<tr>\n  {cells}\n</tr>")
    parts.append("</table>")
    return "\n".join(parts)


def render_document(*tables: str) -> str:
    body = "\n<p>Kilde: Danmarks Statistik</p>\n".join(tables)
    return f"<html><head><title>Navne</title></head><body>\n{body}\n</body></html>"


@pytest.fixture
def make_table():
    return render_table


@pytest.fixture
def make_document():
    return render_document


@pytest.fixture
def data_dir(tmp_path):
    directory = tmp_path / "data"
    directory.mkdir()
    return directory


@pytest.fixture
def write_document(data_dir):
    """Write data/<year>.html"""
    def _write(year: int, content: str):
        path = data_dir / f"{year}.html"
        path.write_text(content, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / "names.db"


@pytest.fixture
def artifact_path(tmp_path):
    return tmp_path / "parsed-names.json"


@pytest.fixture
def write_artifact_file(artifact_path):
    """Write raw entries straight to the artifact file"""
    def _write(entries: List[Dict]):
        artifact_path.write_text(json.dumps(entries), encoding="utf-8")
        return artifact_path
    return _write


@pytest_asyncio.fixture
async def store_conn(store_path) -> AsyncGenerator[AsyncConnection, None]:
    """Connection to an empty store with the schema applied"""
    async with store_connection(build_database_url(store_path)) as conn:
        async with conn.begin():
            await conn.run_sync(Base.metadata.create_all)
        yield conn


@pytest.fixture
def sample_records() -> List[NameStatRecord]:
    """Two years of boys' and girls' listings"""
    rows = [
        (2015, "male", 1, "William", 489, 15),
        (2015, "male", 2, "Noah", 456, 14),
        (2015, "female", 1, "Emma", 512, 17),
        (2015, "female", 2, "Ida", 470, 16),
        (2016, "male", 1, "William", 501, 16),
        (2016, "male", 2, "Oscar", 430, 14),
        (2016, "female", 1, "Ida", 498, 16),
        (2016, "female", 2, "Emma", 465, 15),
    ]
    return [
        NameStatRecord(year=y, gender=g, rank=r, name=n, count=c, perThousand=p)
        for y, g, r, n, c, p in rows
    ]


@pytest.fixture
def sample_entries(sample_records) -> List[Dict]:
    return [record.to_artifact() for record in sample_records]


@pytest.fixture
def fetch_name_rows():
    """Read back the names table as (year, gender, rank, name, count, per_thousand) tuples"""
    async def _fetch(path) -> List[tuple]:
        table = NameRow.__table__
        async with store_connection(build_database_url(path)) as conn:
            async with conn.begin():
                result = await conn.execute(select(table).order_by(table.c.id))
                return [tuple(row._mapping[c] for c in NAME_COLUMNS) for row in result.all()]
    return _fetch


@pytest.fixture
def fetch_metadata():
    """Read back every import_metadata row, oldest first"""
    async def _fetch(path):
        table = ImportMetadata.__table__
        async with store_connection(build_database_url(path)) as conn:
            async with conn.begin():
                result = await conn.execute(select(table).order_by(table.c.id))
                return result.all()
    return _fetch
