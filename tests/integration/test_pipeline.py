"""
Integration tests for the parse → import pipeline
"""

import json
import pytest
from sqlalchemy import func, select
from core.database import build_database_url, store_connection
from ingestion.runner import ExtractionRunner, LoadRunner
from models.base import LoadStage
from models.name_row import NameRow


@pytest.fixture
def two_years(write_document, make_document, make_table):
    write_document(2015, make_document(
        make_table([["1", "William", "489", "15"], ["2", "Noah", "456", "14"]], caption="Drengenavne 2015"),
        make_table([["1", "Emma", "512", "17"], ["2", "Ida", "470", "16"]], caption="Pigenavne 2015"),
    ))
    write_document(2016, make_document(
        make_table([["1", "William", "501", "16"]], caption="Drengenavne 2016"),
        make_table([["1", "Ida", "498", "16"], ["2", "Emma", "465", "x"]], caption="Pigenavne 2016"),
    ))


@pytest.mark.asyncio
async def test_extraction_preserves_year_table_row_order(data_dir, artifact_path, two_years):
    runner = ExtractionRunner(data_dir=data_dir, years=[2015, 2016], artifact_path=artifact_path)

    records, summary = await runner.run()

    assert [(r.year, r.name) for r in records] == [
        (2015, "William"), (2015, "Noah"), (2015, "Emma"), (2015, "Ida"),
        (2016, "William"), (2016, "Ida"), (2016, "Emma"),
    ]
    assert summary.years_found == [2015, 2016]
    assert summary.male_records == 3
    assert summary.female_records == 4
    assert summary.total_records == 7
    assert summary.records_per_year == {2015: 4, 2016: 3}

    artifact = json.loads(artifact_path.read_text(encoding="utf-8"))
    assert len(artifact) == 7
    assert artifact[-1] == {
        "year": 2016, "gender": "female", "rank": 2, "name": "Emma", "count": 465, "perThousand": None
    }


@pytest.mark.asyncio
async def test_missing_and_unreadable_years_are_skipped(data_dir, artifact_path, two_years, caplog):
    (data_dir / "2017.html").mkdir()  # unreadable: a directory, not a file
    runner = ExtractionRunner(data_dir=data_dir, years=[2014, 2015, 2016, 2017], artifact_path=artifact_path)

    records, summary = await runner.run()

    assert summary.skipped_years == [2014, 2017]
    assert summary.total_records == 7
    assert "File not found" in caplog.text
    assert "Error parsing 2017.html" in caplog.text


@pytest.mark.asyncio
async def test_document_without_tables_contributes_nothing(data_dir, artifact_path, two_years, write_document):
    write_document(2017, "<html><body>Ingen tabeller</body></html>")
    runner = ExtractionRunner(data_dir=data_dir, years=[2015, 2016, 2017], artifact_path=artifact_path)

    records, summary = await runner.run()

    assert summary.total_records == 7
    assert summary.skipped_years == []
    assert 2017 not in summary.years_found


@pytest.mark.asyncio
async def test_full_pipeline(data_dir, artifact_path, store_path, two_years, fetch_name_rows, fetch_metadata):
    await ExtractionRunner(data_dir=data_dir, years=[2015, 2016], artifact_path=artifact_path).run()

    summary = await LoadRunner(database_path=store_path, artifact_path=artifact_path).run()

    assert summary.stage == LoadStage.CLOSED
    assert summary.records_in_artifact == 7
    assert summary.records_inserted == 7
    assert summary.records_failed == 0
    assert summary.years_covered == "2015, 2016"
    assert summary.source_files == "2015.html, 2016.html"
    assert [d.title for d in summary.diagnostics] == [
        "Total records by gender",
        "Records by year",
        "Top 5 names by total count",
        "Year with most births",
    ]

    rows = await fetch_name_rows(store_path)
    assert rows[0] == (2015, "male", 1, "William", 489, 15)
    assert rows[-1] == (2016, "female", 2, "Emma", 465, None)

    metadata = await fetch_metadata(store_path)
    assert len(metadata) == 1
    assert metadata[0].total_records == 7
    assert metadata[0].notes == "Imported from HTML files via CLI parser"


@pytest.mark.asyncio
async def test_repeated_load_is_idempotent(store_path, artifact_path, sample_entries, write_artifact_file, fetch_name_rows, fetch_metadata):
    write_artifact_file(sample_entries)

    await LoadRunner(database_path=store_path, artifact_path=artifact_path).run()
    first = set(await fetch_name_rows(store_path))

    await LoadRunner(database_path=store_path, artifact_path=artifact_path).run()
    second = set(await fetch_name_rows(store_path))

    assert first == second
    assert len(second) == len(sample_entries)
    assert len(await fetch_metadata(store_path)) == 2


@pytest.mark.asyncio
async def test_one_unloadable_record_in_a_hundred(store_path, artifact_path, write_artifact_file, fetch_name_rows, fetch_metadata):
    entries = [
        {"year": 2015, "gender": "male", "rank": i, "name": f"Navn{i}", "count": 200 - i, "perThousand": 1}
        for i in range(1, 100)
    ]
    # Breaks the rank > 0 rule
    entries.append({"year": 2015, "gender": "male", "rank": 0, "name": "Navn100", "count": 5, "perThousand": 1})
    write_artifact_file(entries)

    summary = await LoadRunner(database_path=store_path, artifact_path=artifact_path).run()

    assert summary.records_inserted == 99
    assert summary.records_failed == 1
    assert len(await fetch_name_rows(store_path)) == 99

    metadata = await fetch_metadata(store_path)
    assert len(metadata) == 1
    assert metadata[0].total_records == 99


@pytest.mark.asyncio
async def test_metadata_years_are_sorted(store_path, artifact_path, write_artifact_file, fetch_metadata):
    write_artifact_file([
        {"year": 2016, "gender": "male", "rank": 1, "name": "A", "count": 3, "perThousand": 1},
        {"year": 2015, "gender": "male", "rank": 1, "name": "B", "count": 3, "perThousand": 1},
        {"year": 2018, "gender": "female", "rank": 1, "name": "C", "count": 3, "perThousand": 1},
        {"year": 2015, "gender": "female", "rank": 1, "name": "D", "count": 3, "perThousand": 1},
    ])

    await LoadRunner(database_path=store_path, artifact_path=artifact_path).run()

    metadata = await fetch_metadata(store_path)
    assert metadata[0].years_covered == "2015, 2016, 2018"
    assert metadata[0].source_files == "2015.html, 2016.html, 2018.html"


@pytest.mark.asyncio
async def test_load_replaces_previous_generation(store_path, artifact_path, sample_entries, write_artifact_file):
    write_artifact_file(sample_entries)
    await LoadRunner(database_path=store_path, artifact_path=artifact_path).run()

    write_artifact_file(sample_entries[:2])
    await LoadRunner(database_path=store_path, artifact_path=artifact_path).run()

    async with store_connection(build_database_url(store_path)) as conn:
        async with conn.begin():
            count = (await conn.execute(select(func.count()).select_from(NameRow.__table__))).scalar_one()
    assert count == 2


@pytest.mark.asyncio
async def test_same_name_in_two_male_listings_is_loaded(data_dir, artifact_path, store_path, write_document, make_document, make_table, fetch_name_rows):
    # An uncaptioned table is classified male, like the boys' listing
    write_document(2015, make_document(
        make_table([["1", "William", "489", "15"]], caption="Drengenavne 2015"),
        make_table([["1", "William", "489", "15"]]),
    ))
    records, _ = await ExtractionRunner(data_dir=data_dir, years=[2015], artifact_path=artifact_path).run()

    summary = await LoadRunner(database_path=store_path, artifact_path=artifact_path).run()

    assert len(records) == 2
    assert summary.records_inserted == 2
    assert summary.records_failed == 0
    assert await fetch_name_rows(store_path) == [
        (2015, "male", 1, "William", 489, 15),
        (2015, "male", 1, "William", 489, 15),
    ]


@pytest.mark.asyncio
async def test_rerunning_a_runner_starts_a_fresh_summary(store_path, artifact_path, sample_entries, write_artifact_file):
    write_artifact_file(sample_entries)
    runner = LoadRunner(database_path=store_path, artifact_path=artifact_path)

    first = await runner.run()
    write_artifact_file(sample_entries[:2])
    second = await runner.run()

    assert first is not second
    assert first.records_inserted == len(sample_entries)
    assert second.records_in_artifact == 2
    assert second.records_inserted == 2
    assert len(second.diagnostics) == 4
    assert runner.summary is second
