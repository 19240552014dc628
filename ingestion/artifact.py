"""
Read and write the intermediate JSON artifact.

The artifact is a JSON array of records using the front end's field names
(year, gender, rank, name, count, perThousand). The parser writes it, the
importer and the statistics report read it.
"""

from pathlib import Path
from typing import Any, Dict, List, Union
from core.exceptions import ArtifactFormatError, ArtifactNotFoundError, ArtifactWriteError
from schemas.records import NameStatRecord
import asyncio
import json
import logging

logger = logging.getLogger(__name__)


async def write_artifact(records: List[NameStatRecord], artifact_path: Union[str, Path]) -> Path:
    """
    Serialize records to the artifact file.

    Raises:
        ArtifactWriteError: If the file cannot be written
    """
    path = Path(artifact_path)
    payload = json.dumps(
        [record.to_artifact() for record in records],
        indent=2,
        ensure_ascii=False
    )

    try:
        await asyncio.to_thread(path.write_text, payload, encoding="utf-8")
    except OSError as e:
        raise ArtifactWriteError(
            "Error writing output file",
            context={"artifact_path": str(path), "records": len(records)},
            original_exception=e
        )

    logger.info(f"Output written to: {path}")
    return path


async def read_artifact(artifact_path: Union[str, Path]) -> List[Dict[str, Any]]:
    """
    Read the artifact as raw entries.

    Entries are not validated here; the importer validates each one so a
    single bad entry cannot reject the whole file.

    Raises:
        ArtifactNotFoundError: If the file does not exist
        ArtifactFormatError: If the file is unreadable or not a JSON array
    """
    path = Path(artifact_path)

    if not path.exists():
        raise ArtifactNotFoundError(
            "JSON data file not found. Please run the parser first: python -m scripts.parse_names",
            context={"artifact_path": str(path)}
        )

    try:
        content = await asyncio.to_thread(path.read_text, encoding="utf-8")
        data = json.loads(content)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ArtifactFormatError(
            "Could not read JSON data file",
            context={"artifact_path": str(path)},
            original_exception=e
        )

    if not isinstance(data, list):
        raise ArtifactFormatError(
            f"Expected a JSON array of records, got {type(data).__name__}",
            context={"artifact_path": str(path)}
        )

    return data


def load_records(entries: List[Dict[str, Any]]) -> List[NameStatRecord]:
    """Validate raw entries, skipping any that are not valid records"""
    records = []
    for index, entry in enumerate(entries):
        try:
            records.append(NameStatRecord.model_validate(entry))
        except ValueError as e:
            logger.warning(f"Skipping invalid entry {index}: {str(e)}")
    return records
