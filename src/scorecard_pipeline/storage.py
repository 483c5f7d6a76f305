"""JSON file storage for the Clean and Gold layers.

`schoolData.json` holds the cleaned schools (with nested degrees) and
`degreeData.json` holds the aggregated results; both are pretty-printed
arrays of objects using camelCase keys.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable

from scorecard_pipeline.models import AggregateResult, SchoolRecord

log = logging.getLogger(__name__)

SCHOOL_DATA_FILE = "schoolData.json"
DEGREE_DATA_FILE = "degreeData.json"


def write_json(path: Path, payload: Any) -> Path:
    """Write `payload` as indented UTF-8 JSON, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    return path


def read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def save_schools(schools: Iterable[SchoolRecord], data_dir: Path) -> Path:
    path = data_dir / SCHOOL_DATA_FILE
    log.info("Writing data to file")
    write_json(path, [s.model_dump(mode="json", by_alias=True) for s in schools])
    log.info("Finished writing data to %s", path)
    return path


def load_schools(data_dir: Path) -> list[SchoolRecord]:
    """Load and validate `schoolData.json`.

    Raises:
        RuntimeError: if the file does not exist yet.
    """
    path = data_dir / SCHOOL_DATA_FILE
    if not path.exists():
        raise RuntimeError(f"{path} not found. Run download first.")

    log.info("Loading data from %s", path)
    schools = [SchoolRecord.model_validate(rec) for rec in read_json(path)]
    log.info("Done loading data: %d schools", len(schools))
    return schools


def save_results(results: Iterable[AggregateResult], data_dir: Path) -> Path:
    path = data_dir / DEGREE_DATA_FILE
    log.info("Writing data to file")
    write_json(path, [r.as_record() for r in results])
    log.info("Finished writing data to %s", path)
    return path
