"""Cleaning and normalization utilities.

Turns raw school payloads returned by the College Scorecard API into
`SchoolRecord` objects and flattens their programs into a degree table
with a stable schema for the aggregation step.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable

import pandas as pd

from scorecard_pipeline.clean.validate import validate_programs
from scorecard_pipeline.models import DegreeRecord, SchoolRecord

log = logging.getLogger(__name__)

PROGRAMS_FIELD = "latest.programs.cip_4_digit"
BACHELORS_LEVEL = 3

DEGREE_COLUMNS = [
    "cip_code",
    "name",
    "earnings_sample_size",
    "median_earnings",
    "debt_sample_size",
    "median_debt",
]


def get_path(obj: Any, path: str, default: Any = None) -> Any:
    """Return the value at a dotted `path` inside nested dicts, or `default`."""
    current = obj
    for key in path.split("."):
        if not isinstance(current, dict) or key not in current:
            return default
        current = current[key]
    return default if current is None else current


def program_is_bachelors_degree(program: dict[str, Any]) -> bool:
    return get_path(program, "credential.level", 0) == BACHELORS_LEVEL


def program_has_debt_and_income_data(program: dict[str, Any]) -> bool:
    return all(
        bool(get_path(program, path))
        for path in (
            "earnings.median_earnings",
            "earnings.count",
            "debt.median_debt",
            "debt.count",
        )
    )


def program_fits_criteria(program: dict[str, Any]) -> bool:
    """Return True for bachelor's programs reporting both earnings and debt."""
    return program_is_bachelors_degree(program) and program_has_debt_and_income_data(program)


def school_programs(school: dict[str, Any]) -> list[dict[str, Any]]:
    return school.get(PROGRAMS_FIELD) or []


def clean_program(program: dict[str, Any]) -> dict[str, Any]:
    """Map a raw `cip_4_digit` program entry onto `DegreeRecord` fields.

    CIP code reference: https://nces.ed.gov/ipeds/cipcode/browse.aspx?y=55
    """
    return {
        "cip_code": program.get("code"),
        "name": program.get("title"),
        "earnings_sample_size": get_path(program, "earnings.count"),
        "median_earnings": get_path(program, "earnings.median_earnings"),
        "debt_sample_size": get_path(program, "debt.count"),
        "median_debt": get_path(program, "debt.median_debt"),
    }


def clean_school(school: dict[str, Any]) -> SchoolRecord:
    """Clean one raw school payload.

    Programs that fail validation are dropped and logged; the school itself
    is kept.
    """
    degrees, bad = validate_programs(clean_program(p) for p in school_programs(school))
    if bad:
        log.warning(
            "Dropped %d invalid programs for school id=%s", bad, school.get("id")
        )

    return SchoolRecord(
        id=school["id"],
        name=school.get("school.name"),
        students=school.get("latest.student.size"),
        city=school.get("school.city"),
        state=school.get("school.state"),
        degrees=degrees,
    )


def clean_schools(schools: Iterable[dict[str, Any]]) -> list[SchoolRecord]:
    log.info("Cleaning data")
    cleaned = [clean_school(s) for s in schools]
    log.info("Finished cleaning data: %d schools", len(cleaned))
    return cleaned


def flatten_degrees(schools: Iterable[SchoolRecord]) -> list[DegreeRecord]:
    """Concatenate the degree lists of all schools, preserving order."""
    return [degree for school in schools for degree in school.degrees]


def degrees_to_frame(degrees: Iterable[DegreeRecord]) -> pd.DataFrame:
    """Build the degree table consumed by the aggregator.

    Returns:
        pandas.DataFrame with columns `DEGREE_COLUMNS`; missing statistics
        are NaN/None.
    """
    rows = [d.model_dump() for d in degrees]
    return pd.DataFrame(rows, columns=DEGREE_COLUMNS)
