"""Paginated download of school records from the College Scorecard API.

`fetch_all_schools` requests pages 0, 1, 2, ... of the schools endpoint
until a page comes back empty and returns the concatenated raw payloads.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Iterator

import requests

from scorecard_pipeline.clean.transform import program_fits_criteria, school_programs
from scorecard_pipeline.config import Settings

log = logging.getLogger(__name__)

# public and private non-profit schools that are currently operating
SCHOOL_FILTERS = {
    "school.ownership": "1,2",
    "school.operating": "1",
}

SCHOOL_FIELDS = [
    "id",
    "school.name",
    "school.city",
    "school.state",
    "latest.student.size",
    "latest.programs.cip_4_digit",
]


def build_session(settings: Settings) -> requests.Session:
    """Return a `requests.Session` carrying the API key and page size."""
    session = requests.Session()
    session.params = {
        "api_key": settings.api_key,
        "per_page": settings.page_size,
    }
    return session


def fetch_page(
    session: requests.Session,
    settings: Settings,
    page: int,
) -> tuple[list[dict[str, Any]], dict[str, Any]]:
    """Fetch one page of schools.

    Args:
        session: Session from `build_session` (or a compatible object).
        settings: Pipeline settings (base URL, page size, timeout).
        page: Zero-based page number.

    Returns:
        Tuple `(results, metadata)` from the JSON response.

    Raises:
        requests.HTTPError if the remote request fails (non-2xx status).
    """
    log.info("Requesting page %d", page)
    params = {
        **SCHOOL_FILTERS,
        "fields": ",".join(SCHOOL_FIELDS),
        "page": page,
    }
    r = session.get(settings.api_base_url, params=params, timeout=settings.request_timeout)
    r.raise_for_status()
    payload = r.json()

    results = payload.get("results") or []
    metadata = payload.get("metadata") or {}

    if page == 0:
        total = int(metadata.get("total", 0))
        log.info(
            "Fetched the first page of data. Found %d schools matching the given criteria.",
            total,
        )
        log.info(
            "Will be fetching %d pages at %d results per page.",
            math.ceil(total / settings.page_size),
            settings.page_size,
        )

    log.info("Fetched %d schools info", len(results))
    for school in results:
        log_school_info(school)

    return results, metadata


def log_school_info(school: dict[str, Any]) -> None:
    """Log a short summary for schools with at least one qualifying program."""
    all_programs = school_programs(school)
    fitting = [p for p in all_programs if program_fits_criteria(p)]
    if not fitting:
        return

    log.info(
        "School: %s | students: %s | programs: %d | programs fitting criteria: %d",
        school.get("school.name"),
        school.get("latest.student.size") or "???",
        len(all_programs),
        len(fitting),
    )


def iter_school_pages(
    settings: Settings,
    session: requests.Session | None = None,
) -> Iterator[list[dict[str, Any]]]:
    """Yield non-empty pages of raw schools, stopping at the first empty page."""
    session = session or build_session(settings)
    page = 0
    while True:
        results, _ = fetch_page(session, settings, page)
        if not results:
            return
        yield results
        page += 1


def fetch_all_schools(
    settings: Settings,
    session: requests.Session | None = None,
) -> list[dict[str, Any]]:
    """Download every page of schools matching `SCHOOL_FILTERS`.

    Returns:
        List of raw school dicts keyed by the requested API field names.
    """
    log.info("Starting to fetch data")
    schools: list[dict[str, Any]] = []
    for results in iter_school_pages(settings, session):
        schools.extend(results)
    log.info("Done fetching data: %d schools", len(schools))
    return schools
