"""Validation utilities for the Clean layer.

Programs are validated against the Pydantic `DegreeRecord` model; records
that fail validation (negative counts, non-numeric statistics) are dropped
and counted.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable

from pydantic import ValidationError

from scorecard_pipeline.models import DegreeRecord

log = logging.getLogger(__name__)


def validate_programs(programs: Iterable[dict[str, Any]]) -> tuple[list[DegreeRecord], int]:
    """Validate cleaned program dicts using Pydantic.

    Args:
        programs: Dicts keyed by `DegreeRecord` field names or aliases.

    Returns:
        A tuple of (list_of_validated_records, bad_count).
    """
    good: list[DegreeRecord] = []
    bad = 0

    for rec in programs:
        try:
            good.append(DegreeRecord.model_validate(rec))
        except ValidationError as e:
            log.debug("Rejected program %s: %s", rec.get("cip_code"), e)
            bad += 1

    return good, bad
