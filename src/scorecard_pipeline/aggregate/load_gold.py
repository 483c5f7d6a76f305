"""Utilities for mirroring pipeline layers into MongoDB.

The Gold dataset is tiny (one document per CIP code), so it is upserted in
a single batch keyed on `cipCode`; the Overall document is the one with a
null `cipCode`.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from pymongo.database import Database

from scorecard_pipeline.db import bulk_upsert
from scorecard_pipeline.models import AggregateResult

log = logging.getLogger(__name__)

RAW_COLLECTION = "raw_schools"
GOLD_COLLECTION = "gold_degree_medians"


def load_raw_schools(db: Database[dict[str, Any]], schools: Iterable[dict[str, Any]]) -> int:
    """Upsert raw school payloads into `raw_schools` keyed on `id`."""
    log.info("Loading raw schools into %s", RAW_COLLECTION)
    attempted = bulk_upsert(db[RAW_COLLECTION], schools, "id")
    log.info("Raw load complete for %s: %d rows", RAW_COLLECTION, attempted)
    return attempted


def load_gold(db: Database[dict[str, Any]], results: Iterable[AggregateResult]) -> int:
    """Upsert aggregated results into `gold_degree_medians`.

    Args:
        db: Target MongoDB database.
        results: Output of `aggregate`.

    Returns:
        Number of documents attempted.
    """
    docs = [r.as_record() for r in results]
    if not docs:
        log.warning("No rows to load for %s", GOLD_COLLECTION)
        return 0

    log.info("Generating gold collection: %s", GOLD_COLLECTION)
    attempted = bulk_upsert(db[GOLD_COLLECTION], docs, "cipCode", batch_size=len(docs))
    log.info("Gold load complete for %s: %d rows", GOLD_COLLECTION, attempted)
    return attempted
