"""Weighted-median aggregation of degree records.

Functions in this module build the Gold-layer results from the degree table
produced by `scorecard_pipeline.clean.transform.degrees_to_frame`.

Expectations:
- Input: a pandas DataFrame with the `DEGREE_COLUMNS` schema, or any
  iterable of `DegreeRecord` objects / mappings with the same keys. The
  camelCase JSON names (`cipCode`, `medianDebt`, ...) are accepted too.
- Output: a list of `AggregateResult`, Overall first, then one result per
  CIP code ordered by ascending earnings sample size.

Each record counts as `weight` identical observations of its value; the
weighted median is the median of that expanded multiset, found by walking
the records in value order without materializing it. Inputs are never
mutated: sorting happens on copies.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Iterable

import numpy as np
import pandas as pd
from pydantic.alias_generators import to_camel

from scorecard_pipeline.clean.transform import DEGREE_COLUMNS
from scorecard_pipeline.models import AggregateResult, DegreeRecord

log = logging.getLogger(__name__)

OVERALL_NAME = "Overall."

EARNINGS = ("median_earnings", "earnings_sample_size")
DEBT = ("median_debt", "debt_sample_size")

ELIGIBILITY_FIELDS = [
    "cip_code",
    "earnings_sample_size",
    "median_earnings",
    "debt_sample_size",
    "median_debt",
]

# camelCase JSON key -> degree column
COLUMN_ALIASES = {to_camel(c): c for c in DEGREE_COLUMNS}


def _as_frame(records: Any) -> pd.DataFrame:
    """Return `records` as a degree DataFrame with snake_case columns.

    DataFrames without camelCase columns pass through unchanged.
    """
    if isinstance(records, pd.DataFrame):
        df = records
    else:
        rows = [
            r.model_dump() if isinstance(r, DegreeRecord) else dict(r)
            for r in records
        ]
        df = pd.DataFrame(rows, columns=DEGREE_COLUMNS if not rows else None)

    renames = {k: v for k, v in COLUMN_ALIASES.items() if k in df.columns and k != v}
    return df.rename(columns=renames) if renames else df


def _scalar(value: Any) -> Any:
    """Unwrap numpy scalars into plain Python numbers."""
    return value.item() if isinstance(value, np.generic) else value


def is_present(value: Any) -> bool:
    """Return True when `value` is non-null, non-NaN and non-zero/non-empty.

    Zero and empty values are treated as missing data, not as real zeros.
    """
    if value is None or value is pd.NA:
        return False
    if isinstance(value, float) and np.isnan(value):
        return False
    return bool(value)


def is_eligible(record: DegreeRecord | Mapping[str, Any] | pd.Series) -> bool:
    """Return True if a degree record has a CIP code and all four statistics."""
    if isinstance(record, DegreeRecord):
        return all(is_present(getattr(record, f)) for f in ELIGIBILITY_FIELDS)
    return all(is_present(record.get(f)) for f in ELIGIBILITY_FIELDS)


def filter_eligible(records: Any) -> pd.DataFrame:
    """Return the eligible records in their original order.

    Args:
        records: Degree DataFrame or iterable of degree records.

    Raises:
        KeyError: if a column required by the eligibility check is absent.

    Returns:
        New DataFrame (fresh index) holding only eligible rows, with the
        sample-size columns cast to integers.
    """
    df = _as_frame(records)
    if df.empty:
        return df.iloc[0:0].copy()

    missing = [f for f in ELIGIBILITY_FIELDS if f not in df.columns]
    if missing:
        raise KeyError(f"degree records are missing columns: {', '.join(missing)}")

    mask = df.apply(is_eligible, axis=1).astype(bool)

    eligible = df.loc[mask].reset_index(drop=True)
    return eligible.astype({"earnings_sample_size": "int64", "debt_sample_size": "int64"})


def weighted_sample_size(records: Any, weight_field: str) -> int:
    """Sum `weight_field` across records; 0 for empty input."""
    df = _as_frame(records)
    if df.empty:
        return 0
    weight_field = COLUMN_ALIASES.get(weight_field, weight_field)
    return _scalar(df[weight_field].sum())


def weighted_median(records: Any, value_field: str, weight_field: str) -> Any:
    """Return the sample-weighted median of `value_field`.

    Records are stably sorted by value (equal values keep their input
    order). Walking that order, the result is the value of the first record
    at which the running weight reaches `total / 2`. The midpoint is not
    rounded, so odd totals land on the record holding the middle
    observation. A non-positive total (only possible with malformed
    weights) is already reached before any record is passed, so the
    smallest value is returned.

    Args:
        records: Degree DataFrame or iterable of degree records.
        value_field: Column holding the value, e.g. "median_earnings".
        weight_field: Column holding the weight, e.g. "earnings_sample_size".

    Returns:
        The weighted median, or 0 for empty input.
    """
    df = _as_frame(records)
    if df.empty:
        return 0

    value_field = COLUMN_ALIASES.get(value_field, value_field)
    weight_field = COLUMN_ALIASES.get(weight_field, weight_field)
    midpoint = weighted_sample_size(df, weight_field) / 2
    ordered = df.sort_values(value_field, kind="stable")
    values = ordered[value_field].to_numpy()
    passed = ordered[weight_field].cumsum().to_numpy()

    if midpoint <= 0:
        return _scalar(values[0])

    reached = np.flatnonzero(passed >= midpoint)
    if reached.size:
        return _scalar(values[reached[0]])
    # NaN weights never reach the midpoint
    return _scalar(values[-1])


def _group_result(cip_code: str, group: pd.DataFrame) -> AggregateResult:
    name = group["name"].iloc[0]
    return AggregateResult(
        cip_code=cip_code,
        name=None if pd.isna(name) else name,
        earnings_sample_size=weighted_sample_size(group, EARNINGS[1]),
        median_earnings=weighted_median(group, *EARNINGS),
        debt_sample_size=weighted_sample_size(group, DEBT[1]),
        median_debt=weighted_median(group, *DEBT),
    )


def aggregate(records: Any) -> list[AggregateResult]:
    """Compute weighted medians of earnings and debt, overall and per CIP code.

    Groups are processed in ascending CIP-code order and each is named after
    its first eligible record. The result list starts with the Overall entry
    (no sample sizes), followed by the group results stably sorted by
    ascending earnings sample size.

    Args:
        records: Degree DataFrame or iterable of degree records.

    Returns:
        List of `AggregateResult`.
    """
    eligible = filter_eligible(records)
    log.info("Aggregating %d eligible degree records", len(eligible))

    overall = AggregateResult(
        cip_code=None,
        name=OVERALL_NAME,
        median_earnings=weighted_median(eligible, *EARNINGS),
        median_debt=weighted_median(eligible, *DEBT),
    )

    groups: list[AggregateResult] = []
    if not eligible.empty:
        groups = [
            _group_result(cip_code, group)
            for cip_code, group in eligible.groupby("cip_code", sort=True)
        ]
    groups.sort(key=lambda r: r.earnings_sample_size)

    log.info("Computed weighted medians for %d CIP codes", len(groups))
    return [overall, *groups]


def results_to_records(results: Iterable[AggregateResult]) -> list[dict[str, Any]]:
    """Return JSON-ready dicts (camelCase keys) for a list of results."""
    return [r.as_record() for r in results]
