from __future__ import annotations

from itertools import permutations

import pandas as pd

from scorecard_pipeline.aggregate.weighted_median import weighted_median, weighted_sample_size


def _vw(*pairs: tuple[int, int]) -> list[dict[str, int]]:
    return [{"v": v, "w": w} for v, w in pairs]


def test_empty_input_yields_zero() -> None:
    assert weighted_median([], "median_earnings", "earnings_sample_size") == 0
    assert weighted_sample_size([], "earnings_sample_size") == 0
    assert weighted_median(pd.DataFrame(), "v", "w") == 0


def test_sample_size_sums_weights() -> None:
    assert weighted_sample_size(_vw((10, 1), (20, 1), (30, 2)), "w") == 4


def test_walk_stops_where_cumulative_weight_reaches_midpoint() -> None:
    # expanded: [10, 20, 30, 30]; cumulative 1, 2, 4; midpoint 2
    assert weighted_median(_vw((10, 1), (20, 1), (30, 2)), "v", "w") == 20


def test_unit_weights_match_plain_median() -> None:
    values = [7, 3, 9, 1, 5]
    records = [{"v": v, "w": 1} for v in values]
    assert weighted_median(records, "v", "w") == 5


def test_single_record_returns_its_value() -> None:
    for w in (1, 2, 17, 1000):
        assert weighted_median(_vw((42000, w)), "v", "w") == 42000


def test_odd_total_uses_unrounded_midpoint() -> None:
    # total 3, midpoint 1.5: the first record (cumulative 1) is not enough
    assert weighted_median(_vw((10, 1), (20, 2)), "v", "w") == 20


def test_heavy_record_dominates() -> None:
    assert weighted_median(_vw((1, 1), (2, 1), (100, 50)), "v", "w") == 100


def test_order_does_not_matter() -> None:
    base = _vw((10, 1), (20, 1), (30, 2))
    for perm in permutations(base):
        assert weighted_median(list(perm), "v", "w") == 20


def test_input_frame_is_not_reordered() -> None:
    df = pd.DataFrame(_vw((30, 2), (10, 1), (20, 1)))
    before = df.copy()
    weighted_median(df, "v", "w")
    pd.testing.assert_frame_equal(df, before)


def test_non_positive_total_returns_smallest_value() -> None:
    # total -2, midpoint -1: reached before any record is passed
    assert weighted_median(_vw((20, 0), (10, -2)), "v", "w") == 10
    assert weighted_median(_vw((20, 0), (10, 0)), "v", "w") == 10


def test_accepts_json_field_names() -> None:
    records = [
        {"medianEarnings": 10, "earningsSampleSize": 1},
        {"medianEarnings": 20, "earningsSampleSize": 1},
        {"medianEarnings": 30, "earningsSampleSize": 2},
    ]
    assert weighted_median(records, "median_earnings", "earnings_sample_size") == 20
    assert weighted_sample_size(records, "earnings_sample_size") == 4
