from __future__ import annotations

from typing import Any

from pymongo.errors import PyMongoError

from scorecard_pipeline.aggregate.load_gold import GOLD_COLLECTION, load_gold
from scorecard_pipeline.aggregate.weighted_median import aggregate
from scorecard_pipeline.db import bulk_upsert


class FakeCollection:
    name = "fake"

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.batches: list[list[Any]] = []

    def bulk_write(self, ops: list[Any], ordered: bool = True) -> None:
        if self.fail:
            raise PyMongoError("boom")
        self.batches.append(list(ops))


class FakeDb(dict):
    def __missing__(self, key: str) -> FakeCollection:
        self[key] = FakeCollection()
        return self[key]


def test_bulk_upsert_batches_and_skips_keyless_docs() -> None:
    coll = FakeCollection()
    docs = [{"id": i} for i in range(5)] + [{"name": "no key"}]
    attempted = bulk_upsert(coll, docs, "id", batch_size=2)  # type: ignore[arg-type]
    assert attempted == 5
    assert [len(b) for b in coll.batches] == [2, 2, 1]


def test_bulk_upsert_survives_failed_batches() -> None:
    coll = FakeCollection(fail=True)
    assert bulk_upsert(coll, [{"id": 1}], "id") == 1  # type: ignore[arg-type]


def test_load_gold_upserts_one_doc_per_result(two_group_degrees: list[dict[str, Any]]) -> None:
    db = FakeDb()
    attempted = load_gold(db, aggregate(two_group_degrees))  # type: ignore[arg-type]
    assert attempted == 3
    (batch,) = db[GOLD_COLLECTION].batches
    assert len(batch) == 3


def test_load_gold_with_nothing_to_load() -> None:
    assert load_gold(FakeDb(), []) == 0  # type: ignore[arg-type]
