from __future__ import annotations

import pytest
from pydantic import ValidationError

from scorecard_pipeline.models import AggregateResult, DegreeRecord, SchoolRecord


def test_degree_record_accepts_json_aliases() -> None:
    rec = DegreeRecord.model_validate({
        "cipCode": "5138",
        "name": "Registered Nursing.",
        "earningsSampleSize": 42,
        "medianEarnings": 61000,
        "debtSampleSize": 40,
        "medianDebt": 26500,
    })
    assert rec.cip_code == "5138"
    assert rec.median_debt == 26500


def test_degree_record_stringifies_numeric_code() -> None:
    assert DegreeRecord(cip_code=5138).cip_code == "5138"


def test_degree_record_rejects_negative_sample_size() -> None:
    with pytest.raises(ValidationError):
        DegreeRecord(cip_code="5138", earnings_sample_size=-1)


def test_degree_record_rejects_unknown_fields() -> None:
    with pytest.raises(ValidationError):
        DegreeRecord.model_validate({"cipCode": "5138", "credential": 3})


def test_school_round_trips_through_aliases() -> None:
    school = SchoolRecord(id=1, name="Tiny College", degrees=[DegreeRecord(cip_code="5138")])
    dumped = school.model_dump(mode="json", by_alias=True)
    assert dumped["degrees"][0]["cipCode"] == "5138"
    assert SchoolRecord.model_validate(dumped) == school


def test_group_result_record_keeps_sample_sizes() -> None:
    rec = AggregateResult(
        cip_code="5138",
        name="Nursing",
        earnings_sample_size=50,
        median_earnings=60000,
        debt_sample_size=40,
        median_debt=25000,
    ).as_record()
    assert rec["earningsSampleSize"] == 50
    assert rec["debtSampleSize"] == 40
