from __future__ import annotations

from typing import Any

import pytest


def degree(
    cip_code: str | None,
    name: str | None,
    earnings_sample_size: Any,
    median_earnings: Any,
    debt_sample_size: Any,
    median_debt: Any,
) -> dict[str, Any]:
    return {
        "cip_code": cip_code,
        "name": name,
        "earnings_sample_size": earnings_sample_size,
        "median_earnings": median_earnings,
        "debt_sample_size": debt_sample_size,
        "median_debt": median_debt,
    }


@pytest.fixture
def two_group_degrees() -> list[dict[str, Any]]:
    """Degrees for CIP codes 51.38 and 11.07, two eligible records each."""
    return [
        degree("51.38", "Bogus", 1000, 10, 1000, 0),
        degree("51.38", "Registered Nursing", 30, 60000, 25, 25000),
        degree("11.07", "Computer Science", 10, 80000, 10, 20000),
        degree("51.38", "Nursing", 20, 70000, 15, 27000),
        degree("11.07", "Computer and Information Sciences", 5, 90000, 5, 22000),
    ]


@pytest.fixture
def raw_school() -> dict[str, Any]:
    return {
        "id": 100654,
        "school.name": "Alabama A & M University",
        "school.city": "Normal",
        "school.state": "AL",
        "latest.student.size": 5090,
        "latest.programs.cip_4_digit": [
            {
                "code": "5138",
                "title": "Registered Nursing.",
                "credential": {"level": 3},
                "earnings": {"count": 42, "median_earnings": 61000},
                "debt": {"count": 40, "median_debt": 26500},
            },
            {
                "code": "1107",
                "title": "Computer Science.",
                "credential": {"level": 2},
                "earnings": {"count": None, "median_earnings": None},
                "debt": {"count": 12, "median_debt": 9000},
            },
        ],
    }
