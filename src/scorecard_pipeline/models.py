"""Pydantic models used for Clean and Gold validation.

Attributes are snake_case; the camelCase aliases (`cipCode`,
`earningsSampleSize`, ...) are the field names used in the JSON files.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel

_CONFIG = ConfigDict(extra="forbid", populate_by_name=True, alias_generator=to_camel)


def _plain_number(v: float | None) -> int | float | None:
    """Write whole-number statistics as ints (61000, not 61000.0)."""
    if isinstance(v, float) and v.is_integer():
        return int(v)
    return v


class DegreeRecord(BaseModel):
    """One program offered by one school (Clean layer).

    Attributes:
        cip_code: 4-digit CIP code of the program, e.g. "5138".
        name: Program title.
        earnings_sample_size: Number of graduates behind `median_earnings`.
        median_earnings: Median earnings of graduates.
        debt_sample_size: Number of graduates behind `median_debt`.
        median_debt: Median debt of graduates.
    """
    model_config = ConfigDict(**_CONFIG, frozen=True)
    cip_code: str | None = None
    name: str | None = None
    earnings_sample_size: int | None = Field(None, ge=0)
    median_earnings: float | None = Field(None, ge=0)
    debt_sample_size: int | None = Field(None, ge=0)
    median_debt: float | None = Field(None, ge=0)

    @field_validator("cip_code", mode="before")
    @classmethod
    def _stringify_code(cls, v: Any) -> Any:
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_serializer("median_earnings", "median_debt")
    def _serialize_median(self, v: float | None) -> int | float | None:
        return _plain_number(v)


class SchoolRecord(BaseModel):
    """Schema for a cleaned school with its flattened program list."""
    model_config = _CONFIG
    id: int
    name: str | None = None
    students: int | None = Field(None, ge=0)
    city: str | None = None
    state: str | None = None
    degrees: list[DegreeRecord] = Field(default_factory=list)


class AggregateResult(BaseModel):
    """Gold model holding weighted medians for one CIP code (or Overall).

    The Overall result carries `cip_code=None` and no sample sizes.
    """
    model_config = _CONFIG
    cip_code: str | None
    name: str | None
    earnings_sample_size: int | None = Field(None, ge=0)
    median_earnings: float
    debt_sample_size: int | None = Field(None, ge=0)
    median_debt: float

    @field_serializer("median_earnings", "median_debt")
    def _serialize_median(self, v: float) -> int | float | None:
        return _plain_number(v)

    def as_record(self) -> dict[str, Any]:
        """Return the JSON-ready dict, omitting sample sizes that are unset."""
        record = self.model_dump(mode="json", by_alias=True)
        for key in ("earningsSampleSize", "debtSampleSize"):
            if record[key] is None:
                del record[key]
        return record
