"""Configuration helpers and Settings container.

This module provides a small `Settings` dataclass and `get_settings` which
reads environment variables (including a check that
`COLLEGE_SCORECARD_API_KEY` is present when the API is going to be called).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os

from dotenv import load_dotenv

# Explicitly load .env from project root
PROJECT_ROOT = Path(__file__).resolve().parents[2]
load_dotenv(PROJECT_ROOT / ".env")

DEFAULT_API_URL = "https://api.data.gov/ed/collegescorecard/v1/schools"
DEFAULT_PAGE_SIZE = 10
DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True)
class Settings:
    """Container for pipeline configuration read from the environment.

    Attributes:
        api_key: api.data.gov key for the College Scorecard API (may be None
            for commands that never touch the API).
        api_base_url: Schools endpoint of the College Scorecard API.
        page_size: Number of schools requested per page.
        request_timeout: HTTP timeout in seconds.
        data_dir: Directory holding `schoolData.json` and `degreeData.json`.
        mongo_uri: Optional MongoDB connection URI for mirroring layers.
        mongo_db: Target MongoDB database name.
    """
    api_key: str | None
    api_base_url: str
    page_size: int
    request_timeout: float
    data_dir: Path
    mongo_uri: str | None
    mongo_db: str


def _positive(name: str, raw: str, cast: type) -> int | float:
    try:
        value = cast(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be a number, got {raw!r}.") from None
    if value <= 0:
        raise RuntimeError(f"{name} must be positive, got {raw!r}.")
    return value


def get_settings(require_api_key: bool = True) -> Settings:
    """Read environment variables and return a frozen `Settings` object.

    Args:
        require_api_key: When True, a missing API key is an error.

    Raises:
        RuntimeError: if `COLLEGE_SCORECARD_API_KEY` is required but not set,
            or a numeric setting is not a positive number.
    """
    api_key = os.getenv("COLLEGE_SCORECARD_API_KEY", "").strip() or None
    api_base_url = os.getenv("SCORECARD_API_URL", DEFAULT_API_URL).rstrip("/")
    page_size = _positive(
        "SCORECARD_PAGE_SIZE", os.getenv("SCORECARD_PAGE_SIZE", str(DEFAULT_PAGE_SIZE)), int
    )
    request_timeout = _positive(
        "SCORECARD_TIMEOUT", os.getenv("SCORECARD_TIMEOUT", str(DEFAULT_TIMEOUT)), float
    )
    data_dir = Path(os.getenv("SCORECARD_DATA_DIR", "data"))
    mongo_uri = os.getenv("MONGO_URI", "").strip() or None
    mongo_db = os.getenv("MONGO_DB", "scorecard")

    if require_api_key and not api_key:
        raise RuntimeError(
            "COLLEGE_SCORECARD_API_KEY is required. Set it in .env "
            "(get a key at https://api.data.gov/signup/)."
        )

    return Settings(
        api_key=api_key,
        api_base_url=api_base_url,
        page_size=int(page_size),
        request_timeout=float(request_timeout),
        data_dir=data_dir,
        mongo_uri=mongo_uri,
        mongo_db=mongo_db,
    )
