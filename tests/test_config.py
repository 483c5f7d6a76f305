from __future__ import annotations

from pathlib import Path

import pytest

from scorecard_pipeline.config import DEFAULT_API_URL, get_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "COLLEGE_SCORECARD_API_KEY",
        "SCORECARD_API_URL",
        "SCORECARD_PAGE_SIZE",
        "SCORECARD_TIMEOUT",
        "SCORECARD_DATA_DIR",
        "MONGO_URI",
        "MONGO_DB",
    ):
        monkeypatch.delenv(name, raising=False)


def test_missing_api_key_raises() -> None:
    with pytest.raises(RuntimeError, match="COLLEGE_SCORECARD_API_KEY"):
        get_settings()


def test_defaults_without_api_key() -> None:
    s = get_settings(require_api_key=False)
    assert s.api_key is None
    assert s.api_base_url == DEFAULT_API_URL
    assert s.page_size == 10
    assert s.data_dir == Path("data")
    assert s.mongo_uri is None
    assert s.mongo_db == "scorecard"


def test_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("COLLEGE_SCORECARD_API_KEY", " abc123 ")
    monkeypatch.setenv("SCORECARD_PAGE_SIZE", "100")
    monkeypatch.setenv("SCORECARD_DATA_DIR", "/tmp/scorecard")
    s = get_settings()
    assert s.api_key == "abc123"
    assert s.page_size == 100
    assert s.data_dir == Path("/tmp/scorecard")


@pytest.mark.parametrize("value", ["0", "-3", "ten"])
def test_rejects_bad_page_size(monkeypatch: pytest.MonkeyPatch, value: str) -> None:
    monkeypatch.setenv("SCORECARD_PAGE_SIZE", value)
    with pytest.raises(RuntimeError, match="SCORECARD_PAGE_SIZE"):
        get_settings(require_api_key=False)
