from pathlib import Path

import pytest
from pydantic import ValidationError

from uiquery.utils.config import QueryFormat, SelectorConfig, Settings, get_settings


def test_defaults():
    s = get_settings()
    assert s.ENABLE_ARIA_LABEL is False
    assert s.TEST_ID is None
    assert s.DEFAULT_FORMAT is None
    assert s.EXACT_TEXT is True
    assert s.LOG_FILE.is_absolute()
    assert s.selector_config() == SelectorConfig()


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("UIQUERY_ENABLE_ARIA_LABEL", "true")
    monkeypatch.setenv("UIQUERY_TEST_ID", "data-qa")
    monkeypatch.setenv("UIQUERY_DEFAULT_FORMAT", "CSS")
    get_settings.cache_clear()

    s = get_settings()
    assert s.DEFAULT_FORMAT is QueryFormat.css
    assert s.selector_config() == SelectorConfig(enable_aria_label=True, test_id="data-qa")


def test_blank_values_mean_unset(monkeypatch):
    monkeypatch.setenv("UIQUERY_TEST_ID", "")
    monkeypatch.setenv("UIQUERY_DEFAULT_FORMAT", " ")
    s = Settings()
    assert s.DEFAULT_FORMAT is None
    assert s.selector_config().test_id is None


def test_dotenv_file_is_read(tmp_path: Path):
    # the autouse fixture has already moved into tmp_path
    (tmp_path / ".env").write_text("UIQUERY_TEST_ID=data-cy\nUIQUERY_EXACT_TEXT=false\n", encoding="utf-8")
    s = Settings()
    assert s.TEST_ID == "data-cy"
    assert s.EXACT_TEXT is False


def test_invalid_format_is_rejected(monkeypatch):
    monkeypatch.setenv("UIQUERY_DEFAULT_FORMAT", "jsonpath")
    with pytest.raises(ValidationError):
        Settings()


def test_settings_are_memoized():
    assert get_settings() is get_settings()
