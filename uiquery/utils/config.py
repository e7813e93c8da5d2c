# uiquery/utils/config.py
from __future__ import annotations

import functools
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# ---------- Enums ----------

class QueryFormat(str, Enum):
    xpath = "xpath"
    css = "css"


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


# ---------- Per-call configuration record ----------

class SelectorConfig(BaseModel):
    """
    Options a selector consults while building its expression.

    Immutable: a compilation reads it but never changes it.
    """

    model_config = ConfigDict(frozen=True)

    enable_aria_label: bool = Field(default=False, description="Also match locators against aria-label")
    test_id: Optional[str] = Field(default=None, description="Attribute name holding test ids, e.g. data-testid")

    @field_validator("test_id", mode="before")
    @classmethod
    def _blank_is_none(cls, v):
        if v is None:
            return None
        v = str(v).strip()
        return v or None


# ---------- Settings ----------

class Settings(BaseSettings):
    """
    Central configuration for uiquery.

    Values load in this order of precedence:
      1) Environment variables (prefixed UIQUERY_)
      2) .env file in project root
      3) Defaults below
    """

    # ---- Selector behaviour ----
    ENABLE_ARIA_LABEL: bool = Field(default=False)
    TEST_ID: Optional[str] = Field(default=None, description="Custom test id attribute name")
    DEFAULT_FORMAT: Optional[QueryFormat] = Field(
        default=None, description="Format used when the caller passes none (falls back to the selector default)"
    )
    EXACT_TEXT: bool = Field(default=True, description="Render text predicates as equality instead of containment")

    # ---- Logging ----
    LOG_LEVEL: LogLevel = Field(default=LogLevel.WARNING)
    LOG_TO_FILE: bool = Field(default=False)
    LOG_FILE: Path = Field(default=Path("./uiquery.log"))
    COLORIZED_OUTPUT: bool = Field(default=True)

    model_config = SettingsConfigDict(
        env_prefix="UIQUERY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("LOG_FILE", mode="after")
    @classmethod
    def _absolutize_log_file(cls, v: Path):
        return v if v.is_absolute() else Path.cwd() / v

    @field_validator("DEFAULT_FORMAT", mode="before")
    @classmethod
    def _lower_format(cls, v):
        # empty env var means "no override"
        if isinstance(v, str):
            return v.strip().lower() or None
        return v

    def selector_config(self) -> SelectorConfig:
        return SelectorConfig(enable_aria_label=self.ENABLE_ARIA_LABEL, test_id=self.TEST_ID)


# --------- Public accessor (memoized) ---------

@functools.lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Load and cache settings once per process.
    Call `get_settings.cache_clear()` if you need to reload after changing env.
    """
    return Settings()
