# watir/utils/config.py
from __future__ import annotations

import functools
from enum import Enum
from pathlib import Path
from typing import Any, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# ---------- Enums ----------

class BrowserName(str, Enum):
    chrome = "chrome"
    firefox = "firefox"
    edge = "edge"
    safari = "safari"
    remote = "remote"


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


# ---------- Settings ----------

class Settings(BaseSettings):
    """
    Process-wide configuration read by the element core.

    Values load in this order of precedence:
      1) Runtime overrides via configure()
      2) Environment variables (WATIR_ prefix)
      3) .env file in the working directory
      4) Defaults below
    """

    # ---- Waiting & locating ----
    DEFAULT_TIMEOUT: float = Field(default=30.0, ge=0, description="Seconds to wait for elements; 0 disables waiting")
    POLL_INTERVAL: float = Field(default=0.1, gt=0, description="Seconds between predicate evaluations")
    ALWAYS_LOCATE: bool = Field(default=True, description="Relocate stale elements instead of failing")

    # ---- Browser configuration ----
    BROWSER: BrowserName = Field(default=BrowserName.chrome)
    HEADLESS: bool = Field(default=False)
    REMOTE_URL: str = Field(default="http://127.0.0.1:4444/wd/hub")
    BROWSER_ARGS: List[str] = Field(default_factory=list, description="Extra command-line switches for the browser")
    PAGE_LOAD_TIMEOUT: float = Field(default=60.0, gt=0)

    # ---- Logging ----
    LOG_LEVEL: LogLevel = Field(default=LogLevel.WARNING)
    LOG_TO_FILE: bool = Field(default=False)
    LOG_FILE: Path = Field(default=Path("./watir.log"))
    COLORIZED_OUTPUT: bool = Field(default=True)

    model_config = SettingsConfigDict(
        env_prefix="WATIR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_assignment=True,
    )

    @field_validator("LOG_FILE", mode="before")
    @classmethod
    def _coerce_to_path(cls, v):
        if isinstance(v, Path):
            return v
        return Path(str(v)) if v is not None else v

    @field_validator("LOG_FILE", mode="after")
    @classmethod
    def _absolutize_log_file(cls, v: Path):
        return v if v.is_absolute() else Path.cwd() / v

    @field_validator("BROWSER", mode="before")
    @classmethod
    def _normalise_browser(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    # Convenience: command-line switches for selenium Options objects
    def browser_arguments(self) -> List[str]:
        args = list(self.BROWSER_ARGS)
        if self.HEADLESS and self.BROWSER in (BrowserName.chrome, BrowserName.edge):
            args.append("--headless=new")
        elif self.HEADLESS and self.BROWSER == BrowserName.firefox:
            args.append("-headless")
        return args


# --------- Public accessors (memoized) ---------

@functools.lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Load and cache settings once per process.
    Call `get_settings.cache_clear()` if you need to reload after changing env.
    """
    return Settings()


def configure(**overrides: Any) -> Settings:
    """
    Change settings at runtime, e.g. ``configure(default_timeout=5)``.
    Keys are case-insensitive; values are validated like env input.
    """
    s = get_settings()
    for key, value in overrides.items():
        name = key.upper()
        if name not in Settings.model_fields:
            raise KeyError(f"unknown setting: {key}")
        setattr(s, name, value)
    return s


def default_timeout(timeout: Optional[float] = None) -> float:
    return get_settings().DEFAULT_TIMEOUT if timeout is None else max(0.0, float(timeout))
