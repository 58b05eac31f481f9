"""Pydantic configuration models for declutter."""

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

VALID_LLM_PROVIDERS = {"auto", "claude", "openai"}
VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class LLMConfig(BaseModel):
    """LLM provider configuration."""

    provider: str = "auto"
    model: Optional[str] = None  # None = use provider default
    api_key: Optional[str] = None
    max_tokens: int = 2000

    @field_validator("provider")
    @classmethod
    def validate_provider(cls, v: str) -> str:
        if v not in VALID_LLM_PROVIDERS:
            raise ValueError(f"Invalid LLM provider: {v}. Must be one of {VALID_LLM_PROVIDERS}")
        return v


class PathsConfig(BaseModel):
    """File paths configuration."""

    db: Path = Path("~/declutter/declutter.db")
    log_file: Path = Path("~/declutter/declutter.log")

    @model_validator(mode="after")
    def expand_paths(self):
        self.db = self.db.expanduser()
        self.log_file = self.log_file.expanduser()
        return self


class ScanConfig(BaseModel):
    """Tick cadence for the simulated scan and cleaning progress bars."""

    scan_tick_seconds: float = 0.05
    clean_tick_seconds: float = 0.05
    scan_step: int = 2
    clean_step: int = 1
    default_action: str = "delete"

    @field_validator("scan_tick_seconds", "clean_tick_seconds")
    @classmethod
    def validate_interval(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"tick interval must be > 0, got {v}")
        return v

    @field_validator("scan_step", "clean_step")
    @classmethod
    def validate_step(cls, v: int) -> int:
        if not 1 <= v <= 100:
            raise ValueError(f"step must be 1-100, got {v}")
        return v

    @field_validator("default_action")
    @classmethod
    def validate_action(cls, v: str) -> str:
        if v not in ("delete", "archive", "compress"):
            raise ValueError(f"Invalid default_action: {v}")
        return v


class PreferencesConfig(BaseModel):
    max_entries: int = 50


class RetryConfig(BaseModel):
    """Retry/backoff for LLM calls."""

    max_attempts: int = 3
    min_wait: float = 2.0
    llm_max_wait: float = 30.0


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    json_mode: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        v_upper = v.upper()
        if v_upper not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Must be one of {VALID_LOG_LEVELS}")
        return v_upper


class UserConfig(BaseModel):
    id: str = "local"


class DeclutterConfig(BaseModel):
    """Main configuration model."""

    user: UserConfig = Field(default_factory=UserConfig)
    llm: LLMConfig = Field(default_factory=LLMConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    scan: ScanConfig = Field(default_factory=ScanConfig)
    preferences: PreferencesConfig = Field(default_factory=PreferencesConfig)
    retry: RetryConfig = Field(default_factory=RetryConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @model_validator(mode="after")
    def expand_env_vars(self):
        """Expand ${VAR} in the API key."""
        key = self.llm.api_key
        if key and key.startswith("${") and key.endswith("}"):
            self.llm.api_key = os.getenv(key[2:-1], "")
        return self

    @classmethod
    def from_dict(cls, data: dict) -> "DeclutterConfig":
        return cls.model_validate(data)

    def to_dict(self) -> dict:
        return self.model_dump(mode="python")
