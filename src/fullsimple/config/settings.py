"""Interpreter settings."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Checker and evaluator settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="FULLSIMPLE_",
        case_sensitive=False,
        extra="ignore",
        env_parse_none_str="null",
    )

    max_steps: int | None = Field(default=None, ge=1)
    detect_alias_cycles: bool = Field(default=True)
    trace_steps: bool = Field(default=False)


def load_settings(**overrides: object) -> Settings:
    """Load settings from the environment, with keyword overrides on top."""
    return Settings(**overrides)
