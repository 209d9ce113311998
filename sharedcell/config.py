"""
Configuration settings for sharedcell.

Uses Pydantic Settings to load environment variables for logging and the
parameters of the demonstration scenarios. The ownership semantics themselves
are not configurable.
"""
from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Logging
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    # Scenario defaults
    record_id: str = Field("ConfigItem", alias="RECORD_ID")
    record_initial_value: int = Field(10, alias="RECORD_INITIAL_VALUE")
    record_updated_value: int = Field(25, alias="RECORD_UPDATED_VALUE")
    scenario_owners: int = Field(2, ge=1, alias="SCENARIO_OWNERS")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
