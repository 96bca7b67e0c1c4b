"""Lightweight settings layer wrapping environment variables with validation.

Complements the dataclass presets in ``utils.config``: presets describe
detection parameters, these settings describe how the process runs (logging,
spatial index, timing). Use get_settings() wherever env-driven behavior is
needed; tests toggling env vars call ``get_settings.cache_clear()``.
"""
from __future__ import annotations
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment settings (prefix ``HBONDKIT_``)."""
    model_config = SettingsConfigDict(env_prefix='HBONDKIT_', case_sensitive=False, extra='ignore')

    log_level: str = Field("INFO")
    json_logging: bool = Field(False)
    log_file: str | None = Field(None)
    performance_mode: bool = Field(False)
    # Logging verbosity gating (demote detector-level info logs in performance mode unless explicitly allowed)
    verbose_detector_logs: bool = Field(False)
    # Candidate pair generation through a KD-tree instead of the full cross product
    enable_spatial_index: bool = Field(True)
    kdtree_pair_threshold: int = Field(5000, ge=0)
    enable_timing: bool = Field(True)
    default_float_precision: int = Field(3, ge=0)
    presets_file: str | None = Field(None)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
