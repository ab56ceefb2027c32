"""Terrain configuration."""

import json
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Terrain settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CHUNK_TERRAIN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    world_seed: int = 11

    # Samples per chunk side and samples per world unit
    chunk_width: int = Field(default=32, gt=0)
    resolution: int = Field(default=2, gt=0)

    # Registered generator name and parameter overrides on top of its defaults
    generator: str = "sine"
    generator_params: Annotated[dict[str, float], NoDecode] = {"amplitude": 16.0}

    # Logging
    log_level: str = "info"

    @field_validator("generator_params", mode="before")
    @classmethod
    def parse_generator_params(cls, v):
        """Parse generator parameters from a JSON object or ``name=value`` pairs."""
        if isinstance(v, str):
            try:
                parsed = json.loads(v)
                if isinstance(parsed, dict):
                    return parsed
            except json.JSONDecodeError:
                pass
            pairs = (item.split("=", 1) for item in v.split(",") if item.strip())
            return {name.strip(): value.strip() for name, value in pairs}
        return v


settings = Settings()
