"""Configuration models and YAML loader for the trainer search engine."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, model_validator


class DatabaseConfig(BaseModel):
    """Database configuration."""

    path: str = "data/trainers.db"


class PaginationConfig(BaseModel):
    """Page-size limits for ranked results."""

    default_per_page: int = Field(default=12, ge=1, le=50)
    max_per_page: int = Field(default=50, ge=1)

    @model_validator(mode="after")
    def default_within_max(self) -> "PaginationConfig":
        if self.default_per_page > self.max_per_page:
            msg = (
                f"default_per_page ({self.default_per_page}) must not exceed "
                f"max_per_page ({self.max_per_page})"
            )
            raise ValueError(msg)
        return self


class SearchSettings(BaseModel):
    """How candidates are fetched and whether searches are logged."""

    only_available: bool = True
    prefilter_max_rate: bool = True
    record_runs: bool = True


class Settings(BaseModel):
    """Top-level settings loaded from YAML."""

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    pagination: PaginationConfig = Field(default_factory=PaginationConfig)
    search: SearchSettings = Field(default_factory=SearchSettings)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(raw)
