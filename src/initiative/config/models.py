"""Pydantic configuration models for the initiative store."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings


class StorageConfig(BaseModel):
    """Storage configuration."""

    data_directory: Path = Field(default_factory=lambda: Path("~/.initiative").expanduser())
    db_name: str = Field(default="initiative.db", min_length=1)
    # None opens at the highest registered schema version
    target_version: int | None = Field(default=None, ge=1)

    @field_validator("data_directory", mode="before")
    @classmethod
    def expand_path(cls, v: Path | str) -> Path:
        """Expand user path and resolve to absolute."""
        if isinstance(v, str):
            v = Path(v)
        return v.expanduser().resolve()

    @property
    def db_path(self) -> Path:
        """Full path of the SQLite database file."""
        return self.data_directory / self.db_name


class LoggingConfig(BaseModel):
    """Logging configuration for loguru."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["console", "json"] = "console"
    file: Path | None = None
    # aiosqlite logs every statement at DEBUG
    sqlite_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    rotation: str = "10 MB"
    retention: str = "7 days"


class Config(BaseSettings):
    """Root configuration for the initiative store."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {
        "env_prefix": "INITIATIVE_",
        "env_nested_delimiter": "__",
    }
