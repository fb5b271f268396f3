"""Configuration management for the initiative store."""

from initiative.config.loader import load_config
from initiative.config.models import Config, LoggingConfig, StorageConfig

__all__ = ["Config", "LoggingConfig", "StorageConfig", "load_config"]
