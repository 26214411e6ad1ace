"""Config module exports."""

from comprel.config.loader import get_database_path, load_config
from comprel.config.models import (
    ComprelConfig,
    DatabaseConfig,
    LoggingConfig,
    LogOutputConfig,
    ResolverConfig,
)

__all__ = [
    "load_config",
    "get_database_path",
    "ComprelConfig",
    "DatabaseConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "ResolverConfig",
]
