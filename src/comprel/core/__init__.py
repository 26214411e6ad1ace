"""Core module exports."""

from comprel.core.errors import (
    ComponentNotFoundError,
    ComprelError,
    ConfigError,
    ConflictInputError,
    ErrorCode,
    StoreError,
)
from comprel.core.logging import (
    analysis_context,
    bind_request,
    clear_request,
    configure_logging,
    get_log_file_path,
    get_logger,
    get_request_id,
)

__all__ = [
    # Errors
    "ComprelError",
    "ComponentNotFoundError",
    "ConfigError",
    "ConflictInputError",
    "ErrorCode",
    "StoreError",
    # Logging
    "analysis_context",
    "bind_request",
    "clear_request",
    "configure_logging",
    "get_log_file_path",
    "get_logger",
    "get_request_id",
]
