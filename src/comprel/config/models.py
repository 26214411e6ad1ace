"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (COMPREL__SECTION__KEY)
3. Project YAML (.comprel/config.yaml)
4. Global YAML (~/.config/comprel/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    COMPREL__<SECTION>__<KEY>=<VALUE>

Examples:
    COMPREL__LOGGING__LEVEL=DEBUG
    COMPREL__DATABASE__PATH=/data/components.db
    COMPREL__RESOLVER__MATCH_STRATEGY=exact
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
MatchStrategyName = Literal["exact_then_substring", "exact"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        COMPREL__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every chain lookup.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class DatabaseConfig(BaseModel):
    """Component metadata store configuration.

    Env vars:
        COMPREL__DATABASE__PATH: SQLite file holding component metadata
        COMPREL__DATABASE__BUSY_TIMEOUT_MS: SQLite busy timeout
    """

    path: str = Field(
        default="components.db",
        description="SQLite database with component pages, guidance and examples. "
        "Relative paths resolve against the project root.",
    )
    busy_timeout_ms: int = Field(
        default=30000,
        description="SQLite busy timeout (ms) while another process seeds the store.",
    )

    @field_validator("busy_timeout_ms")
    @classmethod
    def validate_busy_timeout(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"busy_timeout_ms must be >= 0, got {v}")
        return v


class ResolverConfig(BaseModel):
    """Relationship resolver configuration.

    Env vars:
        COMPREL__RESOLVER__WARNING_LIMIT: Max warning notes kept per component
        COMPREL__RESOLVER__WARNING_MAX_CHARS: Truncation length for warning notes
        COMPREL__RESOLVER__MATCH_STRATEGY: Phrase-to-component matching strategy
    """

    warning_limit: int = Field(
        default=5,
        description="Maximum number of warning notes kept in a dependency record.",
    )
    warning_max_chars: int = Field(
        default=200,
        description="Warning notes longer than this are truncated.",
    )
    match_strategy: MatchStrategyName = Field(
        default="exact_then_substring",
        description="How required phrases resolve to components during chain expansion. "
        "TRADEOFF: 'exact' drops fuzzy matches but never links the wrong component.",
    )

    @field_validator("warning_limit", "warning_max_chars")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"Must be >= 1, got {v}")
        return v


class ComprelConfig(BaseModel):
    """Root configuration for comprel.

    All settings can be configured via:
    1. Environment variables: COMPREL__SECTION__KEY
    2. YAML config files (project or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    resolver: ResolverConfig = Field(default_factory=ResolverConfig)
