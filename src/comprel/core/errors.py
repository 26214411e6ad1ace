"""comprel error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Store
- 4xxx: Relations
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Store (3xxx)
    STORE_NOT_FOUND = 3001
    STORE_QUERY_FAILED = 3002

    # Relations (4xxx)
    COMPONENT_NOT_FOUND = 4001
    TOO_FEW_COMPONENTS = 4002


@dataclass(frozen=True, slots=True)
class ComprelError(Exception):
    """Base error with structured context for tool and CLI responses."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'COMPONENT_NOT_FOUND')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON/MCP responses."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(ComprelError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class StoreError(ComprelError):
    """Metadata store errors."""

    @classmethod
    def not_found(cls, path: str) -> "StoreError":
        return cls(
            code=ErrorCode.STORE_NOT_FOUND,
            message=f"Component database not found: {path}",
            details={"path": path},
        )

    @classmethod
    def query_failed(cls, operation: str, reason: str) -> "StoreError":
        """A store read failed mid-analysis; ``operation`` names the analysis."""
        return cls(
            code=ErrorCode.STORE_QUERY_FAILED,
            message=f"{operation} failed: {reason}",
            retryable=True,
            details={"operation": operation, "reason": reason},
        )


class ComponentNotFoundError(ComprelError):
    """Requested component identity does not exist in the store."""

    @classmethod
    def for_name(cls, name: str) -> "ComponentNotFoundError":
        return cls(
            code=ErrorCode.COMPONENT_NOT_FOUND,
            message=f"Component '{name}' not found",
            details={"component": name},
        )

    @classmethod
    def for_names(cls, names: list[str]) -> "ComponentNotFoundError":
        return cls(
            code=ErrorCode.COMPONENT_NOT_FOUND,
            message=f"Component(s) not found: {', '.join(names)}",
            details={"components": list(names)},
        )


class ConflictInputError(ComprelError):
    """Conflict analysis was asked about fewer than two distinct components."""

    @classmethod
    def too_few(cls, count: int) -> "ConflictInputError":
        return cls(
            code=ErrorCode.TOO_FEW_COMPONENTS,
            message="at least 2 components required for conflict analysis",
            details={"distinct_components": count},
        )
