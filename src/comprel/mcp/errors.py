"""Structured error system for MCP tools.

Provides typed exceptions with error codes and remediation hints so agents
can understand failures and self-correct.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from fastmcp.exceptions import ToolError


class MCPErrorCode(StrEnum):
    """Machine-readable error codes for MCP tool failures."""

    # Validation errors - agent should fix input
    INVALID_PARAMS = "INVALID_PARAMS"

    # Lookup errors
    COMPONENT_NOT_FOUND = "COMPONENT_NOT_FOUND"

    # System errors
    STORE_ERROR = "STORE_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


@dataclass
class ErrorResponse:
    """Structured error response for MCP tools."""

    code: MCPErrorCode
    message: str
    remediation: str
    context: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "code": self.code.value,
            "message": self.message,
            "remediation": self.remediation,
            "context": self.context,
        }


class MCPError(ToolError):
    """Base exception for MCP tool errors with structured response.

    Extends FastMCP's ToolError so FastMCP passes it through unwrapped; the
    server wrapper catches it and returns the structured error code.
    """

    def __init__(
        self,
        code: MCPErrorCode,
        message: str,
        remediation: str,
        **context: Any,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.remediation = remediation
        self.context = context

    def to_response(self) -> ErrorResponse:
        """Convert to ErrorResponse."""
        return ErrorResponse(
            code=self.code,
            message=self.message,
            remediation=self.remediation,
            context=self.context,
        )


class ComponentNotFoundToolError(MCPError):
    """Raised when the requested component is not in the store."""

    def __init__(self, component: str, message: str | None = None) -> None:
        super().__init__(
            code=MCPErrorCode.COMPONENT_NOT_FOUND,
            message=message or f"Component '{component}' not found",
            remediation="Check the component name spelling. Names are matched "
            "case-insensitively against documented component pages.",
            component=component,
        )


class StoreToolError(MCPError):
    """Raised when the metadata store could not answer a lookup."""

    def __init__(self, message: str) -> None:
        super().__init__(
            code=MCPErrorCode.STORE_ERROR,
            message=message,
            remediation="Verify the component database exists and is not locked "
            "by a running crawler, then retry.",
        )
