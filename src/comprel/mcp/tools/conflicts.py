"""Conflicts MCP tool - analyze_component_conflicts handler."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import Field

from comprel.mcp.errors import (
    ComponentNotFoundToolError,
    MCPError,
    MCPErrorCode,
    StoreToolError,
)
from comprel.mcp.registry import registry
from comprel.mcp.tools.base import BaseParams

if TYPE_CHECKING:
    from comprel.mcp.context import AppContext


class AnalyzeConflictsParams(BaseParams):
    """Parameters for analyze_component_conflicts."""

    component_names: list[str] = Field(
        ..., min_length=2, description="Components that would be used together"
    )
    include_warnings: bool = Field(True, description="Include cautionary pair and combination warnings")
    include_recommendations: bool = Field(
        True, description="Include alternatives named in guidance and shared feature tags"
    )


@registry.register(
    "analyze_component_conflicts",
    "Check whether a set of components can be combined: explicit incompatibilities, "
    "cautionary guidance, a risk score, and suggested alternatives.",
    AnalyzeConflictsParams,
)
async def analyze_component_conflicts(ctx: AppContext, params: AnalyzeConflictsParams) -> dict[str, Any]:
    result = ctx.relation_ops.analyze_conflicts(
        params.component_names,
        include_warnings=params.include_warnings,
        include_recommendations=params.include_recommendations,
    )
    if result["success"]:
        return result

    code = result.get("error_code")
    if code == "COMPONENT_NOT_FOUND":
        raise ComponentNotFoundToolError(", ".join(params.component_names), result["error"])
    if code == "TOO_FEW_COMPONENTS":
        raise MCPError(
            MCPErrorCode.INVALID_PARAMS,
            result["error"],
            "Pass at least two different component names.",
            component_names=params.component_names,
        )
    raise StoreToolError(result["error"])
