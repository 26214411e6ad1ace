"""Relations MCP tool - analyze_component_dependencies handler."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import Field

from comprel.mcp.errors import ComponentNotFoundToolError, StoreToolError
from comprel.mcp.registry import registry
from comprel.mcp.tools.base import BaseParams

if TYPE_CHECKING:
    from comprel.mcp.context import AppContext


# =============================================================================
# Parameter Models
# =============================================================================


class AnalyzeDependenciesParams(BaseParams):
    """Parameters for analyze_component_dependencies."""

    component_name: str = Field(..., min_length=1, description="Component to analyze")
    include_suggestions: bool = Field(
        True, description="Include commonly paired components and enhancements"
    )
    include_conflicts: bool = Field(True, description="Include incompatible components and warnings")
    recursive: bool = Field(False, description="Follow required components into a dependency chain")


# =============================================================================
# Tool Handlers
# =============================================================================


@registry.register(
    "analyze_component_dependencies",
    "Analyze what a component requires, is commonly paired with, and conflicts with. "
    "Set recursive=true to expand the chain of required components.",
    AnalyzeDependenciesParams,
)
async def analyze_component_dependencies(
    ctx: AppContext, params: AnalyzeDependenciesParams
) -> dict[str, Any]:
    """Run a dependency analysis and lift failures into MCP errors."""
    result = ctx.relation_ops.analyze_dependencies(
        params.component_name,
        include_suggestions=params.include_suggestions,
        include_conflicts=params.include_conflicts,
        recursive=params.recursive,
    )
    if result["success"]:
        return result

    if result.get("error_code") == "COMPONENT_NOT_FOUND":
        raise ComponentNotFoundToolError(params.component_name, result["error"])
    raise StoreToolError(result["error"])
