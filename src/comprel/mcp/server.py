"""FastMCP server creation and wiring.

Includes:
- Two-phase tool logging: tool_start with params, tool_complete with summary
- Categorized exception logging: summary at error level, traceback at debug
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog
from fastmcp.utilities.json_schema import dereference_refs
from pydantic import BaseModel, Field

from comprel.core.logging import bind_request, clear_request

if TYPE_CHECKING:
    from fastmcp import FastMCP

    from comprel.config.models import ComprelConfig
    from comprel.mcp.context import AppContext
    from comprel.mcp.registry import ToolSpec

log = structlog.get_logger(__name__)


class ToolResponse(BaseModel):
    """Standardized tool response envelope."""

    result: Any = None
    meta: dict[str, Any] = Field(default_factory=dict)

    success: bool
    error: str | None = None


def _extract_log_params(kwargs: dict[str, Any]) -> dict[str, Any]:
    """Key params for the tool_start log line, with long values shortened."""
    params: dict[str, Any] = {}
    for key, value in kwargs.items():
        if isinstance(value, str) and len(value) > 50:
            params[key] = value[:50] + "..."
        elif isinstance(value, list) and len(value) > 3:
            params[key] = f"[{len(value)} items]"
        elif value is not None:
            params[key] = value
    return params


def _extract_result_summary(result: dict[str, Any]) -> dict[str, Any]:
    """Summary metrics from a tool result for logging."""
    summary: dict[str, Any] = {}

    metadata = result.get("metadata")
    if isinstance(metadata, dict) and "total_dependencies" in metadata:
        summary["total_dependencies"] = metadata["total_dependencies"]
    if isinstance(result.get("dependency_chain"), list):
        summary["chain_length"] = len(result["dependency_chain"])
    if isinstance(result.get("installation_notes"), list):
        summary["notes"] = len(result["installation_notes"])

    conflict_summary = result.get("summary")
    if isinstance(conflict_summary, dict):
        summary["total_conflicts"] = conflict_summary.get("total_conflicts")
        summary["risk_level"] = result.get("analysis", {}).get("risk_level")

    return summary


def create_mcp_server(context: AppContext) -> FastMCP:
    """Create FastMCP server with all tools wired to context.

    Args:
        context: AppContext with all ops instances

    Returns:
        Configured FastMCP server ready to run
    """
    from fastmcp import FastMCP

    from comprel.mcp.registry import registry

    # Import tools to trigger registration
    from comprel.mcp.tools import conflicts, relations  # noqa: F401

    log.info("mcp_server_creating", db_path=str(context.db_path))

    mcp = FastMCP(
        "comprel",
        instructions="Component relationship resolver for the ECL component library.",
    )

    tool_count = 0
    for spec in registry.get_all():
        _wire_tool(mcp, spec, context)
        tool_count += 1

    log.info("mcp_server_created", tool_count=tool_count)

    return mcp


def _wire_tool(mcp: FastMCP, spec: ToolSpec, context: AppContext) -> None:
    """Wire a single tool spec to FastMCP.

    The params model's fields become direct parameters of the handler so
    FastMCP generates a flat schema every MCP client accepts.
    """
    from fastmcp.tools.tool import FunctionTool
    from pydantic import ValidationError

    from comprel.mcp.errors import ErrorResponse, MCPError, MCPErrorCode

    params_model = spec.params_model
    spec_handler = spec.handler

    flat_schema = dereference_refs(params_model.model_json_schema())

    async def handler(**kwargs: Any) -> dict[str, Any]:
        tool_name = spec.name
        start_time = time.perf_counter()
        request_id = bind_request(tool_name)

        log.info("tool_start", **_extract_log_params(kwargs))

        try:
            try:
                params = params_model(**kwargs)
            except ValidationError as e:
                elapsed_ms = int((time.perf_counter() - start_time) * 1000)
                first = e.errors()[0]["msg"] if e.errors() else str(e)
                log.warning(
                    "tool_validation_error",
                    error=first,
                    elapsed_ms=elapsed_ms,
                )
                return ToolResponse(
                    success=False,
                    result=None,
                    error=f"Validation error: {first}",
                    meta={
                        "request_id": request_id,
                        "error_type": "validation",
                        "error": ErrorResponse(
                            code=MCPErrorCode.INVALID_PARAMS,
                            message=first,
                            remediation="Fix the listed fields and call the tool again.",
                        ).to_dict(),
                        "validation_errors": [
                            {"field": ".".join(str(x) for x in err["loc"]), "message": err["msg"]}
                            for err in e.errors()[:5]
                        ],
                    },
                ).model_dump()

            try:
                result_data = await spec_handler(context, params)
            except MCPError as e:
                elapsed_ms = int((time.perf_counter() - start_time) * 1000)
                log.warning(
                    "tool_error",
                    error_code=e.code.value,
                    error=e.message,
                    elapsed_ms=elapsed_ms,
                )
                return ToolResponse(
                    success=False,
                    result=None,
                    error=e.message,
                    meta={"request_id": request_id, "error": e.to_response().to_dict()},
                ).model_dump()
            except Exception as e:
                elapsed_ms = int((time.perf_counter() - start_time) * 1000)
                log.error("tool_internal_error", error=str(e), elapsed_ms=elapsed_ms)
                log.debug("tool_internal_error_traceback", exc_info=True)
                return ToolResponse(
                    success=False,
                    result=None,
                    error=str(e),
                    meta={
                        "request_id": request_id,
                        "error": ErrorResponse(
                            code=MCPErrorCode.INTERNAL_ERROR,
                            message=str(e),
                            remediation="Unexpected server failure; see the comprel log for the traceback.",
                            context={"exception": type(e).__name__},
                        ).to_dict(),
                    },
                ).model_dump()

            elapsed_ms = int((time.perf_counter() - start_time) * 1000)
            log.info(
                "tool_complete",
                elapsed_ms=elapsed_ms,
                **_extract_result_summary(result_data),
            )
            return ToolResponse(
                success=True,
                result=result_data,
                meta={"request_id": request_id, "timestamp": int(time.time() * 1000)},
            ).model_dump()
        finally:
            clear_request()

    tool = FunctionTool(
        name=spec.name,
        description=spec.description,
        parameters=flat_schema,
        fn=handler,
    )

    mcp.add_tool(tool)


def run_server(db_path: Path, config: ComprelConfig) -> None:
    """Create and run the MCP server over stdio."""
    from comprel.core.logging import configure_logging
    from comprel.mcp.context import AppContext

    configure_logging(config=config.logging, stdio_server=True)

    log.info("mcp_server_starting", db_path=str(db_path))

    context = AppContext.create(db_path, config)
    mcp = create_mcp_server(context)

    log.info("mcp_server_running")
    try:
        mcp.run()
    finally:
        context.database.dispose()
