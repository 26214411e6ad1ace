"""MCP server module - FastMCP tool registration and wiring."""

from comprel.mcp.context import AppContext
from comprel.mcp.registry import ToolRegistry, ToolSpec
from comprel.mcp.server import create_mcp_server

__all__ = ["AppContext", "ToolRegistry", "ToolSpec", "create_mcp_server"]
