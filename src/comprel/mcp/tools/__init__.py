"""MCP tool handlers."""

from comprel.mcp.tools import conflicts, relations

__all__ = ["conflicts", "relations"]
