"""Shared fixtures for MCP tests."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest

from comprel.mcp.context import AppContext
from comprel.mcp.registry import ToolRegistry, registry
from comprel.store.db import Database


@pytest.fixture
def clean_registry() -> Generator[ToolRegistry, None, None]:
    """Clear and yield the global registry, restore after test."""
    original_tools = dict(registry._tools)
    registry.clear()
    yield registry
    registry._tools = original_tools


@pytest.fixture
def app_context(database: Database, db_path: Path, seed) -> Generator[AppContext, None, None]:
    """AppContext over a store holding a small component graph."""
    seed(
        "dropdown",
        guidance=["Requires the modal component.", "Recommended with accordion."],
        examples=[("html", '<link rel="stylesheet" href="x.css"><script src="y.js"></script>')],
    )
    seed("modal", guidance=["Requires dropdown."])
    seed("accordion")

    context = AppContext.create(db_path)
    yield context
    context.database.dispose()
