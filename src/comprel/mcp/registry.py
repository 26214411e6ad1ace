"""Registry of comprel MCP tools.

Tool modules register their handlers at import time on the module-level
``registry``; ``create_mcp_server`` wires every registered spec.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

if TYPE_CHECKING:
    from comprel.mcp.context import AppContext

# (ctx, validated params) -> result dict
HandlerFn = Callable[["AppContext", Any], Awaitable[dict[str, Any]]]


@dataclass(frozen=True)
class ToolSpec:
    name: str
    handler: HandlerFn
    description: str
    params_model: type[BaseModel]


class ToolRegistry:
    """Named tool specs in registration order."""

    def __init__(self) -> None:
        self._tools: dict[str, ToolSpec] = {}

    def register(
        self,
        name: str,
        description: str,
        params_model: type[BaseModel],
    ) -> Callable[[HandlerFn], HandlerFn]:
        """Decorator registering ``fn`` as the handler of tool ``name``.

        Raises:
            ValueError: If another handler already owns ``name``
        """

        def decorator(fn: HandlerFn) -> HandlerFn:
            existing = self._tools.get(name)
            if existing is not None and existing.handler is not fn:
                raise ValueError(f"MCP tool '{name}' is already registered")
            self._tools[name] = ToolSpec(name, fn, description, params_model)
            return fn

        return decorator

    def names(self) -> list[str]:
        return list(self._tools)

    def get_all(self) -> list[ToolSpec]:
        return list(self._tools.values())

    def get(self, name: str) -> ToolSpec | None:
        return self._tools.get(name)

    def clear(self) -> None:
        self._tools.clear()


registry = ToolRegistry()
