"""
Tool registry with dispatch table for the MCP server.

Maps each advertised tool name to its descriptor, handler and whether a live
browser page is required. Registration order is the advertised order.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from .types import ToolResult, ToolSpec
from .validation import validate_arguments

if TYPE_CHECKING:
    from ..session import SessionManager

logger = logging.getLogger("mcp.playmcp.registry")

# Type alias for handler function
HandlerFunc = Callable[["SessionManager", dict[str, Any]], Awaitable[ToolResult]]


class ToolRegistry:
    """Registry for tool handlers keyed by tool name."""

    def __init__(self, definitions: list[dict[str, Any]] | None = None) -> None:
        self._specs: dict[str, ToolSpec] = {}
        self._definitions: dict[str, dict[str, Any]] = {}
        for definition in definitions or []:
            self._definitions[definition["name"]] = definition

    def register(self, name: str, handler: HandlerFunc, requires_browser: bool = True) -> None:
        """Register a tool handler."""
        self._specs[name] = ToolSpec(name=name, handler=handler, requires_browser=requires_browser)

    def register_many(self, handlers: dict[str, tuple[HandlerFunc, bool]]) -> None:
        """Register multiple handlers at once."""
        for name, (handler, requires_browser) in handlers.items():
            self.register(name, handler, requires_browser)

    def get(self, name: str) -> ToolSpec | None:
        return self._specs.get(name)

    def has(self, name: str) -> bool:
        """Check if handler exists."""
        return name in self._specs

    def definition(self, name: str) -> dict[str, Any] | None:
        definition = self._definitions.get(name)
        return copy.deepcopy(definition) if definition is not None else None

    def list_definitions(self) -> list[dict[str, Any]]:
        """Descriptors of every registered tool, in definition order (deep copies)."""
        return [copy.deepcopy(d) for name, d in self._definitions.items() if name in self._specs]

    async def dispatch(self, name: str, manager: SessionManager, arguments: dict[str, Any] | None) -> ToolResult:
        """
        Validate arguments and run the handler for ``name``.

        Raises:
            KeyError: If tool not found
            ArgumentError: If arguments do not match the inputSchema
            BrowserNotInitializedError: If the tool needs a page and none is open
        """
        spec = self._specs.get(name)
        if spec is None:
            raise KeyError(f"Unknown tool: {name}")

        schema = (self._definitions.get(name) or {}).get("inputSchema") or {}
        args = validate_arguments(name, schema, arguments)

        if spec.requires_browser:
            manager.require_page(name)

        return await spec.handler(manager, args)

    @property
    def tool_names(self) -> list[str]:
        """Get list of registered tool names."""
        return list(self._specs.keys())

    def __len__(self) -> int:
        return len(self._specs)


def create_default_registry() -> ToolRegistry:
    """Create registry with all default handlers."""
    from .definitions import TOOL_DEFINITIONS
    from .handlers import ALL_HANDLERS

    registry = ToolRegistry(TOOL_DEFINITIONS)
    registry.register_many(ALL_HANDLERS)
    logger.debug("Registered %d tool handlers", len(registry))
    return registry
