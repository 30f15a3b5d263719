"""
Lifecycle and navigation tool handlers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ... import tools
from ..types import ToolResult

if TYPE_CHECKING:
    from ...session import SessionManager


async def handle_open_browser(manager: SessionManager, args: dict[str, Any]) -> ToolResult:
    result = await manager.open(headless=args.get("headless"), debug=bool(args.get("debug", False)))
    if result.get("alreadyOpen"):
        return ToolResult.text("Browser already open", data=result)
    return ToolResult.text("Browser opened successfully", data=result)


async def handle_close_browser(manager: SessionManager, args: dict[str, Any]) -> ToolResult:
    result = await manager.close()
    return ToolResult.text("Browser closed successfully", data=result)


async def handle_navigate(manager: SessionManager, args: dict[str, Any]) -> ToolResult:
    result = await tools.navigate(manager, args["url"])
    return ToolResult.text("Navigation successful", data=result)


async def handle_go_back(manager: SessionManager, args: dict[str, Any]) -> ToolResult:
    result = await tools.go_back(manager)
    return ToolResult.text("Navigated back successfully", data=result)


async def handle_go_forward(manager: SessionManager, args: dict[str, Any]) -> ToolResult:
    result = await tools.go_forward(manager)
    return ToolResult.text("Navigated forward successfully", data=result)


async def handle_refresh(manager: SessionManager, args: dict[str, Any]) -> ToolResult:
    result = await tools.refresh(manager)
    return ToolResult.text("Page refreshed successfully", data=result)


LIFECYCLE_HANDLERS: dict[str, tuple] = {
    "openBrowser": (handle_open_browser, False),
    "navigate": (handle_navigate, True),
    "goBack": (handle_go_back, True),
    "goForward": (handle_go_forward, True),
    "refresh": (handle_refresh, True),
    "closeBrowser": (handle_close_browser, False),
}
