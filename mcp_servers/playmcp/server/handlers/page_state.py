"""
Wait, viewport, dialog and diagnostics tool handlers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ... import tools
from ...tools.wait import DEFAULT_WAIT_TIMEOUT_MS
from ..types import ToolResult

if TYPE_CHECKING:
    from ...session import SessionManager


def _timeout(args: dict[str, Any]) -> int:
    timeout = args.get("timeout")
    return DEFAULT_WAIT_TIMEOUT_MS if timeout is None else int(timeout)


async def handle_wait_for_text(manager: SessionManager, args: dict[str, Any]) -> ToolResult:
    result = await tools.wait_for_text(manager, args["text"], timeout=_timeout(args))
    return ToolResult.text("Text found successfully", data=result)


async def handle_wait_for_selector(manager: SessionManager, args: dict[str, Any]) -> ToolResult:
    result = await tools.wait_for_selector(manager, args["selector"], timeout=_timeout(args))
    return ToolResult.text("Selector found successfully", data=result)


async def handle_resize(manager: SessionManager, args: dict[str, Any]) -> ToolResult:
    result = await tools.resize(manager, int(args["width"]), int(args["height"]))
    return ToolResult.text("Browser resized successfully", data=result)


async def handle_handle_dialog(manager: SessionManager, args: dict[str, Any]) -> ToolResult:
    result = await tools.handle_dialog(manager, accept=args["accept"], prompt_text=args.get("promptText"))
    return ToolResult.text("Dialog handler set successfully", data=result)


async def handle_get_console_messages(manager: SessionManager, args: dict[str, Any]) -> ToolResult:
    return ToolResult.json(await tools.get_console_messages(manager))


async def handle_get_network_requests(manager: SessionManager, args: dict[str, Any]) -> ToolResult:
    return ToolResult.json(await tools.get_network_requests(manager))


PAGE_STATE_HANDLERS: dict[str, tuple] = {
    "waitForText": (handle_wait_for_text, True),
    "waitForSelector": (handle_wait_for_selector, True),
    "resize": (handle_resize, True),
    "handleDialog": (handle_handle_dialog, True),
    "getConsoleMessages": (handle_get_console_messages, True),
    "getNetworkRequests": (handle_get_network_requests, True),
}
