"""
DOM, scripting and capture tool handlers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ... import tools
from ..types import ToolResult

if TYPE_CHECKING:
    from ...session import SessionManager


# ─────────────────────────────────────────────────────────────────────────────
# Element inspection
# ─────────────────────────────────────────────────────────────────────────────


async def handle_get_element_content(manager: SessionManager, args: dict[str, Any]) -> ToolResult:
    return ToolResult.json(await tools.get_element_content(manager, args["selector"]))


async def handle_inspect_element(manager: SessionManager, args: dict[str, Any]) -> ToolResult:
    return ToolResult.json(await tools.inspect_element(manager, args["selector"]))


async def handle_get_element_hierarchy(manager: SessionManager, args: dict[str, Any]) -> ToolResult:
    max_depth = args.get("maxDepth")
    tree = await tools.get_element_hierarchy(
        manager,
        selector=args.get("selector") or "body",
        max_depth=3 if max_depth is None else int(max_depth),
        include_text=bool(args.get("includeText", False)),
        include_attributes=bool(args.get("includeAttributes", False)),
    )
    return ToolResult.json(tree)


# ─────────────────────────────────────────────────────────────────────────────
# Scripting
# ─────────────────────────────────────────────────────────────────────────────


async def handle_execute_javascript(manager: SessionManager, args: dict[str, Any]) -> ToolResult:
    value = await tools.execute_javascript(manager, args["script"])
    if value is None:
        return ToolResult.text("Script executed successfully (no return value)")
    return ToolResult.json(value)


async def handle_evaluate_with_return(manager: SessionManager, args: dict[str, Any]) -> ToolResult:
    value = await tools.evaluate_with_return(manager, args["script"])
    if value is None:
        return ToolResult.text("null")
    return ToolResult.json(value)


# ─────────────────────────────────────────────────────────────────────────────
# Capture
# ─────────────────────────────────────────────────────────────────────────────


async def handle_screenshot(manager: SessionManager, args: dict[str, Any]) -> ToolResult:
    result = await tools.screenshot(manager, args["path"], scope=args.get("type"), selector=args.get("selector"))
    return ToolResult.text("Screenshot taken successfully", data=result)


async def handle_take_screenshot(manager: SessionManager, args: dict[str, Any]) -> ToolResult:
    result = await tools.take_screenshot(
        manager,
        args["path"],
        full_page=bool(args.get("fullPage", False)),
        element=args.get("element") or None,
    )
    return ToolResult.text("Screenshot taken successfully", data=result)


DOM_HANDLERS: dict[str, tuple] = {
    # Inspection
    "getElementContent": (handle_get_element_content, True),
    "inspectElement": (handle_inspect_element, True),
    "getElementHierarchy": (handle_get_element_hierarchy, True),
    # Scripting
    "executeJavaScript": (handle_execute_javascript, True),
    "evaluateWithReturn": (handle_evaluate_with_return, True),
    # Capture
    "screenshot": (handle_screenshot, True),
    "takeScreenshot": (handle_take_screenshot, True),
}
