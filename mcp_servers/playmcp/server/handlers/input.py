"""
Input tool handlers - mouse, keyboard, scroll, forms, files.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ... import tools
from ..types import ToolResult

if TYPE_CHECKING:
    from ...session import SessionManager


# ─────────────────────────────────────────────────────────────────────────────
# Selector interactions
# ─────────────────────────────────────────────────────────────────────────────


async def handle_type(manager: SessionManager, args: dict[str, Any]) -> ToolResult:
    result = await tools.type_text(manager, args["selector"], args["text"])
    return ToolResult.text("Text entered successfully", data=result)


async def handle_click(manager: SessionManager, args: dict[str, Any]) -> ToolResult:
    result = await tools.click(manager, args.get("selector") or None)
    return ToolResult.text("Click successful", data=result)


async def handle_hover(manager: SessionManager, args: dict[str, Any]) -> ToolResult:
    result = await tools.hover(manager, args["selector"])
    return ToolResult.text("Hover completed successfully", data=result)


async def handle_drag_and_drop(manager: SessionManager, args: dict[str, Any]) -> ToolResult:
    result = await tools.drag_and_drop(manager, args["sourceSelector"], args["targetSelector"])
    return ToolResult.text("Drag and drop completed successfully", data=result)


async def handle_select_option(manager: SessionManager, args: dict[str, Any]) -> ToolResult:
    result = await tools.select_option(manager, args["selector"], list(args["values"]))
    return ToolResult.text("Option selected successfully", data=result)


async def handle_upload_files(manager: SessionManager, args: dict[str, Any]) -> ToolResult:
    result = await tools.upload_files(manager, args["selector"], list(args["filePaths"]))
    return ToolResult.text("Files uploaded successfully", data=result)


# ─────────────────────────────────────────────────────────────────────────────
# Keyboard + scroll
# ─────────────────────────────────────────────────────────────────────────────


async def handle_press_key(manager: SessionManager, args: dict[str, Any]) -> ToolResult:
    result = await tools.press_key(manager, args["key"])
    return ToolResult.text("Key pressed successfully", data=result)


async def handle_scroll(manager: SessionManager, args: dict[str, Any]) -> ToolResult:
    result = await tools.scroll(manager, x=args["x"], y=args["y"], smooth=bool(args.get("smooth", False)))
    return ToolResult.json({"message": "Page scrolled successfully", **result})


# ─────────────────────────────────────────────────────────────────────────────
# Coordinate mouse
# ─────────────────────────────────────────────────────────────────────────────


async def handle_move_mouse(manager: SessionManager, args: dict[str, Any]) -> ToolResult:
    result = await tools.move_mouse(manager, x=args["x"], y=args["y"])
    return ToolResult.text("Mouse moved successfully", data=result)


async def handle_mouse_click(manager: SessionManager, args: dict[str, Any]) -> ToolResult:
    result = await tools.mouse_click(manager, x=args["x"], y=args["y"])
    return ToolResult.text("Mouse clicked successfully", data=result)


async def handle_mouse_drag(manager: SessionManager, args: dict[str, Any]) -> ToolResult:
    result = await tools.mouse_drag(
        manager,
        start_x=args["startX"],
        start_y=args["startY"],
        end_x=args["endX"],
        end_y=args["endY"],
    )
    return ToolResult.text("Mouse drag completed successfully", data=result)


INPUT_HANDLERS: dict[str, tuple] = {
    # Selector
    "type": (handle_type, True),
    "click": (handle_click, True),
    "hover": (handle_hover, True),
    "dragAndDrop": (handle_drag_and_drop, True),
    "selectOption": (handle_select_option, True),
    "uploadFiles": (handle_upload_files, True),
    # Keyboard / scroll
    "pressKey": (handle_press_key, True),
    "scroll": (handle_scroll, True),
    # Mouse
    "moveMouse": (handle_move_mouse, True),
    "mouseMove": (handle_move_mouse, True),
    "mouseClick": (handle_mouse_click, True),
    "mouseDrag": (handle_mouse_drag, True),
}
