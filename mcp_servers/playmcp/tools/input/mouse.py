"""
Mouse input operations for browser automation.

Provides coordinate move, click and drag. Every operation records the final
cursor position on the session manager so a later selector-less click lands
where the cursor was left.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..base import page_operation

if TYPE_CHECKING:
    from ...session import SessionManager


async def move_mouse(manager: SessionManager, x: float, y: float) -> dict[str, Any]:
    """Move the cursor to page coordinates.

    Args:
        manager: Session manager
        x: X coordinate in pixels
        y: Y coordinate in pixels

    Returns:
        Dict with the new cursor position
    """
    async with page_operation(
        manager, "moveMouse", "Failed to move mouse", "Check if coordinates are within viewport"
    ) as page:
        await page.mouse.move(x, y)
        manager.mouse.update(x, y)
        return manager.mouse.to_dict()


async def mouse_click(manager: SessionManager, x: float, y: float) -> dict[str, Any]:
    """Click at page coordinates and remember them as the cursor position."""
    async with page_operation(
        manager, "mouseClick", "Failed to click at coordinates", "Check if coordinates are valid"
    ) as page:
        await page.mouse.click(x, y)
        manager.mouse.update(x, y)
        return manager.mouse.to_dict()


async def mouse_drag(
    manager: SessionManager,
    start_x: float,
    start_y: float,
    end_x: float,
    end_y: float,
) -> dict[str, Any]:
    """Press at the start point, move to the end point, release.

    Returns:
        Dict with start, end and final cursor position
    """
    async with page_operation(manager, "mouseDrag", "Failed to drag mouse", "Check if coordinates are valid") as page:
        await page.mouse.move(start_x, start_y)
        await page.mouse.down()
        await page.mouse.move(end_x, end_y)
        await page.mouse.up()
        manager.mouse.update(end_x, end_y)
        return {
            "start": {"x": start_x, "y": start_y},
            "end": {"x": end_x, "y": end_y},
        }
