"""
Selector-based interactions: click, type, hover, drag-and-drop, select.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..base import page_operation

if TYPE_CHECKING:
    from ...session import SessionManager


async def click(manager: SessionManager, selector: str | None = None) -> dict[str, Any]:
    """Click an element, or the last known cursor position when no selector is given.

    Args:
        manager: Session manager
        selector: CSS/Playwright selector; None clicks at the recorded mouse position

    Returns:
        Dict describing what was clicked
    """
    suggestion = "Check if the element exists and is visible" if selector else "Check if mouse position is valid"
    async with page_operation(manager, "click", "Failed to click", suggestion) as page:
        if selector:
            await page.click(selector)
            return {"selector": selector}
        position = manager.mouse.to_dict()
        await page.mouse.click(position["x"], position["y"])
        return {"position": position}


async def type_text(manager: SessionManager, selector: str, text: str) -> dict[str, Any]:
    """Type text into an element key by key, like a user would."""
    async with page_operation(
        manager, "type", "Failed to type text", "Check if the input element exists and is editable"
    ) as page:
        await page.locator(selector).first.press_sequentially(text)
        return {"selector": selector, "length": len(text)}


async def hover(manager: SessionManager, selector: str) -> dict[str, Any]:
    async with page_operation(
        manager, "hover", "Failed to hover over element", "Check if the selector exists and is visible"
    ) as page:
        await page.locator(selector).first.hover()
        return {"selector": selector}


async def drag_and_drop(manager: SessionManager, source_selector: str, target_selector: str) -> dict[str, Any]:
    async with page_operation(
        manager, "dragAndDrop", "Failed to drag and drop", "Check if both selectors exist and are interactable"
    ) as page:
        await page.locator(source_selector).first.drag_to(page.locator(target_selector).first)
        return {"source": source_selector, "target": target_selector}


async def select_option(manager: SessionManager, selector: str, values: list[str]) -> dict[str, Any]:
    """Select one or more options of a <select> by value or label.

    Returns:
        Dict with the values the page reports as selected
    """
    async with page_operation(
        manager, "selectOption", "Failed to select option", "Check if the selector exists and values are valid"
    ) as page:
        selected = await page.locator(selector).first.select_option(values)
        return {"selector": selector, "selected": list(selected or [])}
