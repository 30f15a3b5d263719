"""
Keyboard input for browser automation.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..base import page_operation

if TYPE_CHECKING:
    from ...session import SessionManager


async def press_key(manager: SessionManager, key: str) -> dict[str, Any]:
    """Press a key or chord on the focused element.

    Args:
        manager: Session manager
        key: Key name ("Enter", "Escape", "ArrowDown", "Control+A", ...)

    Returns:
        Dict with the pressed key
    """
    async with page_operation(manager, "pressKey", "Failed to press key", "Check if the key name is valid") as page:
        await page.keyboard.press(key)
        return {"key": key}
