"""
Wait primitives: block until a selector or a piece of text shows up.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .base import page_operation

if TYPE_CHECKING:
    from ..session import SessionManager

DEFAULT_WAIT_TIMEOUT_MS = 30000


async def wait_for_selector(
    manager: SessionManager, selector: str, timeout: int = DEFAULT_WAIT_TIMEOUT_MS
) -> dict[str, Any]:
    async with page_operation(
        manager, "waitForSelector", "Selector not found within timeout", "Check if the selector appears on the page"
    ) as page:
        await page.wait_for_selector(selector, timeout=timeout)
        return {"selector": selector, "timeout": timeout}


async def wait_for_text(manager: SessionManager, text: str, timeout: int = DEFAULT_WAIT_TIMEOUT_MS) -> dict[str, Any]:
    """Wait for an element containing text, using Playwright's ``text=`` engine."""
    async with page_operation(
        manager, "waitForText", "Text not found within timeout", "Check if the text appears on the page"
    ) as page:
        await page.wait_for_selector(f"text={text}", timeout=timeout)
        return {"text": text, "timeout": timeout}
