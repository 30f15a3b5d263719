"""
Navigation tools: navigate, history back/forward, reload.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .base import ensure_allowed_navigation, page_operation

if TYPE_CHECKING:
    from ..session import SessionManager


async def navigate(manager: SessionManager, url: str) -> dict[str, Any]:
    """Load ``url`` in the active page and wait for the configured load state.

    Returns:
        Dict with the final URL and HTTP status (None for non-network URLs)
    """
    page = manager.require_page("navigate")
    ensure_allowed_navigation(url, manager.config)
    async with page_operation(manager, "navigate", "Failed to navigate", "Check if the URL is valid and accessible"):
        response = await page.goto(
            url,
            wait_until=manager.config.wait_until,
            timeout=manager.config.navigation_timeout_ms,
        )
        return {"url": page.url, "status": response.status if response is not None else None}


async def go_back(manager: SessionManager) -> dict[str, Any]:
    async with page_operation(
        manager, "goBack", "Failed to go back", "Check if there is a previous page in history"
    ) as page:
        await page.go_back()
        return {"url": page.url}


async def go_forward(manager: SessionManager) -> dict[str, Any]:
    async with page_operation(
        manager, "goForward", "Failed to go forward", "Check if there is a next page in history"
    ) as page:
        await page.go_forward()
        return {"url": page.url}


async def refresh(manager: SessionManager) -> dict[str, Any]:
    async with page_operation(
        manager, "refresh", "Failed to refresh page", "Check if the page is still accessible"
    ) as page:
        await page.reload()
        return {"url": page.url}
