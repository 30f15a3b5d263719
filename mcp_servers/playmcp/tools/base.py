"""
Base utilities for browser automation tools.

Provides:
- page_operation: async context manager yielding the active page and
  converting driver failures into BrowserToolError
- ensure_allowed_navigation: scheme/allowlist check for navigate()
- ensure_selector: selector presence check for operations that need a root
"""

from __future__ import annotations

import logging
import urllib.parse
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from ..config import BrowserConfig
from ..errors import BrowserToolError

if TYPE_CHECKING:
    from playwright.async_api import Page

    from ..session import SessionManager

logger = logging.getLogger("mcp.playmcp.tools")


def ensure_allowed_navigation(url: str, config: BrowserConfig) -> None:
    """Browser navigation allows http(s) plus about:, data:, blob: and file: schemes."""
    parsed = urllib.parse.urlparse(url)
    if parsed.scheme in ("about", "data", "blob", "file"):
        return
    if parsed.scheme not in ("http", "https"):
        raise BrowserToolError(
            message="Failed to navigate",
            suggestion="Use an absolute http(s) URL",
            tool="navigate",
            reason=f"Unsupported scheme: {parsed.scheme or '(none)'}",
        )
    if not config.is_host_allowed(parsed.hostname or ""):
        raise BrowserToolError(
            message="Failed to navigate",
            suggestion="Add the host to PLAYMCP_ALLOW_HOSTS",
            tool="navigate",
            reason=f"Host {parsed.hostname} is not in allowlist",
        )


@asynccontextmanager
async def page_operation(
    manager: SessionManager,
    tool: str,
    failure: str,
    suggestion: str,
) -> AsyncIterator[Page]:
    """Yield the active page; wrap any driver error into BrowserToolError.

    Usage:
        async with page_operation(manager, "hover", "Failed to hover", "...") as page:
            await page.locator(selector).hover()
    """
    page = manager.require_page(tool)
    logger.debug("tool=%s start", tool)
    try:
        yield page
    except BrowserToolError:
        raise
    except Exception as exc:
        logger.debug("tool=%s failed: %s", tool, exc)
        raise BrowserToolError(message=failure, suggestion=suggestion, tool=tool, reason=str(exc)) from exc
    logger.debug("tool=%s done", tool)


async def ensure_selector(page: Page, selector: str, tool: str, failure: str, suggestion: str) -> Any:
    """Return the first element handle matching selector or raise BrowserToolError."""
    handle = await page.query_selector(selector)
    if handle is None:
        raise BrowserToolError(
            message=failure, suggestion=suggestion, tool=tool, reason=f"Element not found: {selector}"
        )
    return handle
