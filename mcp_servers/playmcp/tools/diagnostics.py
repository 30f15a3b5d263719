"""
Console and network diagnostics.

Listeners are attached on the first call for the current session; each call
returns a snapshot of everything recorded since then.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .base import page_operation

if TYPE_CHECKING:
    from ..session import SessionManager


async def get_console_messages(manager: SessionManager) -> list[str]:
    async with page_operation(
        manager, "getConsoleMessages", "Failed to get console messages", "Browser console monitoring error"
    ) as page:
        return list(manager.diagnostics.watch_console(page))


async def get_network_requests(manager: SessionManager) -> list[dict[str, Any]]:
    async with page_operation(
        manager, "getNetworkRequests", "Failed to get network requests", "Browser network monitoring error"
    ) as page:
        return [dict(entry) for entry in manager.diagnostics.watch_network(page)]
