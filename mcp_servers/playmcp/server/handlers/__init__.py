"""
Tool handlers organized by domain.

Each handler module provides coroutines that handle specific tool calls.
All handlers follow the signature: (manager, arguments) -> ToolResult
"""

from .dom import DOM_HANDLERS
from .input import INPUT_HANDLERS
from .lifecycle import LIFECYCLE_HANDLERS
from .page import PAGE_HANDLERS
from .page_state import PAGE_STATE_HANDLERS

# Aggregate all handlers
ALL_HANDLERS: dict[str, tuple] = {
    **LIFECYCLE_HANDLERS,
    **INPUT_HANDLERS,
    **PAGE_HANDLERS,
    **DOM_HANDLERS,
    **PAGE_STATE_HANDLERS,
}

__all__ = [
    "ALL_HANDLERS",
    "LIFECYCLE_HANDLERS",
    "INPUT_HANDLERS",
    "PAGE_HANDLERS",
    "DOM_HANDLERS",
    "PAGE_STATE_HANDLERS",
]
