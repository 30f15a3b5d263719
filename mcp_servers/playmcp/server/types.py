"""
Type definitions for MCP server responses and handlers.
"""

from __future__ import annotations

import json
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..errors import BrowserToolError
    from ..session import SessionManager


@dataclass(slots=True)
class ToolContent:
    """Single content item in tool response."""

    type: str  # always "text" for this server
    text: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to MCP content format."""
        return {"type": self.type, "text": self.text}


@dataclass(slots=True)
class ToolResult:
    """Result of a tool execution."""

    content: list[ToolContent] = field(default_factory=list)
    is_error: bool = False
    # Structured payload for tests and in-process callers; never put on the wire.
    data: Any | None = None

    @classmethod
    def text(cls, text: str, data: Any | None = None) -> ToolResult:
        """Create result with single text content."""
        return cls(content=[ToolContent(type="text", text=text or "")], data=data)

    @classmethod
    def json(cls, data: Any) -> ToolResult:
        """Create result with pretty-printed JSON text content."""
        return cls.text(json.dumps(data, indent=2, ensure_ascii=False, default=str), data=data)

    @classmethod
    def error(cls, message: str, suggestion: str = "", reason: str = "") -> ToolResult:
        """Create error result: an ``Error:`` block, then optional reason and suggestion blocks."""
        content = [ToolContent(type="text", text=f"Error: {message}")]
        if reason:
            content.append(ToolContent(type="text", text=f"Reason: {reason}"))
        if suggestion:
            content.append(ToolContent(type="text", text=f"Suggestion: {suggestion}"))
        return cls(content=content, is_error=True, data={"message": message, "suggestion": suggestion})

    @classmethod
    def from_exception(cls, exc: BrowserToolError) -> ToolResult:
        return cls.error(exc.message, suggestion=exc.suggestion, reason=exc.reason)

    @property
    def message(self) -> str:
        return "\n".join(c.text for c in self.content)

    def to_content_list(self) -> list[dict[str, Any]]:
        """Convert to MCP content list format."""
        return [c.to_dict() for c in self.content]

    def to_mcp(self) -> dict[str, Any]:
        result: dict[str, Any] = {"content": self.to_content_list()}
        if self.is_error:
            result["isError"] = True
        return result

    def to_legacy(self) -> dict[str, Any]:
        """Shape used for bare ``{"command": ...}`` requests."""
        if not self.is_error:
            return {"success": True, "message": self.message}
        data = self.data if isinstance(self.data, dict) else {}
        return {
            "success": False,
            "error": {
                "message": data.get("message") or self.message,
                "suggestion": data.get("suggestion") or "",
            },
        }


ToolHandler = Callable[["SessionManager", dict[str, Any]], Awaitable[ToolResult]]


@dataclass(slots=True, frozen=True)
class ToolSpec:
    """Specification for a registered tool."""

    name: str
    handler: ToolHandler
    requires_browser: bool = True  # Whether the registry checks for a live page before the handler
