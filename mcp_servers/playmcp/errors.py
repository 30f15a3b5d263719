"""
Error types shared by the browser facade, the dispatcher and the scanner.

Every browser-facing failure carries a short message plus a suggestion that a
caller (usually an AI agent) can act on.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(eq=False)
class BrowserToolError(Exception):
    """Structured error with a remediation hint."""

    message: str
    suggestion: str = ""
    tool: str = ""
    reason: str = ""
    details: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message)

    def __str__(self) -> str:
        text = self.message
        if self.reason:
            text = f"{text}: {self.reason}"
        if self.suggestion:
            text = f"{text}. Suggestion: {self.suggestion}"
        return text

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": True,
            "tool": self.tool,
            "message": self.message,
            "reason": self.reason,
            "suggestion": self.suggestion,
            "details": self.details,
        }


class BrowserNotInitializedError(BrowserToolError):
    def __init__(self, tool: str = "") -> None:
        super().__init__(
            message="Browser not initialized",
            suggestion="Call openBrowser first",
            tool=tool,
        )


class ArgumentError(BrowserToolError):
    def __init__(self, message: str, tool: str = "", suggestion: str = "Check the tool input schema") -> None:
        super().__init__(message=message, suggestion=suggestion, tool=tool)


class ProtocolError(Exception):
    """JSON-RPC level failure: malformed frame, unknown method, bad state."""

    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INTERNAL_ERROR = -32603
    NOT_INITIALIZED = -32002

    def __init__(self, code: int, message: str, suggestion: str = "Check input format") -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion

    def to_error(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message, "data": {"suggestion": self.suggestion}}


class LLMClientError(Exception):
    pass
