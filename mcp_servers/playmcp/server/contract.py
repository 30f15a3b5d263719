"""Protocol and tool contract definitions.

This is the single source of truth for:
- supported MCP protocol versions
- server identity
- capabilities advertised by initialize
"""

from __future__ import annotations

from importlib import metadata
from typing import Any


def _package_version() -> str:
    try:
        return metadata.version("playmcp-browser")
    except metadata.PackageNotFoundError:
        return "0.1.0"


SERVER_INFO: dict[str, str] = {"name": "playmcp-browser", "version": _package_version()}

SUPPORTED_PROTOCOL_VERSIONS = ["2024-11-05", "2025-06-18", "0.1.0"]
DEFAULT_PROTOCOL_VERSION = SUPPORTED_PROTOCOL_VERSIONS[0]
LATEST_PROTOCOL_VERSION = SUPPORTED_PROTOCOL_VERSIONS[1]

CAPABILITIES: dict[str, Any] = {
    "tools": {"listChanged": False},
}

INSTRUCTIONS = (
    "Call openBrowser first, then navigate. Page tools fail with 'Browser not initialized' "
    "until a browser is open. Call closeBrowser when done."
)


def select_protocol(requested: Any) -> str:
    if isinstance(requested, str) and requested in SUPPORTED_PROTOCOL_VERSIONS:
        return requested
    return DEFAULT_PROTOCOL_VERSION


def initialize_result(protocol: str) -> dict[str, Any]:
    return {
        "protocolVersion": protocol,
        "serverInfo": dict(SERVER_INFO),
        "capabilities": CAPABILITIES,
        "instructions": INSTRUCTIONS,
    }
