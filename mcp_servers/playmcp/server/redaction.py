"""Secret scrubbing for logs and MCP_DUMP_FRAMES files.

Only what leaves the process on stderr or in a dump file is scrubbed; tool
responses on stdout are sent as-is.
"""

from __future__ import annotations

import os
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

REDACTED = "<redacted>"

_SECRET_KEY_PARTS = (
    "token",
    "secret",
    "password",
    "passwd",
    "pwd",
    "authorization",
    "cookie",
    "session",
    "jwt",
    "bearer",
    "api-key",
    "api_key",
    "apikey",
)

# Whole-key matches only, so "author" or "passage" stay visible.
_SECRET_KEYS = frozenset({"auth", "pass"})

# A typed value is hidden when the target selector mentions one of these.
_SECRET_FIELD_HINTS = ("password", "passwd", "secret", "token", "otp", "cvv", "card")

LOG_TEXT_LIMIT = 512


def is_sensitive_key(key: str) -> bool:
    lowered = str(key or "").strip().lower()
    return bool(lowered) and (lowered in _SECRET_KEYS or any(part in lowered for part in _SECRET_KEY_PARTS))


def redact_url(url: str) -> str:
    """Drop ``user:pass@`` and blank out secret-looking query values.

    ``https://a.example/?token=abc&q=x`` -> ``https://a.example/?token=%3Credacted%3E&q=x``.
    The input comes back untouched when there is nothing to hide.
    """
    if not isinstance(url, str) or not url:
        return url
    try:
        parts = urlsplit(url)
    except ValueError:
        return url

    host = parts.netloc.rpartition("@")[2]
    pairs = parse_qsl(parts.query, keep_blank_values=True)
    scrubbed = [(k, REDACTED if v and is_sensitive_key(k) else v) for k, v in pairs]

    if host == parts.netloc and scrubbed == pairs:
        return url
    query = urlencode(scrubbed, doseq=True) if scrubbed != pairs else parts.query
    return urlunsplit((parts.scheme, host, parts.path, query, parts.fragment))


def _describe_hidden(value: Any) -> str:
    if isinstance(value, str):
        return f"<redacted str len={len(value)}>"
    if isinstance(value, (list, tuple)):
        return f"<redacted list len={len(value)}>"
    if isinstance(value, dict):
        return f"<redacted dict keys={len(value)}>"
    return REDACTED


def _targets_secret_field(selector: Any) -> bool:
    return isinstance(selector, str) and any(hint in selector.lower() for hint in _SECRET_FIELD_HINTS)


def _hide_argument(tool: str, key: str, args: dict[str, Any]) -> bool:
    lowered = key.lower()
    if tool == "type" and lowered == "text":
        return _targets_secret_field(args.get("selector"))
    if tool == "handleDialog" and lowered == "prompttext":
        return True
    return is_sensitive_key(lowered)


def redact_tool_arguments(tool: str, args: dict[str, Any]) -> dict[str, Any]:
    """Copy of ``args`` safe to log for a call to ``tool``."""
    if not isinstance(args, dict):
        return {}
    safe: dict[str, Any] = {}
    for key, value in args.items():
        if str(key).lower() == "url" and isinstance(value, str):
            safe[key] = redact_url(value)
        elif _hide_argument(tool, str(key), args):
            safe[key] = _describe_hidden(value)
        else:
            safe[key] = value
    return safe


def _clip(text: str, limit: int) -> str:
    if not limit or len(text) <= limit:
        return text
    return text[:limit] + f"… <truncated len={len(text)}>"


def redact_jsonrpc_for_dump(payload: dict[str, Any], *, max_text_chars: int | None = None) -> dict[str, Any]:
    """Scrub one frame in either request shape and clip long result texts.

    The input is never modified; nested containers that change are copied.
    """
    limit = _dump_text_limit() if max_text_chars is None else max_text_chars
    frame = dict(payload) if isinstance(payload, dict) else {}

    params = frame.get("params")
    if frame.get("method") == "tools/call" and isinstance(params, dict) and isinstance(params.get("arguments"), dict):
        tool = str(params.get("name") or "")
        frame["params"] = {**params, "arguments": redact_tool_arguments(tool, params["arguments"])}
    elif isinstance(frame.get("command"), str) and isinstance(frame.get("arguments"), dict):
        frame["arguments"] = redact_tool_arguments(frame["command"], frame["arguments"])

    result = frame.get("result")
    if isinstance(result, dict) and isinstance(result.get("content"), list):
        blocks = [
            {**block, "text": _clip(block["text"], limit)}
            if isinstance(block, dict) and isinstance(block.get("text"), str)
            else block
            for block in result["content"]
        ]
        frame["result"] = {**result, "content": blocks}
    return frame


def redact_jsonrpc_for_log(payload: dict[str, Any]) -> dict[str, Any]:
    return redact_jsonrpc_for_dump(payload, max_text_chars=LOG_TEXT_LIMIT)


def _dump_text_limit() -> int:
    try:
        return max(0, int(os.environ.get("MCP_DUMP_FRAMES_MAX_CHARS", "5000").strip()))
    except ValueError:
        return 5000
