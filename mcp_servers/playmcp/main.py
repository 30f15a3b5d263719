"""
MCP server for Playwright-driven browser automation.

This module provides the entry point, the stdio framing and protocol handling.
Tool dispatch is handled via registry pattern in server/registry.py.

Messages are processed strictly one at a time in arrival order: the read loop
awaits each dispatch before it looks at the next line.
"""

from __future__ import annotations

import asyncio
import contextlib
import enum
import json
import logging
import os
import signal
import sys
from typing import Any

from .config import BrowserConfig
from .errors import BrowserToolError, ProtocolError
from .server.contract import (
    DEFAULT_PROTOCOL_VERSION,
    LATEST_PROTOCOL_VERSION,
    SUPPORTED_PROTOCOL_VERSIONS,
    initialize_result,
    select_protocol,
)
from .server.redaction import redact_jsonrpc_for_dump, redact_jsonrpc_for_log, redact_tool_arguments
from .server.registry import ToolRegistry, create_default_registry
from .server.types import ToolResult
from .session import SessionManager

logger = logging.getLogger("mcp.playmcp")

__all__ = [
    "SUPPORTED_PROTOCOL_VERSIONS",
    "LATEST_PROTOCOL_VERSION",
    "DEFAULT_PROTOCOL_VERSION",
    "LineBuffer",
    "McpServer",
    "ServerState",
    "main",
    "serve",
    "serve_stdio",
]

READ_CHUNK_SIZE = 65536


def _dump_frame(direction: bytes, raw: bytes, payload: Any) -> None:
    dump_path = os.environ.get("MCP_DUMP_FRAMES")
    if not dump_path:
        return
    if dump_dir := os.path.dirname(dump_path):
        os.makedirs(dump_dir, exist_ok=True)
    with open(dump_path, "ab") as fp:
        fp.write(b"--" + direction + b"--\n")
        if os.environ.get("MCP_DUMP_FRAMES_RAW") == "1" or not isinstance(payload, dict):
            fp.write(raw.rstrip(b"\n") + b"\n")
        else:
            safe = redact_jsonrpc_for_dump(payload)
            fp.write((json.dumps(safe, ensure_ascii=False) + "\n").encode())


def _write_message(payload: dict[str, Any]) -> None:
    """Write one JSON message to stdout."""
    data = json.dumps(payload, ensure_ascii=False, default=str)
    line = (data + "\n").encode()
    _dump_frame(b"out", line, payload)
    sys.stdout.buffer.write(line)
    sys.stdout.buffer.flush()


def _decode_message(line: bytes) -> Any:
    """Decode one input line; raises ProtocolError(PARSE_ERROR) on bad JSON."""
    try:
        msg = json.loads(line.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        _dump_frame(b"in", line, None)
        raise ProtocolError(ProtocolError.PARSE_ERROR, f"Parse error: {exc}") from exc
    if os.environ.get("MCP_TRACE") and isinstance(msg, dict):
        logger.info("recv %s", redact_jsonrpc_for_log(msg))
    _dump_frame(b"in", line, msg)
    return msg


class LineBuffer:
    """Accumulates raw stdin chunks and yields complete lines.

    Lines end with ``\\n``; a trailing ``\\r`` is dropped and blank lines are
    skipped. The partial tail stays buffered until more data or flush().
    """

    def __init__(self) -> None:
        self._pending = b""

    def feed(self, chunk: bytes) -> list[bytes]:
        self._pending += chunk
        *lines, self._pending = self._pending.split(b"\n")
        return [line for line in (raw.rstrip(b"\r") for raw in lines) if line.strip()]

    def flush(self) -> bytes | None:
        """Return the unterminated tail (EOF), if it holds anything."""
        tail, self._pending = self._pending.rstrip(b"\r"), b""
        return tail if tail.strip() else None

    def __len__(self) -> int:
        return len(self._pending)


class ServerState(enum.Enum):
    IDLE = "idle"
    READY = "ready"


class McpServer:
    """MCP server with registry-based tool dispatch."""

    def __init__(
        self,
        config: BrowserConfig | None = None,
        manager: SessionManager | None = None,
        registry: ToolRegistry | None = None,
    ) -> None:
        self.config = config or (manager.config if manager is not None else BrowserConfig.from_env())
        self.manager = manager or SessionManager(self.config)
        self.registry = registry or create_default_registry()
        self.state = ServerState.IDLE
        self.protocol_version = DEFAULT_PROTOCOL_VERSION

    # ─────────────────────────────────────────────────────────────────────
    # Protocol methods
    # ─────────────────────────────────────────────────────────────────────

    def handle_initialize(self, params: dict[str, Any]) -> dict[str, Any]:
        """Handle initialize request."""
        self.protocol_version = select_protocol(params.get("protocolVersion"))
        if self.state is ServerState.IDLE:
            logger.info("initialized protocol=%s", self.protocol_version)
        self.state = ServerState.READY
        return initialize_result(self.protocol_version)

    def handle_list_tools(self) -> dict[str, Any]:
        """Handle tools/list request."""
        return {"tools": self.registry.list_definitions()}

    def _log_call(self, name: str, arguments: Any) -> None:
        """Log tool call with sanitized arguments."""
        safe_args = redact_tool_arguments(name, arguments) if isinstance(arguments, dict) else arguments
        logger.info("tool=%s args=%s", name, safe_args)

    async def call_tool(self, name: str, arguments: Any) -> ToolResult:
        """Run one tool; every failure comes back as an error ToolResult."""
        self._log_call(name, arguments)
        try:
            if not name:
                return ToolResult.error("Missing tool name", suggestion="Pass the tool name in params.name")
            if not self.registry.has(name):
                return ToolResult.error(f"Unknown tool: {name}", suggestion="Call tools/list to see available tools")
            return await self.registry.dispatch(name, self.manager, arguments)
        except BrowserToolError as e:
            logger.info("tool_error tool=%s message=%s reason=%s", e.tool or name, e.message, e.reason)
            return ToolResult.from_exception(e)
        except Exception as exc:
            logger.exception("tool_call_failed tool=%s", name)
            return ToolResult.error(str(exc) or exc.__class__.__name__)

    async def handle_message(self, message: Any) -> dict[str, Any] | None:
        """Process one decoded message and return the response payload (None = no reply)."""
        if not isinstance(message, dict):
            raise ProtocolError(ProtocolError.INVALID_REQUEST, "Invalid Request: expected a JSON object")

        if "method" not in message and isinstance(message.get("command"), str):
            return await self._handle_legacy(message)

        method = message.get("method")
        request_id = message.get("id")
        if not isinstance(method, str) or not method:
            raise ProtocolError(ProtocolError.INVALID_REQUEST, "Invalid Request: missing method")

        if "id" not in message or method.startswith("notifications/"):
            logger.debug("notification %s", method)
            return None

        params = message.get("params") or {}
        if not isinstance(params, dict):
            raise ProtocolError(ProtocolError.INVALID_REQUEST, "Invalid Request: params must be an object")

        if method == "initialize":
            return self._result(request_id, self.handle_initialize(params))
        if method == "ping":
            return self._result(request_id, {})

        if self.state is ServerState.IDLE and self.config.strict_handshake:
            raise ProtocolError(
                ProtocolError.NOT_INITIALIZED,
                "Server not initialized",
                suggestion="Send initialize before other requests",
            )

        if method == "tools/list":
            return self._result(request_id, self.handle_list_tools())
        if method == "tools/call":
            name = params.get("name")
            result = await self.call_tool(name if isinstance(name, str) else "", params.get("arguments") or {})
            return self._result(request_id, result.to_mcp())

        raise ProtocolError(
            ProtocolError.METHOD_NOT_FOUND,
            f"Method {method} not found",
            suggestion="Use initialize, tools/list, tools/call or ping",
        )

    async def _handle_legacy(self, message: dict[str, Any]) -> dict[str, Any]:
        result = await self.call_tool(message["command"], message.get("arguments") or {})
        response: dict[str, Any] = {"type": "response", "result": result.to_legacy()}
        if "id" in message:
            response["id"] = message["id"]
        return response

    @staticmethod
    def _result(request_id: Any, result: dict[str, Any]) -> dict[str, Any]:
        return {"jsonrpc": "2.0", "id": request_id, "result": result}

    @staticmethod
    def _error(request_id: Any, error: ProtocolError) -> dict[str, Any]:
        return {"jsonrpc": "2.0", "id": request_id, "error": error.to_error()}

    # ─────────────────────────────────────────────────────────────────────
    # Framing
    # ─────────────────────────────────────────────────────────────────────

    async def dispatch_line(self, line: bytes | str) -> None:
        """Decode, handle and answer one input line. Never raises except on cancellation."""
        raw = line.encode() if isinstance(line, str) else line
        request_id = None
        try:
            message = _decode_message(raw)
            if isinstance(message, dict):
                request_id = message.get("id")
            response = await self.handle_message(message)
        except ProtocolError as err:
            logger.info("protocol_error code=%s message=%s", err.code, err.message)
            response = self._error(request_id, err)
        except Exception as exc:
            logger.exception("dispatch_failed")
            response = self._error(request_id, ProtocolError(ProtocolError.INTERNAL_ERROR, f"Internal error: {exc}"))
        if response is not None:
            _write_message(response)

    async def shutdown(self) -> None:
        """Close the browser; errors are logged, never raised."""
        try:
            await self.manager.close()
        except Exception as exc:
            logger.warning("shutdown close failed: %s", exc)


async def serve(server: McpServer, reader: Any) -> None:
    """Feed lines from ``reader`` (anything with ``async read(n)``) to the server in order."""
    buffer = LineBuffer()
    while True:
        chunk = await reader.read(READ_CHUNK_SIZE)
        if not chunk:
            break
        for line in buffer.feed(chunk):
            await server.dispatch_line(line)
    tail = buffer.flush()
    if tail is not None:
        await server.dispatch_line(tail)
    logger.debug("stdin closed")


class _ExecutorReader:
    """Blocking stdin reads in the default executor (regular files, Windows)."""

    def __init__(self, stream: Any) -> None:
        self._stream = stream

    async def read(self, n: int) -> bytes:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._stream.read1, n)


async def _stdin_reader() -> Any:
    loop = asyncio.get_running_loop()
    reader = asyncio.StreamReader(limit=2**24)
    protocol = asyncio.StreamReaderProtocol(reader)
    try:
        await loop.connect_read_pipe(lambda: protocol, sys.stdin.buffer)
    except (ValueError, NotImplementedError, OSError) as exc:
        logger.debug("pipe transport unavailable (%s); using executor reads", exc)
        return _ExecutorReader(sys.stdin.buffer)
    return reader


async def serve_stdio(server: McpServer) -> None:
    """Serve stdin/stdout until EOF, SIGINT or SIGTERM; always closes the browser."""
    loop = asyncio.get_running_loop()
    task = asyncio.current_task()
    installed: list[signal.Signals] = []
    if task is not None:
        for sig in (signal.SIGINT, signal.SIGTERM):
            with contextlib.suppress(NotImplementedError, RuntimeError, ValueError):
                loop.add_signal_handler(sig, task.cancel)
                installed.append(sig)
    try:
        await serve(server, await _stdin_reader())
    except asyncio.CancelledError:
        logger.info("interrupted; shutting down")
    finally:
        for sig in installed:
            with contextlib.suppress(Exception):
                loop.remove_signal_handler(sig)
        await server.shutdown()


def _configure_logging() -> None:
    level_name = os.environ.get("PLAYMCP_LOG_LEVEL", "INFO").strip().upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )


def main() -> None:
    """Main entry point for MCP server."""
    _configure_logging()
    server = McpServer()
    logger.info("playmcp starting engine=%s headless=%s", server.config.engine, server.config.headless)
    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(serve_stdio(server))


if __name__ == "__main__":
    main()
