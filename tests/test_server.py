from __future__ import annotations

import asyncio
import json
from typing import Any

import pytest
from conftest import active_page

from mcp_servers.playmcp import main as server_main
from mcp_servers.playmcp.config import BrowserConfig
from mcp_servers.playmcp.main import LineBuffer, McpServer, ServerState, serve
from mcp_servers.playmcp.server.types import ToolResult
from mcp_servers.playmcp.session import SessionManager


@pytest.fixture
def sent(monkeypatch) -> list[dict[str, Any]]:  # noqa: ANN001
    out: list[dict[str, Any]] = []
    monkeypatch.setattr(server_main, "_write_message", out.append)
    return out


@pytest.fixture
def server(manager: SessionManager) -> McpServer:
    return McpServer(config=manager.config, manager=manager)


class ChunkReader:
    def __init__(self, *chunks: bytes) -> None:
        self._chunks = list(chunks)

    async def read(self, n: int) -> bytes:
        return self._chunks.pop(0) if self._chunks else b""


def _line(payload: dict[str, Any]) -> bytes:
    return (json.dumps(payload) + "\n").encode()


def _call(request_id: int, name: str, arguments: dict | None = None) -> dict[str, Any]:
    params = {"name": name, "arguments": arguments or {}}
    return {"jsonrpc": "2.0", "id": request_id, "method": "tools/call", "params": params}


def test_initialize_echoes_supported_version(server: McpServer) -> None:
    request = {"jsonrpc": "2.0", "id": 1, "method": "initialize", "params": {"protocolVersion": "2025-06-18"}}
    response = asyncio.run(server.handle_message(request))

    result = response["result"]
    assert response["id"] == 1
    assert result["protocolVersion"] == "2025-06-18"
    assert result["serverInfo"]["name"] == "playmcp-browser"
    assert result["capabilities"] == {"tools": {"listChanged": False}}
    assert server.state is ServerState.READY


def test_initialize_falls_back_to_default_version(server: McpServer) -> None:
    request = {"jsonrpc": "2.0", "id": 1, "method": "initialize", "params": {"protocolVersion": "1999-01-01"}}
    response = asyncio.run(server.handle_message(request))
    assert response["result"]["protocolVersion"] == "2024-11-05"


def test_tools_list_and_ping(server: McpServer) -> None:
    tools_response = asyncio.run(server.handle_message({"jsonrpc": "2.0", "id": 2, "method": "tools/list"}))
    ping = asyncio.run(server.handle_message({"jsonrpc": "2.0", "id": 3, "method": "ping"}))

    names = [t["name"] for t in tools_response["result"]["tools"]]
    assert names[0] == "openBrowser" and names[-1] == "closeBrowser"
    assert len(names) == 41
    assert ping == {"jsonrpc": "2.0", "id": 3, "result": {}}


def test_notifications_get_no_reply(server: McpServer) -> None:
    assert asyncio.run(server.handle_message({"jsonrpc": "2.0", "method": "notifications/initialized"})) is None


def test_tool_call_before_open_is_a_tool_error(server: McpServer) -> None:
    response = asyncio.run(server.handle_message(_call(4, "navigate", {"url": "https://example.com"})))

    result = response["result"]
    assert result["isError"] is True
    assert result["content"][0] == {"type": "text", "text": "Error: Browser not initialized"}
    assert result["content"][-1] == {"type": "text", "text": "Suggestion: Call openBrowser first"}


def test_unknown_tool_is_a_tool_error(server: McpServer) -> None:
    response = asyncio.run(server.handle_message(_call(5, "teleport")))
    assert response["result"]["isError"] is True
    assert response["result"]["content"][0]["text"] == "Error: Unknown tool: teleport"


def test_open_navigate_title_close_flow(server: McpServer) -> None:
    async def _run() -> list[dict]:
        out = [await server.handle_message(_call(1, "openBrowser", {"headless": True}))]
        active_page(server.manager).page_title = "Example Domain"
        out.append(await server.handle_message(_call(2, "navigate", {"url": "https://example.com"})))
        out.append(await server.handle_message(_call(3, "getPageTitle")))
        out.append(await server.handle_message(_call(4, "closeBrowser")))
        out.append(await server.handle_message(_call(5, "getPageTitle")))
        return out

    opened, navigated, title, closed, after = asyncio.run(_run())
    assert opened["result"] == {"content": [{"type": "text", "text": "Browser opened successfully"}]}
    assert navigated["result"]["content"][0]["text"] == "Navigation successful"
    assert title["result"]["content"][0]["text"] == "Example Domain"
    assert closed["result"]["content"][0]["text"] == "Browser closed successfully"
    assert after["result"]["isError"] is True


def test_invalid_arguments_are_tool_errors(server: McpServer) -> None:
    response = asyncio.run(server.handle_message(_call(6, "mouseClick", {"x": "left", "y": 1})))
    assert response["result"]["isError"] is True
    assert "Invalid argument 'x'" in response["result"]["content"][0]["text"]


def test_execute_javascript_without_value(server: McpServer) -> None:
    async def _run() -> dict:
        await server.handle_message(_call(1, "openBrowser"))
        return await server.handle_message(_call(2, "executeJavaScript", {"script": "console.log(1)"}))

    response = asyncio.run(_run())
    assert response["result"]["content"][0]["text"] == "Script executed successfully (no return value)"


def test_legacy_command_shape(server: McpServer) -> None:
    async def _run() -> tuple[dict, dict]:
        before = await server.handle_message({"command": "getPageTitle", "arguments": {}})
        await server.handle_message({"command": "openBrowser", "arguments": {}})
        ok = await server.handle_message({"command": "getPageUrl", "id": 9})
        return before, ok

    before, ok = asyncio.run(_run())
    assert before == {
        "type": "response",
        "result": {
            "success": False,
            "error": {"message": "Browser not initialized", "suggestion": "Call openBrowser first"},
        },
    }
    assert ok == {"type": "response", "result": {"success": True, "message": "about:blank"}, "id": 9}


def test_unknown_method_and_malformed_frames(server: McpServer, sent: list[dict]) -> None:
    async def _run() -> None:
        await server.dispatch_line(b'{"jsonrpc":"2.0","id":7,"method":"resources/list"}')
        await server.dispatch_line(b"{not json")
        await server.dispatch_line(b"[1, 2]")
        await server.dispatch_line(b'{"jsonrpc":"2.0","id":8}')

    asyncio.run(_run())
    assert [(m["id"], m["error"]["code"]) for m in sent] == [(7, -32601), (None, -32700), (None, -32600), (8, -32600)]
    assert sent[0]["error"]["message"] == "Method resources/list not found"


def test_strict_handshake_rejects_early_requests(manager: SessionManager, sent: list[dict]) -> None:
    manager.config = BrowserConfig(strict_handshake=True)
    server = McpServer(config=manager.config, manager=manager)

    async def _run() -> None:
        await server.dispatch_line(b'{"jsonrpc":"2.0","id":1,"method":"tools/list"}')
        await server.dispatch_line(b'{"command":"getPageUrl"}')
        await server.dispatch_line(b'{"jsonrpc":"2.0","id":2,"method":"initialize","params":{}}')
        await server.dispatch_line(b'{"jsonrpc":"2.0","id":3,"method":"tools/list"}')

    asyncio.run(_run())
    assert sent[0]["error"]["code"] == -32002
    assert sent[1]["type"] == "response"
    assert sent[2]["result"]["protocolVersion"] == "2024-11-05"
    assert "tools" in sent[3]["result"]


def test_serve_answers_in_order_and_handles_split_frames(server: McpServer, sent: list[dict]) -> None:
    init = _line({"jsonrpc": "2.0", "id": 1, "method": "initialize", "params": {}})
    listing = _line({"jsonrpc": "2.0", "id": 2, "method": "tools/list"})
    tail = b'{"jsonrpc":"2.0","id":3,"method":"ping"}'
    reader = ChunkReader(init + listing[:10], listing[10:] + b"\r\n\n", tail)

    asyncio.run(serve(server, reader))
    assert [m["id"] for m in sent] == [1, 2, 3]


def test_shutdown_closes_browser(server: McpServer) -> None:
    asyncio.run(server.manager.open())
    asyncio.run(server.shutdown())
    assert server.manager.session is None


def test_line_buffer() -> None:
    buffer = LineBuffer()
    assert buffer.feed(b'{"a":1}\r\n{"b"') == [b'{"a":1}']
    assert len(buffer) == 4
    assert buffer.feed(b":2}\n   \n") == [b'{"b":2}']
    assert buffer.flush() is None
    buffer.feed(b"tail")
    assert buffer.flush() == b"tail"
    assert len(buffer) == 0


def test_dump_frames_file_hides_typed_passwords(monkeypatch, tmp_path) -> None:  # noqa: ANN001
    dump = tmp_path / "frames" / "dump.log"
    monkeypatch.setenv("MCP_DUMP_FRAMES", str(dump))
    request = _call(9, "type", {"selector": "#password", "text": "hunter2"})

    assert server_main._decode_message(_line(request)) == request

    written = dump.read_text(encoding="utf-8")
    assert written.startswith("--in--\n")
    assert "hunter2" not in written
    assert "<redacted str len=7>" in written


def test_serve_finishes_each_tool_call_before_starting_the_next(server: McpServer, sent: list[dict]) -> None:
    events: list[str] = []

    async def slow_wait(manager: SessionManager, args: dict[str, Any]) -> ToolResult:
        events.append(f"start {args['text']}")
        await asyncio.sleep(0.05 if args["text"] == "first" else 0)
        events.append(f"end {args['text']}")
        return ToolResult.text(args["text"])

    server.registry.register("waitForText", slow_wait, requires_browser=False)
    chunk = _line(_call(1, "waitForText", {"text": "first"})) + _line(_call(2, "waitForText", {"text": "second"}))

    asyncio.run(serve(server, ChunkReader(chunk)))

    assert events == ["start first", "end first", "start second", "end second"]
    assert [m["id"] for m in sent] == [1, 2]
    assert [m["result"]["content"][0]["text"] for m in sent] == ["first", "second"]
