from __future__ import annotations

from mcp_servers.playmcp.server.redaction import (
    redact_jsonrpc_for_dump,
    redact_jsonrpc_for_log,
    redact_tool_arguments,
    redact_url,
)


def test_redact_url_keeps_normal_query() -> None:
    url = "https://example.com/search?q=hello&sort=asc"
    assert redact_url(url) == url


def test_redact_url_redacts_sensitive_query_and_userinfo() -> None:
    out = redact_url("https://user:pw@example.com/?token=abc&q=hello&author=Ann")
    assert "user:pw@" not in out
    assert "token=abc" not in out
    assert "q=hello" in out
    assert "author=Ann" in out


def test_press_key_is_not_mistaken_for_a_secret() -> None:
    assert redact_tool_arguments("pressKey", {"key": "Enter"}) == {"key": "Enter"}


def test_typed_text_into_password_field_is_redacted() -> None:
    out = redact_tool_arguments("type", {"selector": "input[type=password]", "text": "hunter2"})
    assert out["selector"] == "input[type=password]"
    assert out["text"] == "<redacted str len=7>"

    plain = redact_tool_arguments("type", {"selector": "#search", "text": "shoes"})
    assert plain["text"] == "shoes"


def test_prompt_text_and_navigate_url() -> None:
    assert redact_tool_arguments("handleDialog", {"accept": True, "promptText": "secret"})["promptText"].startswith(
        "<redacted"
    )
    assert "abc" not in redact_tool_arguments("navigate", {"url": "https://a.example/?api_key=abc"})["url"]


def test_dump_redacts_both_request_shapes_and_truncates_results() -> None:
    envelope = {
        "jsonrpc": "2.0",
        "id": 1,
        "method": "tools/call",
        "params": {"name": "navigate", "arguments": {"url": "https://a.example/?token=t"}},
    }
    legacy = {"command": "type", "arguments": {"selector": "#password", "text": "pw"}}
    response = {"jsonrpc": "2.0", "id": 2, "result": {"content": [{"type": "text", "text": "x" * 2000}]}}

    assert "token=t" not in redact_jsonrpc_for_dump(envelope)["params"]["arguments"]["url"]
    assert envelope["params"]["arguments"]["url"].endswith("token=t")
    assert redact_jsonrpc_for_dump(legacy)["arguments"]["text"].startswith("<redacted")
    text = redact_jsonrpc_for_log(response)["result"]["content"][0]["text"]
    assert text.startswith("x" * 512)
    assert "truncated len=2000" in text
