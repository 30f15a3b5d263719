from __future__ import annotations

import asyncio
from pathlib import Path

import pytest
from conftest import DriverError, active_page

from mcp_servers.playmcp import tools
from mcp_servers.playmcp.errors import BrowserToolError
from mcp_servers.playmcp.session import SessionManager
from mcp_servers.playmcp.tools.dom import ELEMENT_CONTENT_JS, ELEMENT_HIERARCHY_JS, INSPECT_ELEMENT_JS
from mcp_servers.playmcp.tools.page import FORMS_JS, LINKS_JS, META_TAGS_JS, SCRIPTS_JS
from mcp_servers.playmcp.tools.scripting import EXECUTE_JS


def _open(manager: SessionManager) -> None:
    asyncio.run(manager.open())


def test_page_reads(manager: SessionManager) -> None:
    _open(manager)
    page = active_page(manager)
    page.html = "<html><body><h1>Hi</h1></body></html>"
    page.body_text = "Hi"
    page.page_title = "Greeting"
    page.url = "https://example.com/hi"

    assert asyncio.run(tools.get_page_source(manager)) == page.html
    assert asyncio.run(tools.get_page_text(manager)) == "Hi"
    assert asyncio.run(tools.get_page_title(manager)) == "Greeting"
    assert asyncio.run(tools.get_page_url(manager)) == "https://example.com/hi"


def test_scripts_and_empty_collections(manager: SessionManager) -> None:
    _open(manager)
    page = active_page(manager)
    page.responses[SCRIPTS_JS] = ["// External script: https://cdn.example/app.js", "console.log(1)"]

    assert asyncio.run(tools.get_scripts(manager)) == [
        "// External script: https://cdn.example/app.js",
        "console.log(1)",
    ]
    assert asyncio.run(tools.get_stylesheets(manager)) == []
    assert asyncio.run(tools.get_images(manager)) == []


def test_collections_drop_null_fields(manager: SessionManager) -> None:
    _open(manager)
    page = active_page(manager)
    page.responses[META_TAGS_JS] = [{"name": "description", "property": None, "content": "x", "httpEquiv": None}]
    page.responses[LINKS_JS] = [{"href": "https://a.example/", "text": "A", "title": None}]
    page.responses[FORMS_JS] = [
        {
            "action": "/login",
            "method": None,
            "fields": [{"name": "user", "type": "text", "value": None}],
        }
    ]

    assert asyncio.run(tools.get_meta_tags(manager)) == [{"name": "description", "content": "x"}]
    assert asyncio.run(tools.get_links(manager)) == [{"href": "https://a.example/", "text": "A"}]
    assert asyncio.run(tools.get_forms(manager)) == [
        {"action": "/login", "fields": [{"name": "user", "type": "text"}]}
    ]


def test_element_content_and_inspect(manager: SessionManager) -> None:
    _open(manager)
    page = active_page(manager)
    page.responses[ELEMENT_CONTENT_JS] = lambda sel: {"html": "<b>x</b>", "text": "x"} if sel == "#a" else None
    info = {"tagName": "DIV", "className": "box", "id": "a", "attributes": [], "innerText": "x"}
    page.responses[INSPECT_ELEMENT_JS] = lambda sel: info if sel == "#a" else None

    assert asyncio.run(tools.get_element_content(manager, "#a")) == {"html": "<b>x</b>", "text": "x"}
    assert asyncio.run(tools.inspect_element(manager, "#a")) == info

    with pytest.raises(BrowserToolError) as excinfo:
        asyncio.run(tools.get_element_content(manager, "#missing"))
    assert excinfo.value.message == "Failed to get element content"
    assert excinfo.value.reason == "Element not found: #missing"

    with pytest.raises(BrowserToolError) as excinfo:
        asyncio.run(tools.inspect_element(manager, "#missing"))
    assert excinfo.value.message == "Failed to inspect element"


def test_element_hierarchy_passes_options(manager: SessionManager) -> None:
    _open(manager)
    page = active_page(manager)
    tree = {"tagName": "body", "children": [], "childrenCount": 2}
    page.responses[ELEMENT_HIERARCHY_JS] = lambda args: tree if args["selector"] == "body" else None

    assert asyncio.run(tools.get_element_hierarchy(manager, max_depth=0, include_text=True)) == tree
    call = [c for c in page.calls if c[1] == ELEMENT_HIERARCHY_JS][0]
    assert call[2] == {"selector": "body", "maxDepth": 0, "includeText": True, "includeAttributes": False}

    with pytest.raises(BrowserToolError) as excinfo:
        asyncio.run(tools.get_element_hierarchy(manager, selector="#nothing"))
    assert excinfo.value.suggestion == "Check if the selector exists"


def test_execute_javascript(manager: SessionManager) -> None:
    _open(manager)
    page = active_page(manager)
    page.responses[EXECUTE_JS] = lambda source: 2 if source == "return 1 + 1" else None

    assert asyncio.run(tools.execute_javascript(manager, "return 1 + 1")) == 2
    assert asyncio.run(tools.execute_javascript(manager, "console.log('x')")) is None

    page.responses[EXECUTE_JS] = DriverError("SyntaxError: Unexpected token")
    with pytest.raises(BrowserToolError) as excinfo:
        asyncio.run(tools.execute_javascript(manager, "return ("))
    assert excinfo.value.suggestion == "Check if the JavaScript syntax is valid"


def test_evaluate_with_return_passes_expression_through(manager: SessionManager) -> None:
    _open(manager)
    page = active_page(manager)
    page.responses["document.title"] = "Docs"

    assert asyncio.run(tools.evaluate_with_return(manager, "document.title")) == "Docs"


def test_screenshot_scopes(manager: SessionManager, tmp_path: Path) -> None:
    _open(manager)

    full = asyncio.run(tools.screenshot(manager, str(tmp_path / "shots" / "full.png")))
    assert full["scope"] == "page"
    assert (full["width"], full["height"]) == (128, 216)
    assert Path(full["path"]).is_file()

    viewport = asyncio.run(tools.screenshot(manager, str(tmp_path / "v.png"), scope="viewport"))
    assert (viewport["width"], viewport["height"]) == (128, 72)

    element = asyncio.run(tools.screenshot(manager, str(tmp_path / "e.png"), scope="element", selector="#logo"))
    assert (element["scope"], element["width"], element["height"]) == ("element", 40, 20)


def test_screenshot_errors(manager: SessionManager, tmp_path: Path) -> None:
    _open(manager)
    active_page(manager).missing.add("#gone")

    with pytest.raises(BrowserToolError) as excinfo:
        asyncio.run(tools.screenshot(manager, str(tmp_path / "x.png"), scope="element", selector="#gone"))
    assert excinfo.value.reason == "Element not found: #gone"

    with pytest.raises(BrowserToolError) as excinfo:
        asyncio.run(tools.screenshot(manager, str(tmp_path / "x.png"), scope="region"))
    assert "Unknown screenshot type" in excinfo.value.reason


def test_take_screenshot(manager: SessionManager, tmp_path: Path) -> None:
    _open(manager)

    viewport = asyncio.run(tools.take_screenshot(manager, str(tmp_path / "a.png")))
    assert viewport["scope"] == "viewport"
    full = asyncio.run(tools.take_screenshot(manager, str(tmp_path / "b.png"), full_page=True))
    assert full["height"] == 216
    element = asyncio.run(tools.take_screenshot(manager, str(tmp_path / "c.png"), full_page=True, element="#x"))
    assert element["scope"] == "element"
