from __future__ import annotations

import asyncio
import logging

import pytest
from conftest import DriverError, FakePlaywright, active_page

from mcp_servers.playmcp.config import BrowserConfig
from mcp_servers.playmcp.errors import BrowserNotInitializedError, BrowserToolError
from mcp_servers.playmcp.session import SessionManager


def test_require_page_before_open_raises(manager: SessionManager) -> None:
    with pytest.raises(BrowserNotInitializedError) as excinfo:
        manager.require_page("navigate")
    assert excinfo.value.message == "Browser not initialized"
    assert excinfo.value.suggestion == "Call openBrowser first"
    assert excinfo.value.tool == "navigate"


def test_open_launches_configured_engine(fake_playwright: FakePlaywright) -> None:
    config = BrowserConfig(engine="firefox", launch_args=[], executable_path="/opt/ff", viewport_width=800)
    manager = SessionManager(config, playwright_factory=fake_playwright.factory())

    result = asyncio.run(manager.open(headless=True))

    assert result == {"alreadyOpen": False, "engine": "firefox", "headless": True}
    assert fake_playwright.chromium.launches == []
    launch = fake_playwright.firefox.launches[0]
    assert launch["headless"] is True
    assert launch["executable_path"] == "/opt/ff"
    context = fake_playwright.firefox.browsers[0].contexts[0]
    assert context.options["viewport"] == {"width": 800, "height": 720}
    assert context.default_timeout == config.action_timeout_ms
    assert manager.is_initialized


def test_open_twice_is_a_noop(manager: SessionManager, fake_playwright: FakePlaywright) -> None:
    async def _run() -> dict:
        await manager.open()
        return await manager.open()

    second = asyncio.run(_run())
    assert second["alreadyOpen"] is True
    assert len(fake_playwright.chromium.launches) == 1


def test_open_uses_config_headless_by_default(manager: SessionManager, fake_playwright: FakePlaywright) -> None:
    asyncio.run(manager.open())
    assert fake_playwright.chromium.launches[0]["headless"] is False


def test_launch_failure_is_reported_and_state_reset(fake_playwright: FakePlaywright) -> None:
    fake_playwright.chromium.launch_error = DriverError("Executable doesn't exist")
    manager = SessionManager(BrowserConfig(), playwright_factory=fake_playwright.factory())

    with pytest.raises(BrowserToolError) as excinfo:
        asyncio.run(manager.open())

    assert excinfo.value.message == "Failed to launch browser"
    assert "Executable doesn't exist" in excinfo.value.suggestion
    assert manager.session is None
    assert fake_playwright.stopped == 1


def test_close_tears_down_and_resets(manager: SessionManager, fake_playwright: FakePlaywright) -> None:
    async def _run() -> dict:
        await manager.open()
        manager.mouse.update(10, 20)
        return await manager.close()

    result = asyncio.run(_run())
    assert result == {"closed": True, "teardownFailures": []}
    assert manager.session is None
    assert manager.mouse.to_dict() == {"x": 0.0, "y": 0.0}
    assert fake_playwright.stopped == 1
    with pytest.raises(BrowserNotInitializedError):
        manager.require_page("getPageTitle")


def test_close_without_browser_is_harmless(manager: SessionManager) -> None:
    assert asyncio.run(manager.close()) == {"closed": False}


def test_close_keeps_going_when_a_step_fails(manager: SessionManager, fake_playwright: FakePlaywright) -> None:
    async def _run() -> dict:
        await manager.open()
        fake_playwright.chromium.browsers[0].close_error = DriverError("Target closed")
        return await manager.close()

    result = asyncio.run(_run())
    assert result["teardownFailures"] == ["browser"]
    assert fake_playwright.stopped == 1
    assert manager.session is None


def test_disconnected_browser_is_relaunched(manager: SessionManager, fake_playwright: FakePlaywright) -> None:
    async def _run() -> dict:
        await manager.open()
        fake_playwright.chromium.browsers[0].connected = False
        assert not manager.is_initialized
        return await manager.open()

    result = asyncio.run(_run())
    assert result["alreadyOpen"] is False
    assert len(fake_playwright.chromium.launches) == 2


def test_debug_raises_log_level_until_close(manager: SessionManager) -> None:
    root = logging.getLogger("mcp.playmcp")
    root.setLevel(logging.WARNING)

    asyncio.run(manager.open(debug=True))
    assert root.level == logging.DEBUG

    asyncio.run(manager.close())
    assert root.level == logging.WARNING


def test_diagnostics_collect_console_and_network(manager: SessionManager) -> None:
    class Msg:
        type = "error"
        text = "boom"

    class Request:
        url = "https://example.com/api"
        method = "GET"

    class Response:
        request = Request()
        status = 204

    async def _run() -> tuple[list, list]:
        await manager.open()
        page = active_page(manager)
        console = manager.diagnostics.watch_console(page)
        network = manager.diagnostics.watch_network(page)
        await page.emit("console", Msg())
        await page.emit("request", Response.request)
        await page.emit("response", Response())
        return console, network

    console, network = asyncio.run(_run())
    assert console == ["[ERROR] boom"]
    assert network == [{"url": "https://example.com/api", "method": "GET", "status": 204}]
