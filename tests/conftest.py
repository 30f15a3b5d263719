from __future__ import annotations

import inspect
from io import BytesIO
from pathlib import Path
from typing import Any

import pytest
from PIL import Image

from mcp_servers.playmcp.config import BrowserConfig
from mcp_servers.playmcp.session import SessionManager


def png_bytes(width: int, height: int) -> bytes:
    buf = BytesIO()
    Image.new("RGB", (width, height), (255, 255, 255)).save(buf, format="PNG")
    return buf.getvalue()


class DriverError(Exception):
    """Stands in for playwright's Error/TimeoutError."""


class FakeResponse:
    def __init__(self, status: int = 200) -> None:
        self.status = status


class FakeMouse:
    def __init__(self) -> None:
        self.calls: list[tuple[Any, ...]] = []

    async def move(self, x: float, y: float) -> None:
        self.calls.append(("move", x, y))

    async def click(self, x: float, y: float) -> None:
        self.calls.append(("click", x, y))

    async def down(self) -> None:
        self.calls.append(("down",))

    async def up(self) -> None:
        self.calls.append(("up",))


class FakeKeyboard:
    def __init__(self) -> None:
        self.pressed: list[str] = []

    async def press(self, key: str) -> None:
        if key == "NotAKey":
            raise DriverError(f'Unknown key: "{key}"')
        self.pressed.append(key)


class FakeElement:
    def __init__(self, page: FakePage, selector: str) -> None:
        self.page = page
        self.selector = selector

    async def screenshot(self, path: str | None = None) -> bytes:
        data = png_bytes(40, 20)
        if path:
            Path(path).write_bytes(data)
        return data


class FakeLocator(FakeElement):
    @property
    def first(self) -> FakeLocator:
        return self

    def _check(self) -> None:
        if self.selector in self.page.missing:
            raise DriverError(f"Timeout waiting for locator('{self.selector}')")

    async def press_sequentially(self, text: str) -> None:
        self._check()
        self.page.calls.append(("type", self.selector, text))

    async def hover(self) -> None:
        self._check()
        self.page.calls.append(("hover", self.selector))

    async def drag_to(self, target: FakeLocator) -> None:
        self._check()
        target._check()
        self.page.calls.append(("drag", self.selector, target.selector))

    async def select_option(self, values: list[str]) -> list[str]:
        self._check()
        self.page.calls.append(("select", self.selector, list(values)))
        return list(values)

    async def set_input_files(self, files: list[str]) -> None:
        self._check()
        self.page.calls.append(("upload", self.selector, list(files)))

    async def screenshot(self, path: str | None = None) -> bytes:
        self._check()
        return await super().screenshot(path=path)


class FakePage:
    """In-memory stand-in for playwright.async_api.Page."""

    def __init__(self) -> None:
        self.url = "about:blank"
        self.html = "<html><head></head><body></body></html>"
        self.body_text = ""
        self.page_title = ""
        self.title_sequence: list[str] = []
        self.missing: set[str] = set()
        self.responses: dict[str, Any] = {}
        self.calls: list[tuple[Any, ...]] = []
        self.goto_errors: list[Exception] = []
        self.mouse = FakeMouse()
        self.keyboard = FakeKeyboard()
        self.viewport = {"width": 1280, "height": 720}
        self.listeners: dict[str, list[Any]] = {}
        self.once_listeners: dict[str, list[Any]] = {}
        self.waits: list[float] = []
        self.closed = False

    # navigation

    async def goto(self, url: str, wait_until: str | None = None, timeout: float | None = None) -> FakeResponse:
        self.calls.append(("goto", url, wait_until, timeout))
        if self.goto_errors:
            raise self.goto_errors.pop(0)
        self.url = url
        return FakeResponse(200)

    async def go_back(self) -> None:
        self.calls.append(("back",))

    async def go_forward(self) -> None:
        self.calls.append(("forward",))

    async def reload(self) -> None:
        self.calls.append(("reload",))

    # reads

    async def content(self) -> str:
        return self.html

    async def inner_text(self, selector: str) -> str:
        return self.body_text

    async def title(self) -> str:
        if self.title_sequence:
            return self.title_sequence.pop(0)
        return self.page_title

    async def evaluate(self, script: str, arg: Any = None) -> Any:
        self.calls.append(("evaluate", script, arg))
        if script not in self.responses:
            return None
        value = self.responses[script]
        if isinstance(value, Exception):
            raise value
        if callable(value):
            return value(arg)
        return value

    # input

    async def click(self, selector: str) -> None:
        if selector in self.missing:
            raise DriverError(f"Timeout waiting for selector '{selector}'")
        self.calls.append(("click", selector))

    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(self, selector)

    async def query_selector(self, selector: str) -> FakeElement | None:
        if selector in self.missing:
            return None
        return FakeElement(self, selector)

    async def wait_for_selector(self, selector: str, timeout: float | None = None) -> FakeElement:
        self.calls.append(("wait_for_selector", selector, timeout))
        if selector in self.missing:
            raise DriverError(f"Timeout {timeout}ms exceeded")
        return FakeElement(self, selector)

    async def wait_for_timeout(self, ms: float) -> None:
        self.waits.append(ms)

    async def set_viewport_size(self, size: dict[str, int]) -> None:
        self.viewport = dict(size)

    async def screenshot(self, path: str | None = None, full_page: bool = False) -> bytes:
        height = self.viewport["height"] * 3 if full_page else self.viewport["height"]
        data = png_bytes(self.viewport["width"] // 10, height // 10)
        if path:
            Path(path).write_bytes(data)
        return data

    # events

    def on(self, event: str, handler: Any) -> None:
        self.listeners.setdefault(event, []).append(handler)

    def once(self, event: str, handler: Any) -> None:
        self.once_listeners.setdefault(event, []).append(handler)

    async def emit(self, event: str, payload: Any) -> None:
        handlers = self.listeners.get(event, []) + self.once_listeners.pop(event, [])
        for handler in handlers:
            result = handler(payload)
            if inspect.isawaitable(result):
                await result

    async def close(self) -> None:
        self.closed = True


class FakeContext:
    def __init__(self, page: FakePage, options: dict[str, Any]) -> None:
        self.page = page
        self.options = options
        self.default_timeout: float | None = None
        self.default_navigation_timeout: float | None = None
        self.closed = False

    def set_default_timeout(self, timeout: float) -> None:
        self.default_timeout = timeout

    def set_default_navigation_timeout(self, timeout: float) -> None:
        self.default_navigation_timeout = timeout

    async def new_page(self) -> FakePage:
        return self.page

    async def close(self) -> None:
        self.closed = True


class FakeBrowser:
    def __init__(self, page_factory: Any = FakePage) -> None:
        self.page_factory = page_factory
        self.contexts: list[FakeContext] = []
        self.connected = True
        self.close_error: Exception | None = None

    def is_connected(self) -> bool:
        return self.connected

    async def new_context(self, **options: Any) -> FakeContext:
        context = FakeContext(self.page_factory(), options)
        self.contexts.append(context)
        return context

    async def close(self) -> None:
        self.connected = False
        if self.close_error is not None:
            raise self.close_error


class FakeBrowserType:
    def __init__(self, name: str, page_factory: Any = FakePage) -> None:
        self.name = name
        self.page_factory = page_factory
        self.launches: list[dict[str, Any]] = []
        self.launch_error: Exception | None = None
        self.browsers: list[FakeBrowser] = []

    async def launch(self, **options: Any) -> FakeBrowser:
        self.launches.append(options)
        if self.launch_error is not None:
            raise self.launch_error
        browser = FakeBrowser(self.page_factory)
        self.browsers.append(browser)
        return browser


class FakePlaywright:
    def __init__(self, page_factory: Any = FakePage) -> None:
        self.chromium = FakeBrowserType("chromium", page_factory)
        self.firefox = FakeBrowserType("firefox", page_factory)
        self.webkit = FakeBrowserType("webkit", page_factory)
        self.starts = 0
        self.stopped = 0

    async def stop(self) -> None:
        self.stopped += 1

    def factory(self) -> Any:
        """Return a callable shaped like ``async_playwright``."""
        driver = self

        class _Starter:
            async def start(self) -> FakePlaywright:
                driver.starts += 1
                return driver

        return lambda: _Starter()


@pytest.fixture
def fake_playwright() -> FakePlaywright:
    return FakePlaywright()


@pytest.fixture
def manager(fake_playwright: FakePlaywright) -> SessionManager:
    return SessionManager(BrowserConfig(), playwright_factory=fake_playwright.factory())


def active_page(manager: SessionManager) -> FakePage:
    assert manager.session is not None
    return manager.session.page  # type: ignore[return-value]
