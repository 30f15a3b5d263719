"""
Browser session ownership for the Playwright-backed facade.

A SessionManager owns at most one live BrowserSession (driver, browser,
context, page) plus the per-session state the tools share:
- MousePosition: last cursor coordinates, read by parameterless clicks
- PageDiagnostics: console/network listeners registered on demand

Nothing here is module-global; the dispatcher holds one manager instance.
"""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from playwright.async_api import Browser, BrowserContext, Page, Playwright, async_playwright

from .config import BrowserConfig
from .errors import BrowserNotInitializedError, BrowserToolError

logger = logging.getLogger("mcp.playmcp.session")


@dataclass
class MousePosition:
    x: float = 0.0
    y: float = 0.0

    def update(self, x: float, y: float) -> None:
        self.x = x
        self.y = y

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y}


@dataclass
class BrowserSession:
    playwright: Playwright
    browser: Browser
    context: BrowserContext
    page: Page

    def is_connected(self) -> bool:
        return self.browser.is_connected()


@dataclass
class PageDiagnostics:
    """Console and network records collected since listener registration."""

    console_messages: list[str] | None = None
    network_requests: list[dict[str, Any]] | None = None
    _by_request: dict[Any, dict[str, Any]] = field(default_factory=dict)

    def watch_console(self, page: Page) -> list[str]:
        if self.console_messages is None:
            messages: list[str] = []

            def _on_console(msg: Any) -> None:
                messages.append(f"[{str(msg.type).upper()}] {msg.text}")

            page.on("console", _on_console)
            self.console_messages = messages
            logger.debug("console listener registered")
        return self.console_messages

    def watch_network(self, page: Page) -> list[dict[str, Any]]:
        if self.network_requests is None:
            requests: list[dict[str, Any]] = []
            by_request = self._by_request

            def _on_request(request: Any) -> None:
                entry = {"url": request.url, "method": request.method}
                requests.append(entry)
                by_request[request] = entry

            def _on_response(response: Any) -> None:
                entry = by_request.get(response.request)
                if entry is not None:
                    entry["status"] = response.status

            page.on("request", _on_request)
            page.on("response", _on_response)
            self.network_requests = requests
            logger.debug("network listeners registered")
        return self.network_requests


class SessionManager:
    """Owns the browser session and its lifecycle."""

    def __init__(
        self,
        config: BrowserConfig | None = None,
        playwright_factory: Callable[[], Any] = async_playwright,
    ) -> None:
        self.config = config or BrowserConfig.from_env()
        self._playwright_factory = playwright_factory
        self.session: BrowserSession | None = None
        self.mouse = MousePosition()
        self.diagnostics = PageDiagnostics()
        self.debug = False
        self._saved_log_level: int | None = None

    @property
    def is_initialized(self) -> bool:
        return self.session is not None and self.session.is_connected()

    def require_page(self, tool: str = "") -> Page:
        """Return the active page or raise BrowserNotInitializedError."""
        if not self.is_initialized:
            raise BrowserNotInitializedError(tool=tool)
        assert self.session is not None
        return self.session.page

    def _set_debug(self, debug: bool) -> None:
        root = logging.getLogger("mcp.playmcp")
        if debug and not self.debug:
            self._saved_log_level = root.level
            root.setLevel(logging.DEBUG)
        elif not debug and self.debug and self._saved_log_level is not None:
            root.setLevel(self._saved_log_level)
            self._saved_log_level = None
        self.debug = debug

    async def open(self, headless: bool | None = None, debug: bool = False) -> dict[str, Any]:
        """Launch browser, context and page. No-op if already connected."""
        self._set_debug(debug)
        if self.is_initialized:
            logger.debug("browser already running")
            return {"alreadyOpen": True, "engine": self.config.engine}

        if self.session is not None:
            # Browser died underneath us; drop the stale handles first.
            await self.close()
            self._set_debug(debug)

        headless = self.config.headless if headless is None else bool(headless)
        launch_options: dict[str, Any] = {"headless": headless, "args": list(self.config.launch_args)}
        if self.config.executable_path:
            launch_options["executable_path"] = self.config.executable_path

        playwright = None
        browser = None
        try:
            logger.debug("launching %s headless=%s", self.config.engine, headless)
            playwright = await self._playwright_factory().start()
            browser_type = getattr(playwright, self.config.engine)
            browser = await browser_type.launch(**launch_options)
            context = await browser.new_context(
                viewport={"width": self.config.viewport_width, "height": self.config.viewport_height}
            )
            context.set_default_timeout(self.config.action_timeout_ms)
            context.set_default_navigation_timeout(self.config.navigation_timeout_ms)
            page = await context.new_page()
        except Exception as exc:
            logger.error("browser launch failed: %s", exc)
            if browser is not None:
                with contextlib.suppress(Exception):
                    await browser.close()
            if playwright is not None:
                with contextlib.suppress(Exception):
                    await playwright.stop()
            self._reset()
            raise BrowserToolError(
                message="Failed to launch browser",
                suggestion=f"Technical details: {exc}",
                tool="openBrowser",
                reason=str(exc),
            ) from exc

        self.session = BrowserSession(playwright=playwright, browser=browser, context=context, page=page)
        logger.info("browser launched engine=%s headless=%s", self.config.engine, headless)
        return {"alreadyOpen": False, "engine": self.config.engine, "headless": headless}

    async def close(self) -> dict[str, Any]:
        """Tear down page, context, browser and driver; never raises."""
        session = self.session
        if session is None:
            self._reset()
            return {"closed": False}

        steps = (
            ("page", session.page.close),
            ("context", session.context.close),
            ("browser", session.browser.close),
            ("playwright", session.playwright.stop),
        )
        failures: list[str] = []
        for label, closer in steps:
            try:
                await closer()
            except Exception as exc:
                logger.warning("teardown of %s failed: %s", label, exc)
                failures.append(label)

        self._reset()
        logger.info("browser closed")
        return {"closed": True, "teardownFailures": failures}

    def _reset(self) -> None:
        self.session = None
        self.mouse = MousePosition()
        self.diagnostics = PageDiagnostics()
        self._set_debug(False)
