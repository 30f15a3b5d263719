"""
Targeted resource scanner.

Visits a handful of known URLs for one product (main site, help center,
tutorials, ...), extracts their links and sorts them into topical buckets.
One browser serves the whole scan; each URL gets its own context so cookies
and storage never leak between sources. URLs are scanned one after another.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from playwright.async_api import async_playwright

from ..config import ScannerConfig
from .classify import CATEGORIES, determine_category, is_protection_page, is_skippable, resolve_title, resource_type
from .extract import BODY_TEXT_JS, EXTRACT_PAGE_JS, PageData
from .insights import InsightGenerator

logger = logging.getLogger("mcp.playmcp.scanner")

MAIN_SOURCE = "main"
MAIN_PAGE = "main_page"
SCANNER_LAUNCH_ARGS = ["--no-sandbox", "--disable-setuid-sandbox"]


class ProtectedPageError(Exception):
    """The page kept serving a bot-protection interstitial."""


@dataclass
class DeepResource:
    title: str
    url: str
    description: str
    type: str
    source: str
    verified: bool = True
    ai_analysis: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "title": self.title,
            "url": self.url,
            "description": self.description,
            "type": self.type,
            "source": self.source,
            "verified": self.verified,
        }
        if self.ai_analysis is not None:
            data["aiAnalysis"] = self.ai_analysis
        return data


@dataclass
class ScanMetadata:
    scanned_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    urls_scanned: int = 0
    resources_found: int = 0
    elapsed_ms: int = 0
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "scannedAt": self.scanned_at.isoformat(),
            "urlsScanned": self.urls_scanned,
            "resourcesFound": self.resources_found,
            "elapsedMs": self.elapsed_ms,
            "errors": list(self.errors),
        }


@dataclass
class ScanResult:
    urls: dict[str, str]
    name: str | None = None
    description: str | None = None
    logo: str | None = None
    categorized_resources: dict[str, list[DeepResource]] = field(
        default_factory=lambda: {category: [] for category in CATEGORIES}
    )
    insights: dict[str, Any] = field(default_factory=dict)
    metadata: ScanMetadata = field(default_factory=ScanMetadata)

    def add(self, resource: DeepResource, category: str) -> None:
        self.categorized_resources.setdefault(category, []).append(resource)

    def count_resources(self) -> int:
        return sum(len(bucket) for bucket in self.categorized_resources.values())

    def find_main_resource(self, url: str) -> DeepResource | None:
        for bucket in self.categorized_resources.values():
            for resource in bucket:
                if resource.source == MAIN_PAGE and resource.url == url:
                    return resource
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "urls": dict(self.urls),
            "name": self.name,
            "description": self.description,
            "logo": self.logo,
            "categorizedResources": {
                category: [r.to_dict() for r in bucket] for category, bucket in self.categorized_resources.items()
            },
            "aiInsights": self.insights,
            "metadata": self.metadata.to_dict(),
        }


class TargetedScanner:
    """Scan a mapping of ``{source: url}`` for one product."""

    def __init__(
        self,
        config: ScannerConfig | None = None,
        insights: InsightGenerator | None = None,
        playwright_factory: Callable[[], Any] = async_playwright,
    ) -> None:
        self.config = config or ScannerConfig.from_env()
        self.insights = insights or InsightGenerator(self.config)
        self._playwright_factory = playwright_factory

    async def scan(self, urls: dict[str, str], tool_name: str) -> ScanResult:
        started = time.monotonic()
        targets = {source: url for source, url in urls.items() if url}
        result = ScanResult(urls=targets)
        logger.info("scan start tool=%s urls=%d", tool_name, len(targets))

        playwright = None
        browser = None
        try:
            playwright = await self._playwright_factory().start()
            launch_options: dict[str, Any] = {"headless": True, "args": list(SCANNER_LAUNCH_ARGS)}
            if self.config.executable_path:
                launch_options["executable_path"] = self.config.executable_path
            browser = await playwright.chromium.launch(**launch_options)
            for source, url in targets.items():
                await self._scan_url(browser, source, url, tool_name, result)
        except Exception as exc:
            logger.error("scanner browser failed: %s", exc)
            result.metadata.errors.append(f"browser launch failed: {exc}")
        finally:
            if browser is not None:
                with contextlib.suppress(Exception):
                    await browser.close()
            if playwright is not None:
                with contextlib.suppress(Exception):
                    await playwright.stop()

        result.insights = await self.insights.generate(result, tool_name)
        await self._enhance_resources(result, tool_name)

        main_url = targets.get(MAIN_SOURCE)
        main_resource = result.find_main_resource(main_url) if main_url else None
        if main_resource is not None:
            result.name = tool_name
            result.description = main_resource.description

        result.metadata.urls_scanned = len(targets)
        result.metadata.resources_found = result.count_resources()
        result.metadata.elapsed_ms = int((time.monotonic() - started) * 1000)
        logger.info(
            "scan done tool=%s resources=%d errors=%d elapsed_ms=%d",
            tool_name,
            result.metadata.resources_found,
            len(result.metadata.errors),
            result.metadata.elapsed_ms,
        )
        return result

    async def _scan_url(self, browser: Any, source: str, url: str, tool_name: str, result: ScanResult) -> None:
        context = None
        page = None
        try:
            context = await browser.new_context(
                user_agent=self.config.user_agent,
                viewport={"width": self.config.viewport_width, "height": self.config.viewport_height},
            )
            page = await context.new_page()
            await self._load(page, source, url)
            page_data = PageData.from_raw(await page.evaluate(EXTRACT_PAGE_JS))
            self._process_page(page_data, source, url, tool_name, result)
        except ProtectedPageError:
            logger.info("protected page source=%s url=%s", source, url)
            result.metadata.errors.append(f"{source}: Page has bot protection enabled")
        except Exception as exc:
            logger.warning("scan failed source=%s url=%s: %s", source, url, exc)
            result.metadata.errors.append(f"{source} scan failed: {exc}")
        finally:
            for closer in (page, context):
                if closer is not None:
                    with contextlib.suppress(Exception):
                        await closer.close()

    async def _load(self, page: Any, source: str, url: str) -> None:
        """Navigate with retries; waits grow by ``backoff`` per attempt."""
        attempts = max(1, self.config.max_attempts)
        for attempt in range(1, attempts + 1):
            delay_factor = self.config.backoff ** (attempt - 1)
            try:
                await page.goto(url, wait_until="domcontentloaded", timeout=self.config.navigation_timeout_ms)
                await page.wait_for_timeout(self.config.settle_ms)
            except Exception as exc:
                if attempt == attempts:
                    raise
                logger.info("navigation attempt %d/%d failed source=%s: %s", attempt, attempts, source, exc)
                await asyncio.sleep(self.config.settle_ms * delay_factor / 1000)
                continue

            title = await page.title()
            body = await page.evaluate(BODY_TEXT_JS)
            if not is_protection_page(title, body or ""):
                return
            if attempt == attempts:
                raise ProtectedPageError(url)
            logger.info("protection detected source=%s attempt=%d; waiting", source, attempt)
            await page.wait_for_timeout(self.config.protection_wait_ms * delay_factor)

    def _process_page(self, data: PageData, source: str, url: str, tool_name: str, result: ScanResult) -> None:
        main_title = data.title or f"{tool_name} {source} Page"
        main = DeepResource(
            title=main_title,
            url=url,
            description=data.description or f"{tool_name} {source} resource page",
            type=resource_type(data.title, url),
            source=MAIN_PAGE,
        )
        result.add(main, determine_category(main_title, url, source))

        seen = {url}
        for link in data.all_links(body_limit=self.config.max_links):
            href = link.get("href") or ""
            if not href or href in seen:
                continue
            seen.add(href)

            title = resolve_title(link, tool_name)
            if len(title) < 3 or is_skippable(title):
                continue

            resource = DeepResource(
                title=title,
                url=href,
                description=link.get("title") or f"{title} - {tool_name} resource",
                type=resource_type(title, href),
                source=source,
            )
            result.add(resource, determine_category(title, href, source))

        if source == MAIN_SOURCE and data.og_image:
            result.logo = data.og_image

    async def _enhance_resources(self, result: ScanResult, tool_name: str) -> None:
        if not self.insights.ai_enabled or self.config.enhance_top <= 0:
            return
        for bucket in result.categorized_resources.values():
            for resource in bucket[: self.config.enhance_top]:
                resource.ai_analysis = await self.insights.analyze_resource(resource, tool_name)

    async def close(self) -> None:
        await self.insights.close()
