"""
Page inspection tool handlers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ... import tools
from ..types import ToolResult

if TYPE_CHECKING:
    from ...session import SessionManager


async def handle_get_page_source(manager: SessionManager, args: dict[str, Any]) -> ToolResult:
    return ToolResult.text(await tools.get_page_source(manager))


async def handle_get_page_text(manager: SessionManager, args: dict[str, Any]) -> ToolResult:
    return ToolResult.text(await tools.get_page_text(manager))


async def handle_get_page_title(manager: SessionManager, args: dict[str, Any]) -> ToolResult:
    return ToolResult.text(await tools.get_page_title(manager))


async def handle_get_page_url(manager: SessionManager, args: dict[str, Any]) -> ToolResult:
    return ToolResult.text(await tools.get_page_url(manager))


async def handle_get_scripts(manager: SessionManager, args: dict[str, Any]) -> ToolResult:
    scripts = await tools.get_scripts(manager)
    return ToolResult.text("\n".join(scripts), data=scripts)


async def handle_get_stylesheets(manager: SessionManager, args: dict[str, Any]) -> ToolResult:
    sheets = await tools.get_stylesheets(manager)
    return ToolResult.text("\n".join(sheets), data=sheets)


async def handle_get_meta_tags(manager: SessionManager, args: dict[str, Any]) -> ToolResult:
    return ToolResult.json(await tools.get_meta_tags(manager))


async def handle_get_links(manager: SessionManager, args: dict[str, Any]) -> ToolResult:
    return ToolResult.json(await tools.get_links(manager))


async def handle_get_images(manager: SessionManager, args: dict[str, Any]) -> ToolResult:
    return ToolResult.json(await tools.get_images(manager))


async def handle_get_forms(manager: SessionManager, args: dict[str, Any]) -> ToolResult:
    return ToolResult.json(await tools.get_forms(manager))


PAGE_HANDLERS: dict[str, tuple] = {
    "getPageSource": (handle_get_page_source, True),
    "getPageText": (handle_get_page_text, True),
    "getPageTitle": (handle_get_page_title, True),
    "getPageUrl": (handle_get_page_url, True),
    "getScripts": (handle_get_scripts, True),
    "getStylesheets": (handle_get_stylesheets, True),
    "getMetaTags": (handle_get_meta_tags, True),
    "getLinks": (handle_get_links, True),
    "getImages": (handle_get_images, True),
    "getForms": (handle_get_forms, True),
}
