"""
Element-level inspection and page capture.

Provides:
- get_element_content: innerHTML + textContent of the first match
- inspect_element: tag, id, class, attribute list and text of the first match
- get_element_hierarchy: depth-limited tree of tag/id/class (+ text, attributes)
- screenshot / take_screenshot: PNG capture to disk, size read back with Pillow
"""

from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ..errors import BrowserToolError
from .base import ensure_selector, page_operation

if TYPE_CHECKING:
    from ..session import SessionManager

logger = logging.getLogger("mcp.playmcp.tools")

ELEMENT_CONTENT_JS = """
(sel) => {
    const element = document.querySelector(sel);
    if (!element) return null;
    return { html: element.innerHTML, text: element.textContent || '' };
}
"""

INSPECT_ELEMENT_JS = """
(sel) => {
    const el = document.querySelector(sel);
    if (!el) return null;
    return {
        tagName: el.tagName,
        className: typeof el.className === 'string' ? el.className : '',
        id: el.id,
        attributes: Array.from(el.attributes).map((attr) => ({ name: attr.name, value: attr.value })),
        innerText: el.textContent,
    };
}
"""

ELEMENT_HIERARCHY_JS = """
(args) => {
    const { selector, maxDepth, includeText, includeAttributes } = args;

    function describe(element) {
        const info = { tagName: element.tagName.toLowerCase(), children: [] };
        if (element.id) info.id = element.id;
        if (typeof element.className === 'string' && element.className) info.className = element.className;
        if (includeText) {
            const direct = Array.from(element.childNodes)
                .filter((node) => node.nodeType === Node.TEXT_NODE)
                .map((node) => (node.textContent || '').trim())
                .filter((text) => text)
                .join(' ');
            if (direct) info.text = direct;
        }
        if (includeAttributes && element.attributes.length > 0) {
            info.attributes = {};
            for (const attr of Array.from(element.attributes)) {
                if (attr.name !== 'id' && attr.name !== 'class') info.attributes[attr.name] = attr.value;
            }
        }
        return info;
    }

    function walk(element, depth) {
        const info = describe(element);
        if (maxDepth === -1 || depth < maxDepth) {
            info.children = Array.from(element.children).map((child) => walk(child, depth + 1));
        } else if (element.children.length > 0) {
            info.childrenCount = element.children.length;
        }
        return info;
    }

    const root = document.querySelector(selector);
    return root ? walk(root, 0) : null;
}
"""

SCREENSHOT_SCOPES = ("element", "viewport", "page")


def _not_found(tool: str, failure: str, suggestion: str, selector: str) -> BrowserToolError:
    return BrowserToolError(message=failure, suggestion=suggestion, tool=tool, reason=f"Element not found: {selector}")


async def get_element_content(manager: SessionManager, selector: str) -> dict[str, str]:
    failure, hint = "Failed to get element content", "Check if the element exists"
    async with page_operation(manager, "getElementContent", failure, hint) as page:
        content = await page.evaluate(ELEMENT_CONTENT_JS, selector)
        if content is None:
            raise _not_found("getElementContent", failure, hint, selector)
        return {"html": content.get("html") or "", "text": content.get("text") or ""}


async def inspect_element(manager: SessionManager, selector: str) -> dict[str, Any]:
    """Describe the first element matching selector.

    Returns:
        Dict with tagName, className, id, attributes [{name, value}] and innerText
    """
    failure, hint = "Failed to inspect element", "Check if the element exists"
    async with page_operation(manager, "inspectElement", failure, hint) as page:
        info = await page.evaluate(INSPECT_ELEMENT_JS, selector)
        if info is None:
            raise _not_found("inspectElement", failure, hint, selector)
        return info


async def get_element_hierarchy(
    manager: SessionManager,
    selector: str = "body",
    max_depth: int = 3,
    include_text: bool = False,
    include_attributes: bool = False,
) -> dict[str, Any]:
    """Build the element tree rooted at selector.

    Args:
        manager: Session manager
        selector: Root element selector
        max_depth: Depth limit (-1 = unlimited); nodes at the limit report childrenCount
        include_text: Add direct (non-descendant) text of each node
        include_attributes: Add attributes other than id/class

    Returns:
        Nested dict of {tagName, id?, className?, text?, attributes?, children, childrenCount?}
    """
    failure, hint = "Failed to get element hierarchy", "Check if the selector exists"
    async with page_operation(manager, "getElementHierarchy", failure, hint) as page:
        tree = await page.evaluate(
            ELEMENT_HIERARCHY_JS,
            {
                "selector": selector,
                "maxDepth": int(max_depth),
                "includeText": bool(include_text),
                "includeAttributes": bool(include_attributes),
            },
        )
        if tree is None:
            raise _not_found("getElementHierarchy", failure, hint, selector)
        return tree


def _saved_image(path: Path, data: bytes | None, scope: str) -> dict[str, Any]:
    from PIL import Image

    raw = data if data else path.read_bytes()
    with Image.open(BytesIO(raw)) as img:
        width, height = img.size
    logger.debug("screenshot saved path=%s size=%sx%s", path, width, height)
    return {"path": str(path), "scope": scope, "width": width, "height": height}


async def screenshot(
    manager: SessionManager,
    path: str,
    scope: str | None = None,
    selector: str | None = None,
) -> dict[str, Any]:
    """Capture an element, the viewport, or the full page (default) to path."""
    failure = "Failed to take screenshot"
    hint = "Check if the path is writable and element exists (if capturing element)"
    scope = scope or "page"
    if scope not in SCREENSHOT_SCOPES:
        raise BrowserToolError(
            message=failure,
            suggestion=f"Use one of: {', '.join(SCREENSHOT_SCOPES)}",
            tool="screenshot",
            reason=f"Unknown screenshot type: {scope}",
        )
    async with page_operation(manager, "screenshot", failure, hint) as page:
        target = Path(path).expanduser()
        target.parent.mkdir(parents=True, exist_ok=True)
        if scope == "element" and selector:
            handle = await ensure_selector(page, selector, "screenshot", failure, hint)
            data = await handle.screenshot(path=str(target))
        elif scope == "viewport":
            data = await page.screenshot(path=str(target))
        else:
            scope = "page"
            data = await page.screenshot(path=str(target), full_page=True)
        return _saved_image(target, data, scope)


async def take_screenshot(
    manager: SessionManager,
    path: str,
    full_page: bool = False,
    element: str | None = None,
) -> dict[str, Any]:
    """Capture to path; element selector wins over full_page."""
    async with page_operation(
        manager, "takeScreenshot", "Failed to take screenshot", "Check if the path is writable"
    ) as page:
        target = Path(path).expanduser()
        target.parent.mkdir(parents=True, exist_ok=True)
        if element:
            data = await page.locator(element).first.screenshot(path=str(target))
            scope = "element"
        else:
            data = await page.screenshot(path=str(target), full_page=bool(full_page))
            scope = "page" if full_page else "viewport"
        return _saved_image(target, data, scope)
