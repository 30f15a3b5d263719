"""
Page inspection tools.

Pure reads of the active page: source, text, title, URL and the common
element collections. Collections come back empty, never as an error, when the
page has no matching elements.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .base import page_operation

if TYPE_CHECKING:
    from ..session import SessionManager

LOADED_HINT = "Check if the page is loaded"

SCRIPTS_JS = """
() => Array.from(document.querySelectorAll('script'))
    .map((script) => script.src
        ? `// External script: ${script.src}`
        : (script.textContent || script.innerHTML || ''))
    .filter((content) => content.trim().length > 0)
"""

STYLESHEETS_JS = """
() => Array.from(document.querySelectorAll('style, link[rel="stylesheet"]'))
    .map((el) => el.tagName === 'LINK'
        ? `/* External stylesheet: ${el.href} */`
        : (el.textContent || el.innerHTML || ''))
    .filter((content) => content.trim().length > 0)
"""

META_TAGS_JS = """
() => Array.from(document.querySelectorAll('meta')).map((meta) => ({
    name: meta.getAttribute('name'),
    property: meta.getAttribute('property'),
    content: meta.getAttribute('content'),
    httpEquiv: meta.getAttribute('http-equiv'),
}))
"""

LINKS_JS = """
() => Array.from(document.querySelectorAll('a[href]')).map((link) => ({
    href: link.href,
    text: (link.textContent || '').trim(),
    title: link.getAttribute('title'),
}))
"""

IMAGES_JS = """
() => Array.from(document.querySelectorAll('img')).map((img) => ({
    src: img.src,
    alt: img.getAttribute('alt'),
    title: img.getAttribute('title'),
    width: img.naturalWidth || null,
    height: img.naturalHeight || null,
}))
"""

FORMS_JS = """
() => Array.from(document.querySelectorAll('form')).map((form) => ({
    action: form.getAttribute('action'),
    method: form.getAttribute('method'),
    fields: Array.from(form.querySelectorAll('input, select, textarea')).map((field) => ({
        name: field.getAttribute('name'),
        type: field.getAttribute('type') || field.tagName.toLowerCase(),
        value: field.value || null,
    })),
}))
"""


def _drop_nulls(items: list[dict[str, Any]] | None) -> list[dict[str, Any]]:
    return [{k: v for k, v in item.items() if v is not None} for item in items or []]


async def get_page_source(manager: SessionManager) -> str:
    async with page_operation(manager, "getPageSource", "Failed to get page source", LOADED_HINT) as page:
        return await page.content() or ""


async def get_page_text(manager: SessionManager) -> str:
    async with page_operation(manager, "getPageText", "Failed to get page text", LOADED_HINT) as page:
        return await page.inner_text("body") or ""


async def get_page_title(manager: SessionManager) -> str:
    async with page_operation(manager, "getPageTitle", "Failed to get page title", LOADED_HINT) as page:
        return await page.title() or ""


async def get_page_url(manager: SessionManager) -> str:
    async with page_operation(manager, "getPageUrl", "Failed to get page URL", LOADED_HINT) as page:
        return page.url or ""


async def get_scripts(manager: SessionManager) -> list[str]:
    """Inline script bodies, or ``// External script: <src>`` markers."""
    async with page_operation(manager, "getScripts", "Failed to get scripts", LOADED_HINT) as page:
        return list(await page.evaluate(SCRIPTS_JS) or [])


async def get_stylesheets(manager: SessionManager) -> list[str]:
    """Inline <style> bodies, or ``/* External stylesheet: <href> */`` markers."""
    async with page_operation(manager, "getStylesheets", "Failed to get stylesheets", LOADED_HINT) as page:
        return list(await page.evaluate(STYLESHEETS_JS) or [])


async def get_meta_tags(manager: SessionManager) -> list[dict[str, Any]]:
    async with page_operation(manager, "getMetaTags", "Failed to get meta tags", LOADED_HINT) as page:
        return _drop_nulls(await page.evaluate(META_TAGS_JS))


async def get_links(manager: SessionManager) -> list[dict[str, Any]]:
    async with page_operation(manager, "getLinks", "Failed to get links", LOADED_HINT) as page:
        return _drop_nulls(await page.evaluate(LINKS_JS))


async def get_images(manager: SessionManager) -> list[dict[str, Any]]:
    async with page_operation(manager, "getImages", "Failed to get images", LOADED_HINT) as page:
        return _drop_nulls(await page.evaluate(IMAGES_JS))


async def get_forms(manager: SessionManager) -> list[dict[str, Any]]:
    async with page_operation(manager, "getForms", "Failed to get forms", LOADED_HINT) as page:
        forms = await page.evaluate(FORMS_JS) or []
        result = []
        for form in forms:
            cleaned = {k: v for k, v in form.items() if v is not None and k != "fields"}
            cleaned["fields"] = _drop_nulls(form.get("fields"))
            result.append(cleaned)
        return result
