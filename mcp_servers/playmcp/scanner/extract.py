"""
In-page extraction for the targeted scanner.

EXTRACT_PAGE_JS runs inside the page and returns plain JSON; PageData.from_raw
normalizes it so the rest of the scanner never touches raw driver output.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

EXTRACT_PAGE_JS = """
() => {
    const getText = (el) => {
        if (!el) return '';
        return (el.getAttribute('aria-label') || el.getAttribute('title') || el.textContent || '').trim();
    };
    const absolute = (href) => {
        try { return new URL(href, window.location.href).toString(); } catch (e) { return ''; }
    };

    const links = Array.from(document.querySelectorAll('a[href]')).map((link) => {
        const href = link.getAttribute('href') || '';
        let text = getText(link);
        if (!text) {
            const img = link.querySelector('img');
            if (img) text = img.getAttribute('alt') || img.getAttribute('title') || '';
        }
        if (!text) {
            const inner = link.querySelector('span, div, p');
            if (inner) text = getText(inner);
        }
        if (!text && href) {
            const parts = href.split('/').filter(Boolean);
            const last = parts[parts.length - 1];
            if (last && !last.includes('?')) text = last.replace(/[-_]/g, ' ').replace(/\\.\\w+$/, '');
        }
        return {
            text: text,
            href: absolute(href),
            title: link.getAttribute('title') || '',
            ariaLabel: link.getAttribute('aria-label') || '',
        };
    }).filter((link) => link.href && link.href.startsWith('http'));

    const navLinks = Array.from(document.querySelectorAll('nav a, header a, .navigation a, .menu a'))
        .map((link) => ({ text: getText(link), href: absolute(link.getAttribute('href') || '') }));

    const sections = Array.from(document.querySelectorAll(
        '[class*="resource"], [class*="help"], [class*="support"], ' +
        '[class*="documentation"], [class*="tutorial"], [class*="guide"]'
    ));
    const resourceLinks = sections.flatMap((section) =>
        Array.from(section.querySelectorAll('a')).map((link) => ({
            text: getText(link),
            href: absolute(link.getAttribute('href') || ''),
            context: getText(section.querySelector('h1, h2, h3, h4, h5, h6')),
        }))
    );

    const meta = (sel) => {
        const el = document.querySelector(sel);
        return el ? el.getAttribute('content') || '' : '';
    };

    return {
        title: document.title,
        description: meta('meta[name="description"]'),
        ogImage: meta('meta[property="og:image"]'),
        headings: Array.from(document.querySelectorAll('h1, h2, h3')).map(getText).filter(Boolean).slice(0, 20),
        links: links.slice(0, 50),
        navLinks: navLinks,
        resourceLinks: resourceLinks,
        paragraphs: Array.from(document.querySelectorAll('p')).map(getText).filter((t) => t.length > 50).slice(0, 10),
        lists: Array.from(document.querySelectorAll('ul li, ol li')).map(getText).filter(Boolean).slice(0, 20),
    };
}
"""

BODY_TEXT_JS = "() => (document.body ? (document.body.innerText || '').slice(0, 5000) : '')"


def _strings(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(v) for v in value if isinstance(v, str) and v]


def _links(value: Any) -> list[dict[str, str]]:
    if not isinstance(value, list):
        return []
    out = []
    for item in value:
        if not isinstance(item, dict) or not item.get("href"):
            continue
        out.append({k: str(v) for k, v in item.items() if isinstance(v, str)})
    return out


@dataclass
class PageData:
    title: str = ""
    description: str = ""
    og_image: str = ""
    headings: list[str] = field(default_factory=list)
    links: list[dict[str, str]] = field(default_factory=list)
    nav_links: list[dict[str, str]] = field(default_factory=list)
    resource_links: list[dict[str, str]] = field(default_factory=list)
    paragraphs: list[str] = field(default_factory=list)
    lists: list[str] = field(default_factory=list)

    @classmethod
    def from_raw(cls, raw: Any) -> PageData:
        if not isinstance(raw, dict):
            return cls()
        return cls(
            title=str(raw.get("title") or "").strip(),
            description=str(raw.get("description") or "").strip(),
            og_image=str(raw.get("ogImage") or "").strip(),
            headings=_strings(raw.get("headings")),
            links=_links(raw.get("links")),
            nav_links=_links(raw.get("navLinks")),
            resource_links=_links(raw.get("resourceLinks")),
            paragraphs=_strings(raw.get("paragraphs")),
            lists=_strings(raw.get("lists")),
        )

    def all_links(self, body_limit: int | None = None) -> list[dict[str, str]]:
        """Body links (at most ``body_limit``), then navigation links, then links inside resource sections."""
        return [*self.links[:body_limit], *self.nav_links, *self.resource_links]
