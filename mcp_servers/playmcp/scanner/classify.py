"""
Pure keyword heuristics for the targeted scanner.

Provides:
- determine_category: topical bucket for a discovered link
- resource_type: coarse content type (video, guide, tutorial, documentation, other)
- derive_title / resolve_title / clean_title: human-readable link titles
- is_skippable: legal/cookie boilerplate links
- is_protection_page: bot-protection interstitials (Cloudflare and friends)

No I/O here; everything is deterministic string matching.
"""

from __future__ import annotations

import re
from typing import Any
from urllib.parse import urlsplit

CATEGORIES = ("documentation", "tutorials", "videos", "integrations", "faqs", "training")

# Source-name to bucket. Sources are the keys of the scanned URL mapping.
_SOURCE_CATEGORIES = {
    "tutorials": "tutorials",
    "videos": "videos",
    "training": "training",
    "faq": "faqs",
    "integrations": "integrations",
}

# (bucket, title keywords, url keywords); first match wins.
_KEYWORD_RULES: tuple[tuple[str, tuple[str, ...], tuple[str, ...]], ...] = (
    ("tutorials", ("tutorial", "getting started", "how to"), ()),
    ("videos", ("video",), ("youtube", "vimeo", "watch")),
    ("training", ("training", "course", "webinar", "workshop"), ()),
    ("faqs", ("faq", "question", "troubleshoot", "problem"), ()),
    ("integrations", ("integration", "connect", "sync"), ()),
)

_URL_RULES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("documentation", ("/doc", "/help", "/support")),
    ("tutorials", ("/tutorial", "/guide", "/quickstart")),
    ("faqs", ("/faq", "/kb", "/knowledge")),
)

SKIP_PATTERNS = ("cookie", "privacy", "terms", "legal", "copyright", "trademark")

_PROTECTION_TITLES = ("just a moment", "cloudflare", "please wait")
_PROTECTION_BODY = ("checking your browser", "ddos protection")

MAX_TITLE_LENGTH = 200
MIN_TITLE_LENGTH = 3

_WORD_START = re.compile(r"\b\w")
_EXTENSION = re.compile(r"\.\w+$")
_WHITESPACE = re.compile(r"\s+")


def determine_category(title: str, url: str, source: str = "") -> str:
    """Bucket a resource: source type, then title keywords, then URL path patterns.

    Falls back to "documentation".
    """
    lower_title = (title or "").lower()
    lower_url = (url or "").lower()

    if source in _SOURCE_CATEGORIES:
        return _SOURCE_CATEGORIES[source]

    for bucket, title_words, url_words in _KEYWORD_RULES:
        if any(w in lower_title for w in title_words) or any(w in lower_url for w in url_words):
            return bucket

    for bucket, patterns in _URL_RULES:
        if any(p in lower_url for p in patterns):
            return bucket

    return "documentation"


def resource_type(title: str, url: str) -> str:
    lower_title = (title or "").lower()
    lower_url = (url or "").lower()

    if any(w in lower_url for w in ("youtube", "vimeo", "watch")) or "video" in lower_title:
        return "video"
    if ".pdf" in lower_url or "pdf" in lower_title or "download" in lower_title:
        return "guide"
    if any(w in lower_title for w in ("tutorial", "getting started", "how to", "quickstart")):
        return "tutorial"
    if (
        any(w in lower_title for w in ("api", "documentation", "docs", "reference"))
        or "/api" in lower_url
    ):
        return "documentation"
    return "other"


def _titleize(segment: str, strip_extension: bool = True) -> str:
    text = segment.replace("-", " ").replace("_", " ")
    if strip_extension:
        text = _EXTENSION.sub("", text)
    return _WORD_START.sub(lambda m: m.group(0).upper(), text)


def derive_title(href: str, context: str = "", tool_name: str = "") -> str:
    """Build a title from the URL path when the link itself has no usable text.

    ``/docs/getting-started.html`` becomes ``Docs - Getting Started``; a link
    inside a titled section uses that section heading as the prefix instead.
    """
    try:
        parts = urlsplit(href)
        host = parts.hostname or ""
    except ValueError:
        return f"{tool_name} Resource".strip()

    segments = [s for s in parts.path.split("/") if s]
    title = ""
    if segments:
        title = _titleize(segments[-1])
        if context:
            title = f"{context} - {title}"
        elif len(segments) > 1:
            title = f"{_titleize(segments[-2], strip_extension=False)} - {title}"

    if len(title) < 5:
        title = f"{host.replace('www.', '')} - {' / '.join(segments)}"
    return title


def clean_title(title: str) -> str:
    return _WHITESPACE.sub(" ", title or "").strip()[:MAX_TITLE_LENGTH]


def resolve_title(link: dict[str, Any], tool_name: str = "") -> str:
    """Pick the link's own text, aria-label or title attribute, else derive one from its URL."""
    title = link.get("text") or link.get("ariaLabel") or link.get("title") or ""
    if len(title) < MIN_TITLE_LENGTH:
        title = derive_title(link.get("href") or "", link.get("context") or "", tool_name)
    return clean_title(title)


def is_skippable(title: str) -> bool:
    lower = (title or "").lower()
    return any(p in lower for p in SKIP_PATTERNS)


def is_protection_page(title: str, body_text: str = "") -> bool:
    lower_title = (title or "").lower()
    lower_body = (body_text or "").lower()
    return any(p in lower_title for p in _PROTECTION_TITLES) or any(p in lower_body for p in _PROTECTION_BODY)
