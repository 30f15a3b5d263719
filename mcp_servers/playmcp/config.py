from __future__ import annotations

import os
from dataclasses import dataclass, field

SUPPORTED_ENGINES = ("chromium", "firefox", "webkit")
WAIT_UNTIL_STATES = ("load", "domcontentloaded", "networkidle", "commit")

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = (os.environ.get(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def parse_viewport(raw: str | None, default: tuple[int, int] = (1280, 720)) -> tuple[int, int]:
    """Parse ``WIDTHxHEIGHT`` (or ``WIDTH,HEIGHT``); falls back to ``default``."""
    text = (raw or "").strip().lower().replace(",", "x")
    if not text:
        return default
    parts = text.split("x")
    if len(parts) != 2:
        return default
    try:
        width, height = int(parts[0]), int(parts[1])
    except ValueError:
        return default
    if width <= 0 or height <= 0:
        return default
    return width, height


@dataclass
class BrowserConfig:
    engine: str = "chromium"
    headless: bool = False
    executable_path: str | None = None
    launch_args: list[str] = field(default_factory=lambda: ["--no-sandbox"])
    viewport_width: int = 1280
    viewport_height: int = 720
    action_timeout_ms: int = 30_000
    navigation_timeout_ms: int = 30_000
    wait_until: str = "load"
    allow_hosts: list[str] = field(default_factory=list)
    strict_handshake: bool = False

    @staticmethod
    def normalize_engine(raw: str | None) -> str:
        engine = (raw or "").strip().lower()
        if engine in {"chrome", "chromium", ""}:
            return "chromium"
        if engine in {"firefox", "ff"}:
            return "firefox"
        if engine in {"webkit", "safari"}:
            return "webkit"
        return "chromium"

    @classmethod
    def from_env(cls) -> BrowserConfig:
        engine = cls.normalize_engine(os.environ.get("PLAYMCP_BROWSER"))
        flags_raw = os.environ.get("PLAYMCP_BROWSER_FLAGS")
        if flags_raw is None:
            launch_args = ["--no-sandbox"] if engine == "chromium" else []
        else:
            launch_args = [flag.strip() for flag in flags_raw.split(",") if flag.strip()]
        width, height = parse_viewport(os.environ.get("PLAYMCP_VIEWPORT"))
        wait_until = (os.environ.get("PLAYMCP_WAIT_UNTIL") or "load").strip().lower()
        if wait_until not in WAIT_UNTIL_STATES:
            wait_until = "load"
        allow_raw = os.environ.get("PLAYMCP_ALLOW_HOSTS", "")
        allow_hosts = [host.strip().lower() for host in allow_raw.split(",") if host.strip() and host.strip() != "*"]
        executable = os.environ.get("PLAYMCP_BROWSER_BINARY") or os.environ.get("CHROME_BIN") or None
        return cls(
            engine=engine,
            headless=_env_flag("PLAYMCP_HEADLESS"),
            executable_path=executable,
            launch_args=launch_args,
            viewport_width=width,
            viewport_height=height,
            action_timeout_ms=_env_int("PLAYMCP_ACTION_TIMEOUT_MS", 30_000),
            navigation_timeout_ms=_env_int("PLAYMCP_NAVIGATION_TIMEOUT_MS", 30_000),
            wait_until=wait_until,
            allow_hosts=allow_hosts,
            strict_handshake=_env_flag("PLAYMCP_STRICT_HANDSHAKE"),
        )

    def is_host_allowed(self, host: str) -> bool:
        host = (host or "").strip().lower().rstrip(".")
        if not self.allow_hosts:
            return True
        for raw_allowed in self.allow_hosts:
            allowed = (raw_allowed or "").strip().lower().lstrip(".").rstrip(".")
            if not allowed:
                continue
            if host == allowed or host.endswith("." + allowed):
                return True
        return False


@dataclass
class ScannerConfig:
    openai_api_key: str | None = None
    openai_base_url: str = "https://api.openai.com/v1"
    model: str = "gpt-4o-mini"
    user_agent: str = DEFAULT_USER_AGENT
    viewport_width: int = 1920
    viewport_height: int = 1080
    executable_path: str | None = None
    navigation_timeout_ms: int = 30_000
    settle_ms: int = 2_000
    max_attempts: int = 3
    protection_wait_ms: int = 5_000
    backoff: float = 1.5
    max_links: int = 50
    enhance_top: int = 3
    llm_timeout: float = 60.0

    @property
    def ai_enabled(self) -> bool:
        return bool(self.openai_api_key)

    @classmethod
    def from_env(cls) -> ScannerConfig:
        width, height = parse_viewport(os.environ.get("SCANNER_VIEWPORT"), default=(1920, 1080))
        return cls(
            openai_api_key=os.environ.get("OPENAI_API_KEY") or None,
            openai_base_url=(os.environ.get("OPENAI_BASE_URL") or "https://api.openai.com/v1").rstrip("/"),
            model=os.environ.get("SCANNER_MODEL") or "gpt-4o-mini",
            user_agent=os.environ.get("SCANNER_USER_AGENT") or DEFAULT_USER_AGENT,
            viewport_width=width,
            viewport_height=height,
            executable_path=os.environ.get("CHROME_BIN") or None,
            navigation_timeout_ms=_env_int("SCANNER_NAVIGATION_TIMEOUT_MS", 30_000),
            settle_ms=_env_int("SCANNER_SETTLE_MS", 2_000),
            max_attempts=max(1, _env_int("SCANNER_MAX_ATTEMPTS", 3)),
            protection_wait_ms=_env_int("SCANNER_PROTECTION_WAIT_MS", 5_000),
            max_links=max(1, _env_int("SCANNER_MAX_LINKS", 50)),
            enhance_top=max(0, _env_int("SCANNER_ENHANCE_TOP", 3)),
        )
