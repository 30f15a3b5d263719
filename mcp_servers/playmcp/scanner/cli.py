"""
Command line entry point for the targeted scanner.

    playmcp-scan --name Kahoot --url main=https://kahoot.com --url faq=https://support.kahoot.com
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
from dataclasses import replace
from pathlib import Path

from ..config import ScannerConfig
from .insights import InsightGenerator
from .scanner import TargetedScanner

logger = logging.getLogger("mcp.playmcp.scanner")


def _parse_url(raw: str) -> tuple[str, str]:
    source, sep, url = raw.partition("=")
    if not sep or not source.strip() or not url.strip():
        raise argparse.ArgumentTypeError(f"expected SOURCE=URL, got {raw!r}")
    return source.strip(), url.strip()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="playmcp-scan", description="Scan a product's resource pages")
    parser.add_argument("--name", required=True, help="Product name used in titles and prompts")
    parser.add_argument(
        "--url",
        action="append",
        type=_parse_url,
        required=True,
        metavar="SOURCE=URL",
        help="Page to scan, e.g. main=https://example.com (repeatable)",
    )
    parser.add_argument("--no-ai", action="store_true", help="Skip the chat-completion calls")
    parser.add_argument("--output", type=Path, help="Write JSON here instead of stdout")
    return parser


async def run_scan(name: str, urls: dict[str, str], config: ScannerConfig) -> dict:
    scanner = TargetedScanner(config, InsightGenerator(config))
    try:
        result = await scanner.scan(urls, name)
    finally:
        await scanner.close()
    return result.to_dict()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, os.environ.get("PLAYMCP_LOG_LEVEL", "INFO").strip().upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    config = ScannerConfig.from_env()
    if args.no_ai:
        config = replace(config, openai_api_key=None)

    payload = asyncio.run(run_scan(args.name, dict(args.url), config))
    text = json.dumps(payload, ensure_ascii=False, indent=2)
    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(text + "\n", encoding="utf-8")
        logger.info("wrote %s", args.output)
    else:
        sys.stdout.write(text + "\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
