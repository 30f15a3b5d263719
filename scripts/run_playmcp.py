#!/usr/bin/env python3
import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

print(
    f"[playmcp] engine={os.environ.get('PLAYMCP_BROWSER', 'chromium')} | "
    f"headless={os.environ.get('PLAYMCP_HEADLESS', '0')} | "
    f"binary={os.environ.get('PLAYMCP_BROWSER_BINARY') or os.environ.get('CHROME_BIN') or 'bundled'} | "
    f"allowlist={os.environ.get('PLAYMCP_ALLOW_HOSTS') or '*'} | "
    f"strict_handshake={os.environ.get('PLAYMCP_STRICT_HANDSHAKE', '0')}",
    file=sys.stderr,
)

from mcp_servers.playmcp.main import main  # noqa: E402

if __name__ == "__main__":
    main()
