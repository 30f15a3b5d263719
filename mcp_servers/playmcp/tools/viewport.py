"""
Viewport, native dialogs and file inputs.

Provides:
- resize: set the page viewport size
- handle_dialog: one-shot accept/dismiss for the next alert/confirm/prompt
- upload_files: attach local files to a file input
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ..errors import BrowserToolError
from .base import page_operation

if TYPE_CHECKING:
    from ..session import SessionManager

logger = logging.getLogger("mcp.playmcp.tools")


async def resize(manager: SessionManager, width: int, height: int) -> dict[str, int]:
    failure, hint = "Failed to resize viewport", "Check if width and height are positive numbers"
    if int(width) <= 0 or int(height) <= 0:
        raise BrowserToolError(message=failure, suggestion=hint, tool="resize", reason=f"Invalid size {width}x{height}")
    async with page_operation(manager, "resize", failure, hint) as page:
        await page.set_viewport_size({"width": int(width), "height": int(height)})
        return {"width": int(width), "height": int(height)}


async def handle_dialog(manager: SessionManager, accept: bool, prompt_text: str | None = None) -> dict[str, Any]:
    """Install a handler for the next native dialog only.

    Later dialogs fall back to the driver default (dismiss) unless this is
    called again.
    """
    async with page_operation(
        manager, "handleDialog", "Failed to handle dialog", "Check if there is a dialog to handle"
    ) as page:

        async def _on_dialog(dialog: Any) -> None:
            logger.debug("dialog type=%s message=%s accept=%s", dialog.type, dialog.message, accept)
            if accept:
                if prompt_text is not None:
                    await dialog.accept(prompt_text=prompt_text)
                else:
                    await dialog.accept()
            else:
                await dialog.dismiss()

        page.once("dialog", _on_dialog)
        return {"accept": bool(accept), "promptText": prompt_text}


async def upload_files(manager: SessionManager, selector: str, file_paths: list[str]) -> dict[str, Any]:
    """Attach files to the input matching selector; every path must exist locally."""
    failure, hint = "Failed to upload files", "Check if selector is a file input and files exist"
    manager.require_page("uploadFiles")
    resolved = [Path(p).expanduser() for p in file_paths]
    missing = [str(p) for p in resolved if not p.is_file()]
    if missing:
        raise BrowserToolError(
            message=failure,
            suggestion=hint,
            tool="uploadFiles",
            reason=f"File not found: {', '.join(missing)}",
            details={"missing": missing},
        )
    async with page_operation(manager, "uploadFiles", failure, hint) as page:
        await page.locator(selector).first.set_input_files([str(p) for p in resolved])
        return {"selector": selector, "files": [str(p) for p in resolved]}
