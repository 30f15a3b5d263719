"""
Scroll operations for browser automation.

The page decides how far it actually moves (scrolling clamps at document
bounds), so the result reports positions before and after instead of echoing
the requested delta.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..base import page_operation

if TYPE_CHECKING:
    from ...session import SessionManager

SCROLL_POSITION_JS = "() => ({ x: window.scrollX, y: window.scrollY })"

SCROLL_BY_JS = """
(args) => {
    window.scrollBy({ left: args.x, top: args.y, behavior: args.smooth ? 'smooth' : 'auto' });
}
"""

# Settle time after scrollBy before sampling the new position.
INSTANT_SETTLE_MS = 100
SMOOTH_SETTLE_MS = 500


async def scroll(manager: SessionManager, x: float, y: float, smooth: bool = False) -> dict[str, Any]:
    """Scroll the window by (x, y) pixels.

    Args:
        manager: Session manager
        x: Horizontal delta (positive = right)
        y: Vertical delta (positive = down)
        smooth: Use smooth scrolling animation

    Returns:
        Dict with before/after positions and the distance actually scrolled
    """
    async with page_operation(manager, "scroll", "Failed to scroll", "Check if scroll values are valid") as page:
        before = await page.evaluate(SCROLL_POSITION_JS)
        await page.evaluate(SCROLL_BY_JS, {"x": x, "y": y, "smooth": bool(smooth)})
        await page.wait_for_timeout(SMOOTH_SETTLE_MS if smooth else INSTANT_SETTLE_MS)
        after = await page.evaluate(SCROLL_POSITION_JS)
        return {
            "before": before,
            "after": after,
            "scrolled": {"x": after["x"] - before["x"], "y": after["y"] - before["y"]},
        }
