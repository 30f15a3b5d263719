"""
JavaScript execution in the page context.

execute_javascript treats the script as a function body, so its value is
whatever the body returns (None without a ``return``). evaluate_with_return
hands the expression straight to the driver.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .base import page_operation

if TYPE_CHECKING:
    from ..session import SessionManager

# Wrap as a function body first; eval directly only when wrapping is a syntax error.
EXECUTE_JS = """
(source) => {
    let wrapped;
    try {
        wrapped = new Function(source);
    } catch (err) {
        if (err instanceof SyntaxError) {
            return (0, eval)(source);
        }
        throw err;
    }
    return wrapped();
}
"""


async def execute_javascript(manager: SessionManager, script: str) -> Any:
    """Run script in the page; returns its JSON-serializable value or None."""
    async with page_operation(
        manager, "executeJavaScript", "Failed to execute JavaScript", "Check if the JavaScript syntax is valid"
    ) as page:
        return await page.evaluate(EXECUTE_JS, script)


async def evaluate_with_return(manager: SessionManager, script: str) -> Any:
    async with page_operation(
        manager, "evaluateWithReturn", "Failed to evaluate JavaScript", "Check if the script is valid JavaScript"
    ) as page:
        return await page.evaluate(script)
