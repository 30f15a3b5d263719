"""
MCP tool definitions.

Each tool definition contains:
- name: Tool identifier (camelCase, as advertised to clients)
- description: AI-friendly description
- inputSchema: JSON Schema for tool arguments

Order matters: tools/list returns these verbatim in this order.
"""

from __future__ import annotations

from typing import Any


def _schema(properties: dict[str, Any] | None = None, required: list[str] | None = None) -> dict[str, Any]:
    return {
        "type": "object",
        "properties": properties or {},
        "required": required or [],
    }


_STRING = {"type": "string"}
_NUMBER = {"type": "number"}

# ═══════════════════════════════════════════════════════════════════════════════
# LIFECYCLE + NAVIGATION
# ═══════════════════════════════════════════════════════════════════════════════

LIFECYCLE_TOOL_DEFINITIONS: list[dict[str, Any]] = [
    {
        "name": "openBrowser",
        "description": "Launch a new browser instance. Calling it again while the browser is open is a no-op.",
        "inputSchema": _schema(
            {
                "headless": {"type": "boolean", "description": "Run without a visible window"},
                "debug": {"type": "boolean", "description": "Enable verbose server logging"},
            }
        ),
    },
    {
        "name": "navigate",
        "description": "Navigate to a URL",
        "inputSchema": _schema({"url": _STRING}, ["url"]),
    },
    {
        "name": "goBack",
        "description": "Navigate back to the previous page in history",
        "inputSchema": _schema(),
    },
    {
        "name": "goForward",
        "description": "Navigate forward to the next page in history",
        "inputSchema": _schema(),
    },
    {
        "name": "refresh",
        "description": "Reload the current page",
        "inputSchema": _schema(),
    },
]

# ═══════════════════════════════════════════════════════════════════════════════
# INPUT
# ═══════════════════════════════════════════════════════════════════════════════

INPUT_TOOL_DEFINITIONS: list[dict[str, Any]] = [
    {
        "name": "type",
        "description": "Type text into an element",
        "inputSchema": _schema({"selector": _STRING, "text": _STRING}, ["selector", "text"]),
    },
    {
        "name": "click",
        "description": "Click an element. Without a selector, clicks at the last mouse position.",
        "inputSchema": _schema({"selector": _STRING}),
    },
    {
        "name": "moveMouse",
        "description": "Move mouse to coordinates",
        "inputSchema": _schema({"x": _NUMBER, "y": _NUMBER}, ["x", "y"]),
    },
    {
        "name": "scroll",
        "description": "Scroll the page by specified amounts; reports positions before and after",
        "inputSchema": _schema(
            {
                "x": {
                    "type": "number",
                    "description": "Horizontal scroll amount in pixels (positive = right, negative = left)",
                },
                "y": {
                    "type": "number",
                    "description": "Vertical scroll amount in pixels (positive = down, negative = up)",
                },
                "smooth": {
                    "type": "boolean",
                    "description": "Whether to use smooth scrolling animation (default: false)",
                },
            },
            ["x", "y"],
        ),
    },
]

# ═══════════════════════════════════════════════════════════════════════════════
# CAPTURE + PAGE INSPECTION
# ═══════════════════════════════════════════════════════════════════════════════

PAGE_TOOL_DEFINITIONS: list[dict[str, Any]] = [
    {
        "name": "screenshot",
        "description": "Take a screenshot of the full page (default), the viewport, or one element",
        "inputSchema": _schema(
            {
                "path": _STRING,
                "type": {"type": "string", "enum": ["viewport", "element", "page"]},
                "selector": _STRING,
            },
            ["path"],
        ),
    },
    {
        "name": "getPageSource",
        "description": "Get the HTML source code of the current page",
        "inputSchema": _schema(),
    },
    {
        "name": "getPageText",
        "description": "Get the text content of the current page",
        "inputSchema": _schema(),
    },
    {
        "name": "getPageTitle",
        "description": "Get the title of the current page",
        "inputSchema": _schema(),
    },
    {
        "name": "getPageUrl",
        "description": "Get the URL of the current page",
        "inputSchema": _schema(),
    },
    {
        "name": "getScripts",
        "description": "Get all JavaScript code from the current page",
        "inputSchema": _schema(),
    },
    {
        "name": "getStylesheets",
        "description": "Get all CSS stylesheets from the current page",
        "inputSchema": _schema(),
    },
    {
        "name": "getMetaTags",
        "description": "Get all meta tags from the current page",
        "inputSchema": _schema(),
    },
    {
        "name": "getLinks",
        "description": "Get all links from the current page",
        "inputSchema": _schema(),
    },
    {
        "name": "getImages",
        "description": "Get all images from the current page",
        "inputSchema": _schema(),
    },
    {
        "name": "getForms",
        "description": "Get all forms from the current page",
        "inputSchema": _schema(),
    },
]

# ═══════════════════════════════════════════════════════════════════════════════
# DOM + SCRIPTING
# ═══════════════════════════════════════════════════════════════════════════════

DOM_TOOL_DEFINITIONS: list[dict[str, Any]] = [
    {
        "name": "getElementContent",
        "description": "Get the HTML and text content of a specific element",
        "inputSchema": _schema({"selector": _STRING}, ["selector"]),
    },
    {
        "name": "inspectElement",
        "description": "Get tag name, id, class, attributes and text of a specific element",
        "inputSchema": _schema({"selector": _STRING}, ["selector"]),
    },
    {
        "name": "getElementHierarchy",
        "description": "Get the hierarchical structure of page elements with parent-child relationships",
        "inputSchema": _schema(
            {
                "selector": {"type": "string", "description": "CSS selector for root element (default: 'body')"},
                "maxDepth": {
                    "type": "number",
                    "description": "Maximum depth to traverse (-1 for unlimited, default: 3)",
                },
                "includeText": {
                    "type": "boolean",
                    "description": "Include direct text content of elements (default: false)",
                },
                "includeAttributes": {
                    "type": "boolean",
                    "description": "Include element attributes (default: false)",
                },
            }
        ),
    },
    {
        "name": "executeJavaScript",
        "description": "Execute arbitrary JavaScript code on the current page and return the result",
        "inputSchema": _schema(
            {
                "script": {
                    "type": "string",
                    "description": "JavaScript function body to run; use `return` to send a value back",
                }
            },
            ["script"],
        ),
    },
    {
        "name": "hover",
        "description": "Hover over an element on the page",
        "inputSchema": _schema({"selector": _STRING}, ["selector"]),
    },
    {
        "name": "dragAndDrop",
        "description": "Drag and drop from one element to another",
        "inputSchema": _schema(
            {"sourceSelector": _STRING, "targetSelector": _STRING},
            ["sourceSelector", "targetSelector"],
        ),
    },
    {
        "name": "selectOption",
        "description": "Select option(s) in a dropdown or select element",
        "inputSchema": _schema(
            {
                "selector": _STRING,
                "values": {"type": "array", "items": _STRING, "description": "Array of values to select"},
            },
            ["selector", "values"],
        ),
    },
    {
        "name": "pressKey",
        "description": "Press a key on the keyboard",
        "inputSchema": _schema(
            {"key": {"type": "string", "description": "Key to press (e.g., 'Enter', 'Escape', 'ArrowDown', etc.)"}},
            ["key"],
        ),
    },
    {
        "name": "waitForText",
        "description": "Wait for specific text to appear on the page",
        "inputSchema": _schema(
            {
                "text": _STRING,
                "timeout": {"type": "number", "description": "Timeout in milliseconds (default: 30000)"},
            },
            ["text"],
        ),
    },
    {
        "name": "waitForSelector",
        "description": "Wait for a specific selector to appear on the page",
        "inputSchema": _schema(
            {
                "selector": _STRING,
                "timeout": {"type": "number", "description": "Timeout in milliseconds (default: 30000)"},
            },
            ["selector"],
        ),
    },
]

# ═══════════════════════════════════════════════════════════════════════════════
# VIEWPORT, DIALOGS, DIAGNOSTICS, FILES
# ═══════════════════════════════════════════════════════════════════════════════

PAGE_STATE_TOOL_DEFINITIONS: list[dict[str, Any]] = [
    {
        "name": "resize",
        "description": "Resize the browser viewport",
        "inputSchema": _schema({"width": _NUMBER, "height": _NUMBER}, ["width", "height"]),
    },
    {
        "name": "handleDialog",
        "description": "Handle the next browser dialog (alert, confirm, prompt)",
        "inputSchema": _schema(
            {
                "accept": {
                    "type": "boolean",
                    "description": "Whether to accept (true) or dismiss (false) the dialog",
                },
                "promptText": {"type": "string", "description": "Text to enter in prompt dialogs (optional)"},
            },
            ["accept"],
        ),
    },
    {
        "name": "getConsoleMessages",
        "description": "Get console messages logged since the first call to this tool",
        "inputSchema": _schema(),
    },
    {
        "name": "getNetworkRequests",
        "description": "Get network requests made since the first call to this tool",
        "inputSchema": _schema(),
    },
    {
        "name": "uploadFiles",
        "description": "Upload files through a file input element",
        "inputSchema": _schema(
            {
                "selector": _STRING,
                "filePaths": {
                    "type": "array",
                    "items": _STRING,
                    "description": "Array of absolute file paths to upload",
                },
            },
            ["selector", "filePaths"],
        ),
    },
    {
        "name": "evaluateWithReturn",
        "description": "Evaluate a JavaScript expression and return the result",
        "inputSchema": _schema(
            {"script": {"type": "string", "description": "JavaScript code to execute"}},
            ["script"],
        ),
    },
    {
        "name": "takeScreenshot",
        "description": "Take a screenshot of the page or specific element",
        "inputSchema": _schema(
            {
                "path": _STRING,
                "fullPage": {"type": "boolean", "description": "Whether to capture the full scrollable page"},
                "element": {"type": "string", "description": "CSS selector for element screenshot"},
            },
            ["path"],
        ),
    },
]

# ═══════════════════════════════════════════════════════════════════════════════
# COORDINATE MOUSE + TEARDOWN
# ═══════════════════════════════════════════════════════════════════════════════

MOUSE_TOOL_DEFINITIONS: list[dict[str, Any]] = [
    {
        "name": "mouseMove",
        "description": "Move mouse to specific coordinates",
        "inputSchema": _schema({"x": _NUMBER, "y": _NUMBER}, ["x", "y"]),
    },
    {
        "name": "mouseClick",
        "description": "Click at specific coordinates",
        "inputSchema": _schema({"x": _NUMBER, "y": _NUMBER}, ["x", "y"]),
    },
    {
        "name": "mouseDrag",
        "description": "Drag from one coordinate to another",
        "inputSchema": _schema(
            {"startX": _NUMBER, "startY": _NUMBER, "endX": _NUMBER, "endY": _NUMBER},
            ["startX", "startY", "endX", "endY"],
        ),
    },
    {
        "name": "closeBrowser",
        "description": "Close the browser",
        "inputSchema": _schema(),
    },
]

TOOL_DEFINITIONS: list[dict[str, Any]] = [
    *LIFECYCLE_TOOL_DEFINITIONS,
    *INPUT_TOOL_DEFINITIONS,
    *PAGE_TOOL_DEFINITIONS,
    *DOM_TOOL_DEFINITIONS,
    *PAGE_STATE_TOOL_DEFINITIONS,
    *MOUSE_TOOL_DEFINITIONS,
]
