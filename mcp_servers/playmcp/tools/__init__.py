"""
Browser facade operations.

Each function takes the SessionManager first and raises BrowserToolError on
failure. Lifecycle (open/close) lives on SessionManager itself.
"""

from .base import ensure_allowed_navigation, ensure_selector, page_operation
from .diagnostics import get_console_messages, get_network_requests
from .dom import get_element_content, get_element_hierarchy, inspect_element, screenshot, take_screenshot
from .input import (
    click,
    drag_and_drop,
    hover,
    mouse_click,
    mouse_drag,
    move_mouse,
    press_key,
    scroll,
    select_option,
    type_text,
)
from .navigation import go_back, go_forward, navigate, refresh
from .page import (
    get_forms,
    get_images,
    get_links,
    get_meta_tags,
    get_page_source,
    get_page_text,
    get_page_title,
    get_page_url,
    get_scripts,
    get_stylesheets,
)
from .scripting import evaluate_with_return, execute_javascript
from .viewport import handle_dialog, resize, upload_files
from .wait import wait_for_selector, wait_for_text

__all__ = [
    # base
    "ensure_allowed_navigation",
    "ensure_selector",
    "page_operation",
    # navigation
    "navigate",
    "go_back",
    "go_forward",
    "refresh",
    # input
    "click",
    "type_text",
    "hover",
    "drag_and_drop",
    "select_option",
    "press_key",
    "move_mouse",
    "mouse_click",
    "mouse_drag",
    "scroll",
    # page
    "get_page_source",
    "get_page_text",
    "get_page_title",
    "get_page_url",
    "get_scripts",
    "get_stylesheets",
    "get_meta_tags",
    "get_links",
    "get_images",
    "get_forms",
    # dom
    "get_element_content",
    "inspect_element",
    "get_element_hierarchy",
    "screenshot",
    "take_screenshot",
    # scripting
    "execute_javascript",
    "evaluate_with_return",
    # waits
    "wait_for_selector",
    "wait_for_text",
    # viewport / dialogs / files
    "resize",
    "handle_dialog",
    "upload_files",
    # diagnostics
    "get_console_messages",
    "get_network_requests",
]
