"""
Input operations: mouse, keyboard, selector interactions, scrolling.
"""

from .dom import click, drag_and_drop, hover, select_option, type_text
from .keyboard import press_key
from .mouse import mouse_click, mouse_drag, move_mouse
from .scroll import scroll

__all__ = [
    "click",
    "drag_and_drop",
    "hover",
    "mouse_click",
    "mouse_drag",
    "move_mouse",
    "press_key",
    "scroll",
    "select_option",
    "type_text",
]
