"""Pure tree logic: rendering and error location."""

from structura.core.error_locator import find_first_error
from structura.core.renderer import format_tree, render

__all__ = [
    "find_first_error",
    "render",
    "format_tree",
]
