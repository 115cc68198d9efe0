"""
Error locator.

Finds the first embedded ``Error`` node of a tree so the editor can show a
single diagnostic. The search is pre-order and stops at the first match; it
is recomputed on every tree change and never cached.
"""

from typing import Iterable, List, Optional

from pydantic import ValidationError

from structura.models.ast_node import ASTNode, ErrorNode, UnknownNode, parse_ast
from structura.models.diagnostic import ErrorLocation


DEFAULT_ERROR_LINE = 1
DEFAULT_ERROR_COLUMN = 1
DEFAULT_ERROR_MESSAGE = "Error"

# Child lists are searched in this order
CHILD_LISTS = ("rules", "declarations", "alternatives")


def to_location(node: ErrorNode) -> ErrorLocation:
    """Convert an error node to a location, filling absent fields with defaults."""
    return ErrorLocation(
        line=node.line or DEFAULT_ERROR_LINE,
        column=node.column or DEFAULT_ERROR_COLUMN,
        message=node.message or DEFAULT_ERROR_MESSAGE,
    )


def _unknown_children(node: UnknownNode, field: str) -> Iterable[ASTNode]:
    # Unknown nodes keep their child lists as raw JSON; entries that are not
    # nodes are skipped
    for item in (node.model_extra or {}).get(field) or []:
        if not isinstance(item, (dict, str)):
            continue
        try:
            yield parse_ast(item)
        except ValidationError:
            continue


def iter_children(node: ASTNode) -> Iterable[ASTNode]:
    """Yield the node's children in search order; absent lists are empty."""
    if isinstance(node, str):
        return
    for field in CHILD_LISTS:
        if isinstance(node, UnknownNode):
            yield from _unknown_children(node, field)
            continue
        children = getattr(node, field, None)
        if children:
            yield from children


def find_first_error(node: Optional[ASTNode]) -> Optional[ErrorLocation]:
    """
    Locate the first error node of a tree.

    Uses an explicit work stack instead of recursion, so a pathologically deep
    tree cannot exhaust the interpreter stack.

    Args:
        node: Tree root, or None when no analysis has completed

    Returns:
        Location of the first error found, or None if the tree has none
    """
    if node is None:
        return None

    stack: List[ASTNode] = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, ErrorNode):
            return to_location(current)
        stack.extend(reversed(list(iter_children(current))))

    return None
