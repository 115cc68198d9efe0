"""
Tree renderer.

Maps an AST to a nested ``VisualNode`` structure. Rendering is pure: the
output depends only on the tree and the assist state passed in, so repeated
calls on an unchanged tree produce equal output. Every tree replacement is
rendered again in full.

Both ``render`` and ``format_tree`` walk the tree with an explicit work stack,
so tree depth is bounded by ``MAX_RENDER_DEPTH`` and not by the interpreter
stack.
"""

from typing import Callable, Dict, List, Optional, Tuple, Type

from structura.core.error_locator import to_location
from structura.models.assist import AssistState, AssistStatus
from structura.models.ast_node import (
    ASTNode,
    BisonAlternative,
    BisonFile,
    BisonGrammarRule,
    BisonTokenDecl,
    ErrorNode,
    FlexFile,
    FlexRule,
    UnknownNode,
)
from structura.models.visual import AssistPanel, AssistTrigger, VisualKind, VisualNode


# Keeps rendered trees well inside pydantic's nesting limit for serialization
MAX_RENDER_DEPTH = 128

FLEX_ROOT_LABEL = "Flex File Root"
BISON_ROOT_LABEL = "Bison File Root"
DECLARATIONS_SECTION_LABEL = "Declarations Section"
RULES_SECTION_LABEL = "Grammar Rules Section"
FLEX_RULE_LABEL = "Pattern (Regex) -> Action (C Code)"
TOKEN_DECL_LABEL = "%token"
ERROR_PANEL_LABEL = "Syntax Error"
EMPTY_ALTERNATIVE_TEXT = "/* empty */"
DEPTH_LIMIT_LABEL = "Depth limit reached"

# Child nodes still to render, the list their visuals go into, and their depth
_Pending = Tuple[List[ASTNode], List[VisualNode], int]


class _Renderer:
    """Single rendering pass over one tree."""

    def __init__(self, assist: Optional[AssistState]):
        self.assist = assist
        self._dispatch: Dict[Type, Callable[[object, int], Tuple[VisualNode, List[_Pending]]]] = {
            FlexFile: self._flex_file,
            FlexRule: self._flex_rule,
            BisonFile: self._bison_file,
            BisonTokenDecl: self._token_decl,
            BisonGrammarRule: self._grammar_rule,
            BisonAlternative: self._alternative,
            ErrorNode: self._error,
        }

    def render(self, root: ASTNode) -> VisualNode:
        result: List[VisualNode] = []
        stack: List[Tuple[ASTNode, List[VisualNode], int]] = [(root, result, 0)]

        while stack:
            node, target, depth = stack.pop()
            visual, pending = self._visit(node, depth)
            target.append(visual)
            # Reversed so that siblings are rendered in list order
            for children, child_target, child_depth in reversed(pending):
                stack.extend((child, child_target, child_depth) for child in reversed(children))

        return result[0]

    def _visit(self, node: ASTNode, depth: int) -> Tuple[VisualNode, List[_Pending]]:
        if depth > MAX_RENDER_DEPTH:
            return VisualNode(kind=VisualKind.PLACEHOLDER, label=DEPTH_LIMIT_LABEL), []

        if isinstance(node, str):
            return VisualNode(kind=VisualKind.LITERAL, text=f'"{node}"'), []

        handler = self._dispatch.get(type(node))
        if handler is None:
            return self._unknown(node), []
        return handler(node, depth)

    def _flex_file(self, node: FlexFile, depth: int):
        visual = VisualNode(kind=VisualKind.ROOT, label=FLEX_ROOT_LABEL)
        return visual, [(node.rules, visual.children, depth + 1)]

    def _flex_rule(self, node: FlexRule, depth: int):
        visual = VisualNode(
            kind=VisualKind.RULE_CARD,
            label=FLEX_RULE_LABEL,
            text=node.pattern,
            action=node.action,
        )
        return visual, []

    def _bison_file(self, node: BisonFile, depth: int):
        visual = VisualNode(kind=VisualKind.ROOT, label=BISON_ROOT_LABEL)
        pending: List[_Pending] = []
        # Empty sections are not shown
        for label, children in (
            (DECLARATIONS_SECTION_LABEL, node.declarations),
            (RULES_SECTION_LABEL, node.rules),
        ):
            if not children:
                continue
            section = VisualNode(kind=VisualKind.SECTION, label=label)
            visual.children.append(section)
            pending.append((children, section.children, depth + 2))
        return visual, pending

    def _token_decl(self, node: BisonTokenDecl, depth: int):
        visual = VisualNode(
            kind=VisualKind.DECLARATION_CHIP,
            label=TOKEN_DECL_LABEL,
            items=list(node.names),
        )
        return visual, []

    def _grammar_rule(self, node: BisonGrammarRule, depth: int):
        visual = VisualNode(kind=VisualKind.RULE_BLOCK, label=node.name)
        return visual, [(node.alternatives, visual.children, depth + 1)]

    def _alternative(self, node: BisonAlternative, depth: int):
        visual = VisualNode(
            kind=VisualKind.ALTERNATIVE_ROW,
            label="|",
            text=None if node.symbols else EMPTY_ALTERNATIVE_TEXT,
            items=list(node.symbols),
            action=node.action or None,
        )
        return visual, []

    def _error(self, node: ErrorNode, depth: int):
        location = to_location(node)
        visual = VisualNode(
            kind=VisualKind.ERROR_PANEL,
            label=ERROR_PANEL_LABEL,
            text=f"Line {location.line}, Col {location.column}: {location.message}",
            assist=self._assist_panel(location.message, location.line),
        )
        return visual, []

    def _assist_panel(self, message: str, line: int) -> Optional[AssistPanel]:
        if self.assist is None:
            return None
        if self.assist.status == AssistStatus.IDLE:
            return AssistPanel(
                status=AssistStatus.IDLE,
                trigger=AssistTrigger(error_message=message, error_line=line),
            )
        return AssistPanel(status=self.assist.status, text=self.assist.text)

    def _unknown(self, node: ASTNode) -> VisualNode:
        node_type = node.type if isinstance(node, UnknownNode) else type(node).__name__
        return VisualNode(
            kind=VisualKind.PLACEHOLDER,
            label=f"Unknown Node: {node_type}",
            text=None if node_type is None else str(node_type),
        )


def render(node: ASTNode, assist: Optional[AssistState] = None) -> VisualNode:
    """
    Render an AST as a visual tree.

    Never raises for unexpected input: unknown node types become labelled
    placeholders, string leaves become quoted literals and subtrees deeper
    than ``MAX_RENDER_DEPTH`` become a depth-limit placeholder.

    Args:
        node: Tree root (any node variant or a string leaf)
        assist: Assist state to project onto error panels; error panels carry
            no assist area when omitted

    Returns:
        Root of the visual tree
    """
    return _Renderer(assist).render(node)


def format_tree(visual: VisualNode, indent: str = "  ") -> str:
    """Format a visual tree as an indented text outline."""
    lines: List[str] = []
    stack: List[Tuple[VisualNode, int]] = [(visual, 0)]

    while stack:
        item, level = stack.pop()
        parts = [item.label] if item.label else []
        if item.text is not None:
            parts.append(item.text)
        if item.items:
            parts.append(" ".join(item.items))
        if item.action is not None:
            parts.append(f"{{ {item.action} }}")
        lines.append(f"{indent * level}{' '.join(parts)}")
        if item.assist is not None and item.assist.text:
            lines.append(f"{indent * (level + 1)}AI Assistant: {item.assist.text}")
        stack.extend((child, level + 1) for child in reversed(item.children))

    return "\n".join(lines)
