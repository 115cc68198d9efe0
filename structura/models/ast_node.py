"""
AST node data models.

Nodes arrive from the analysis engine as JSON objects tagged by ``type``.
The union is closed over the seven known variants. Anything carrying another
tag is kept as an ``UnknownNode`` and bare strings are kept as string leaves,
so a malformed tree still loads and consumers can fail soft.
"""

from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Tag, TypeAdapter


KNOWN_NODE_TYPES = frozenset({
    "FlexFile",
    "FlexRule",
    "BisonFile",
    "BisonTokenDecl",
    "BisonGrammarRule",
    "BisonAlternative",
    "Error",
})


class FlexFile(BaseModel):
    """Root of a scanner-dialect tree."""

    type: Literal["FlexFile"] = "FlexFile"
    rules: List["ASTNode"] = []


class FlexRule(BaseModel):
    """One scanner rule: pattern and action code, both opaque text."""

    type: Literal["FlexRule"] = "FlexRule"
    pattern: str = ""
    action: str = ""


class BisonFile(BaseModel):
    """Root of a grammar-dialect tree."""

    type: Literal["BisonFile"] = "BisonFile"
    declarations: List["ASTNode"] = []
    rules: List["ASTNode"] = []


class BisonTokenDecl(BaseModel):
    """A ``%token`` declaration naming one or more symbols."""

    type: Literal["BisonTokenDecl"] = "BisonTokenDecl"
    names: List[str] = []


class BisonGrammarRule(BaseModel):
    """A nonterminal and its production alternatives."""

    type: Literal["BisonGrammarRule"] = "BisonGrammarRule"
    name: str = ""
    alternatives: List["ASTNode"] = []


class BisonAlternative(BaseModel):
    """One production: a possibly empty symbol sequence and an optional action."""

    type: Literal["BisonAlternative"] = "BisonAlternative"
    symbols: List[str] = []
    action: Optional[str] = None


class ErrorNode(BaseModel):
    """Syntax-error placeholder, substitutable for any child node."""

    type: Literal["Error"] = "Error"
    line: Optional[int] = None
    column: Optional[int] = None
    message: Optional[str] = None


class UnknownNode(BaseModel):
    """Node whose tag is outside the known set; extra fields are preserved."""

    model_config = ConfigDict(extra="allow")

    type: Any = None


def _node_tag(value: Any) -> str:
    """Pick the union arm for a raw or already-built node."""
    if isinstance(value, str):
        return "str"
    if isinstance(value, dict):
        node_type = value.get("type")
    else:
        node_type = getattr(value, "type", None)
    if isinstance(node_type, str) and node_type in KNOWN_NODE_TYPES:
        return node_type
    return "Unknown"


ASTNode = Annotated[
    Union[
        Annotated[str, Tag("str")],
        Annotated[FlexFile, Tag("FlexFile")],
        Annotated[FlexRule, Tag("FlexRule")],
        Annotated[BisonFile, Tag("BisonFile")],
        Annotated[BisonTokenDecl, Tag("BisonTokenDecl")],
        Annotated[BisonGrammarRule, Tag("BisonGrammarRule")],
        Annotated[BisonAlternative, Tag("BisonAlternative")],
        Annotated[ErrorNode, Tag("Error")],
        Annotated[UnknownNode, Tag("Unknown")],
    ],
    Discriminator(_node_tag),
]


# Enable forward references for the recursive models
FlexFile.model_rebuild()
BisonFile.model_rebuild()
BisonGrammarRule.model_rebuild()

_ast_adapter = TypeAdapter(ASTNode)


def parse_ast(payload: Any) -> ASTNode:
    """
    Build an AST node from a JSON-compatible value.

    Args:
        payload: Decoded JSON (dict for nodes, str for string leaves)

    Returns:
        The matching node model, ``UnknownNode`` for unrecognised tags

    Raises:
        pydantic.ValidationError: If the payload is neither a dict nor a string
    """
    return _ast_adapter.validate_python(payload)
