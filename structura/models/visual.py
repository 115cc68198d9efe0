"""Visual tree data models produced by the tree renderer."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel

from .assist import AssistStatus


class VisualKind(str, Enum):
    """Fixed visual shapes, one per node variant plus fallbacks."""

    ROOT = "root"
    SECTION = "section"
    RULE_CARD = "rule_card"
    DECLARATION_CHIP = "declaration_chip"
    RULE_BLOCK = "rule_block"
    ALTERNATIVE_ROW = "alternative_row"
    ERROR_PANEL = "error_panel"
    LITERAL = "literal"
    PLACEHOLDER = "placeholder"


class AssistTrigger(BaseModel):
    """User-triggerable request for a repair suggestion."""

    error_message: str
    error_line: int


class AssistPanel(BaseModel):
    """Assist area attached to an error panel."""

    status: AssistStatus
    trigger: Optional[AssistTrigger] = None
    text: Optional[str] = None


class VisualNode(BaseModel):
    """One element of the rendered tree."""

    kind: VisualKind
    label: str = ""
    text: Optional[str] = None
    items: List[str] = []
    action: Optional[str] = None
    children: List["VisualNode"] = []
    assist: Optional[AssistPanel] = None


VisualNode.model_rebuild()
