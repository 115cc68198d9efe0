"""Session state and workbench view models."""

from typing import List, Optional

from pydantic import BaseModel, Field

from .assist import AssistState
from .ast_node import ASTNode
from .diagnostic import ErrorLocation, Marker
from .dialect import Dialect
from .token import Token
from .visual import VisualNode


class AnalysisSession(BaseModel):
    """State owned by the analysis session controller."""

    dialect: Dialect
    source_text: str
    tokens: List[Token] = []
    ast: Optional[ASTNode] = None


class WorkbenchView(BaseModel):
    """Everything a front end needs to draw the workbench."""

    dialect: Dialect
    source_text: str
    tokens: List[Token] = []
    markers: List[Marker] = []
    error: Optional[ErrorLocation] = None
    tree: Optional[VisualNode] = None
    assist: AssistState


class DialectSwitchRequest(BaseModel):
    """Request to select another dialect."""

    dialect: Dialect


class SourceEditRequest(BaseModel):
    """New editor text typed by the user."""

    code: str


class AssistTriggerRequest(BaseModel):
    """Error an assist panel was triggered for."""

    error_message: str
    error_line: int = Field(..., ge=1)
