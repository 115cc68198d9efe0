"""Request and response models of the analysis engine."""

from typing import List

from pydantic import BaseModel, Field

from .ast_node import ASTNode
from .dialect import Dialect
from .token import Token


class AnalyzeRequest(BaseModel):
    """Full source text submitted for analysis."""

    code: str
    language: Dialect


class AnalyzeResponse(BaseModel):
    """Token stream and tree for one analysis request."""

    tokens: List[Token] = []
    ast: ASTNode


class AssistRequest(BaseModel):
    """Request for a repair suggestion for one located error."""

    code: str
    language: Dialect
    error_message: str
    error_line: int = Field(..., ge=1)


class AssistResponse(BaseModel):
    """Repair suggestion text."""

    suggestion: str
