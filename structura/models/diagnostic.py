"""Diagnostic data models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class ErrorLocation(BaseModel):
    """The first syntax error found in a tree, as shown in the editor."""

    model_config = ConfigDict(frozen=True)

    line: int
    column: int
    message: str


class MarkerSeverity(str, Enum):
    """Severity of an editor marker."""

    HINT = "hint"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class Marker(BaseModel):
    """An inline annotation installed in the editor by a named owner."""

    owner: str
    severity: MarkerSeverity
    message: str
    start_line_number: int
    start_column: int
    end_line_number: int
    end_column: int
