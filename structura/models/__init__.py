"""Data models for the Structura workbench and analysis engine."""

from .assist import AssistState, AssistStatus
from .ast_node import (
    ASTNode,
    BisonAlternative,
    BisonFile,
    BisonGrammarRule,
    BisonTokenDecl,
    ErrorNode,
    FlexFile,
    FlexRule,
    UnknownNode,
    parse_ast,
)
from .diagnostic import ErrorLocation, Marker, MarkerSeverity
from .dialect import Dialect, DialectInfo
from .engine_api import (
    AnalyzeRequest,
    AnalyzeResponse,
    AssistRequest,
    AssistResponse,
)
from .session import (
    AnalysisSession,
    AssistTriggerRequest,
    DialectSwitchRequest,
    SourceEditRequest,
    WorkbenchView,
)
from .token import Token
from .visual import AssistPanel, AssistTrigger, VisualKind, VisualNode

__all__ = [
    # Token models
    "Token",
    # Dialect models
    "Dialect",
    "DialectInfo",
    # AST models
    "ASTNode",
    "FlexFile",
    "FlexRule",
    "BisonFile",
    "BisonTokenDecl",
    "BisonGrammarRule",
    "BisonAlternative",
    "ErrorNode",
    "UnknownNode",
    "parse_ast",
    # Diagnostic models
    "ErrorLocation",
    "Marker",
    "MarkerSeverity",
    # Assist models
    "AssistStatus",
    "AssistState",
    # Visual tree models
    "VisualKind",
    "VisualNode",
    "AssistPanel",
    "AssistTrigger",
    # Engine API models
    "AnalyzeRequest",
    "AnalyzeResponse",
    "AssistRequest",
    "AssistResponse",
    # Session models
    "AnalysisSession",
    "WorkbenchView",
    "DialectSwitchRequest",
    "SourceEditRequest",
    "AssistTriggerRequest",
]
