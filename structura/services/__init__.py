"""Business logic services package."""

from structura.services.analysis_session import AnalysisSessionController
from structura.services.assist_session import ASSIST_FAILURE_MESSAGE, AssistSessionController
from structura.services.diagnostics import (
    HIGHLIGHT_WIDTH,
    MARKER_OWNER,
    EditorDiagnosticBridge,
    EditorModel,
    MarkerSink,
    build_marker,
)
from structura.services.dialects import DialectCatalog, DialectCatalogError, get_dialect_catalog
from structura.services.engine_client import (
    EngineClient,
    EngineClientError,
    EngineResponseError,
    EngineUnavailableError,
    get_engine_client,
)
from structura.services.workbench import Workbench, get_workbench

__all__ = [
    'AnalysisSessionController',
    'AssistSessionController',
    'ASSIST_FAILURE_MESSAGE',
    'EditorDiagnosticBridge',
    'EditorModel',
    'MarkerSink',
    'build_marker',
    'HIGHLIGHT_WIDTH',
    'MARKER_OWNER',
    'DialectCatalog',
    'DialectCatalogError',
    'get_dialect_catalog',
    'EngineClient',
    'EngineClientError',
    'EngineResponseError',
    'EngineUnavailableError',
    'get_engine_client',
    'Workbench',
    'get_workbench',
]
