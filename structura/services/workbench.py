"""
Workbench session.

Wires the editor model, the analysis and assist controllers and the
diagnostic bridge into one session:

    edit -> analyze -> store AST -> locate first error -> update markers
         -> render tree (error panels offer the assist trigger)
"""

import asyncio
import logging
from typing import Optional

from structura.core.error_locator import find_first_error
from structura.core.renderer import format_tree, render
from structura.models.diagnostic import ErrorLocation
from structura.models.dialect import Dialect
from structura.models.session import WorkbenchView
from structura.models.visual import VisualNode
from structura.services.analysis_session import AnalysisSessionController
from structura.services.assist_session import AssistSessionController
from structura.services.diagnostics import MARKER_OWNER, EditorDiagnosticBridge, EditorModel
from structura.services.dialects import DialectCatalog, get_dialect_catalog
from structura.services.engine_client import EngineClient, get_engine_client
from structura.utils.logging import get_logger
from structura.utils.metrics import SessionMetrics


logger = get_logger(__name__)


class Workbench:
    """One interactive session: editor, analysis, diagnostics and assist."""

    def __init__(
        self,
        engine: EngineClient,
        catalog: Optional[DialectCatalog] = None,
        dialect: Dialect = Dialect.FLEX,
        metrics: Optional[SessionMetrics] = None,
        session_id: str = "default",
    ):
        self.session_id = session_id
        self.engine = engine
        self.metrics = metrics or SessionMetrics(session_id)
        catalog = catalog or get_dialect_catalog()

        self.assist = AssistSessionController(engine, metrics=self.metrics, session_id=session_id)
        self.analysis = AnalysisSessionController(
            engine,
            catalog,
            self.assist,
            dialect=dialect,
            metrics=self.metrics,
            session_id=session_id,
        )
        self.editor = EditorModel(self.analysis.state.source_text, on_change=self._on_editor_change)
        self.diagnostics = EditorDiagnosticBridge(self.editor)
        self.current_error: Optional[ErrorLocation] = None
        self._last_submission: Optional["asyncio.Task[bool]"] = None

        self.analysis.add_listener(self._on_session_change)

    def _on_editor_change(self, text: str) -> None:
        self._last_submission = self.analysis.edit_source(text)

    def _on_session_change(self) -> None:
        state = self.analysis.state
        if self.editor.text != state.source_text:
            self.editor.set_value(state.source_text)

        error = find_first_error(state.ast)
        if error != self.current_error:
            self.current_error = error
            self.diagnostics.update(error)

        if state.ast is not None and logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Tree outline:\n{format_tree(render(state.ast))}")

    def switch_dialect(self, dialect: Dialect) -> None:
        self.analysis.switch_dialect(dialect)

    def edit_source(self, text: str) -> "asyncio.Task[bool]":
        """
        Apply a user edit through the editor and schedule its analysis.

        Returns:
            The scheduled analysis submission
        """
        self.editor.type_text(text)
        return self._last_submission

    def request_assist(self, error_message: str, error_line: int) -> Optional["asyncio.Task"]:
        """
        Request a repair suggestion for an error shown in the tree.

        Returns:
            The scheduled request, or None if one is already loading
        """
        state = self.analysis.state
        return self.assist.request_suggestion(
            state.source_text,
            state.dialect,
            error_message,
            error_line,
        )

    def render_tree(self) -> Optional[VisualNode]:
        ast = self.analysis.state.ast
        if ast is None:
            return None
        return render(ast, self.assist.state)

    def view(self) -> WorkbenchView:
        """Snapshot of everything the front end draws."""
        state = self.analysis.state
        return WorkbenchView(
            dialect=state.dialect,
            source_text=self.editor.text,
            tokens=list(state.tokens),
            markers=self.editor.get_markers(MARKER_OWNER),
            error=self.current_error,
            tree=self.render_tree(),
            assist=self.assist.state,
        )

    async def wait_idle(self) -> None:
        """Wait for in-flight analysis and assist requests."""
        await self.analysis.wait_idle()
        await self.assist.wait_idle()

    async def close(self) -> None:
        await self.wait_idle()
        self.metrics.complete()
        await self.engine.close()


_workbench: Optional[Workbench] = None


def get_workbench() -> Workbench:
    """
    Get or create the global workbench session.

    Returns:
        Workbench instance connected to the configured engine
    """
    global _workbench
    if _workbench is None:
        metrics = SessionMetrics()
        _workbench = Workbench(get_engine_client(metrics), metrics=metrics)
    return _workbench
