"""
Analysis session controller.

Owns the dialect, source text, tokens and AST of one session and runs the
edit -> analyze round trip. Every submission carries a generation number;
only the response of the latest generation may replace tokens and AST, so a
slow response can never overwrite the result of a newer edit.
"""

import asyncio
from typing import Callable, List, Optional, Set

from structura.models.dialect import Dialect
from structura.models.session import AnalysisSession
from structura.services.assist_session import AssistSessionController
from structura.services.dialects import DialectCatalog
from structura.services.engine_client import EngineClient, EngineClientError
from structura.utils.logging import get_logger, log_error_with_context
from structura.utils.metrics import SessionMetrics


logger = get_logger(__name__)

Listener = Callable[[], None]


class AnalysisSessionController:
    """
    Controller for the analysis half of a workbench session.

    Listeners registered with ``add_listener`` are called after every state
    change: text edit, dialect switch and applied analysis response.
    """

    def __init__(
        self,
        engine: EngineClient,
        catalog: DialectCatalog,
        assist: AssistSessionController,
        dialect: Dialect = Dialect.FLEX,
        metrics: Optional[SessionMetrics] = None,
        session_id: str = "default",
    ):
        """
        Initialize the controller with the dialect's canonical example.

        Args:
            engine: Analysis engine client
            catalog: Dialect catalogue providing example texts
            assist: Assist controller reset by edits and dialect switches
            dialect: Initial dialect
            metrics: Optional metrics collector
            session_id: Identifier used in log context
        """
        self._engine = engine
        self._catalog = catalog
        self._assist = assist
        self._metrics = metrics
        self._logger = logger.with_context(session_id=session_id)
        self.state = AnalysisSession(dialect=dialect, source_text=catalog.example(dialect))
        self._generation = 0
        self._pending: Set[asyncio.Task] = set()
        self._listeners: List[Listener] = []

    @property
    def generation(self) -> int:
        """Generation of the most recently issued submission."""
        return self._generation

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def switch_dialect(self, dialect: Dialect) -> None:
        """
        Select a dialect and reset the session to its canonical example.

        Clears tokens, AST and any assist state. In-flight analysis responses
        belong to the previous text and are discarded when they arrive.

        Args:
            dialect: Dialect to select
        """
        dialect = Dialect(dialect)
        self._generation += 1
        self.state = AnalysisSession(dialect=dialect, source_text=self._catalog.example(dialect))
        self._assist.reset()
        self._logger.info(f"Switched dialect to {dialect.value}", extra={"dialect": dialect.value})
        self._notify()

    def edit_source(self, text: str) -> "asyncio.Task[bool]":
        """
        Store new source text and submit it for analysis.

        The text is stored before anything else and is never rolled back. The
        assist state is reset because an edit invalidates prior suggestions.
        Must be called from a running event loop.

        Args:
            text: Full editor text

        Returns:
            The scheduled submission; resolves to True if its response was applied
        """
        self.state.source_text = text
        self._assist.reset()
        self._generation += 1
        generation = self._generation
        dialect = self.state.dialect

        if self._metrics:
            self._metrics.record_analysis("requested")
        self._notify()

        task = asyncio.create_task(self._submit(text, dialect, generation))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _submit(self, code: str, dialect: Dialect, generation: int) -> bool:
        log = self._logger.with_context(dialect=dialect.value, generation=generation)
        try:
            response = await self._engine.analyze(code, dialect)
        except EngineClientError as e:
            # Operator log only; tokens and AST stay as they were
            log.warning(f"Analysis request failed: {e}")
            if self._metrics:
                self._metrics.record_analysis("failed")
            return False
        except Exception as e:
            log_error_with_context(log, "Unexpected analysis failure", e)
            if self._metrics:
                self._metrics.record_analysis("failed")
            return False

        if generation != self._generation:
            log.info(
                "Discarding stale analysis response",
                extra={"latest_generation": self._generation},
            )
            if self._metrics:
                self._metrics.record_analysis("discarded")
            return False

        self.state.tokens = list(response.tokens)
        self.state.ast = response.ast
        if self._metrics:
            self._metrics.record_analysis("applied")
        log.debug(f"Applied analysis response with {len(response.tokens)} tokens")
        self._notify()
        return True

    async def wait_idle(self) -> None:
        """Wait for every in-flight submission to finish."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def _notify(self) -> None:
        for listener in self._listeners:
            listener()
