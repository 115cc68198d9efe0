"""
Assist session controller.

State machine for AI repair suggestions:

    idle -> loading -> success(suggestion) | failure(message)

A request can only start when nothing is loading. Any source edit or
dialect switch resets the machine to idle, and a response that arrives after
such a reset is dropped.
"""

import asyncio
from typing import Optional, Set

from structura.models.assist import AssistState, AssistStatus
from structura.models.dialect import Dialect
from structura.services.engine_client import EngineClient, EngineClientError
from structura.utils.logging import get_logger, log_error_with_context, log_state_transition
from structura.utils.metrics import SessionMetrics


logger = get_logger(__name__)

ASSIST_FAILURE_MESSAGE = (
    "Could not connect to the AI assistant. Ensure the analysis engine is running "
    "and an AI API key is configured."
)


class AssistSessionController:
    """Owns the assist state of one workbench session."""

    def __init__(
        self,
        engine: EngineClient,
        metrics: Optional[SessionMetrics] = None,
        session_id: str = "default",
    ):
        self._engine = engine
        self._metrics = metrics
        self._logger = logger.with_context(session_id=session_id)
        self.state = AssistState()
        self._epoch = 0
        self._pending: Set[asyncio.Task] = set()

    @property
    def is_loading(self) -> bool:
        return self.state.status == AssistStatus.LOADING

    def request_suggestion(
        self,
        code: str,
        dialect: Dialect,
        error_message: str,
        error_line: int,
    ) -> Optional["asyncio.Task[AssistState]"]:
        """
        Start a repair request for one error.

        Must be called from a running event loop.

        Args:
            code: Source text at the time of the request
            dialect: Current dialect
            error_message: Message of the error the user picked
            error_line: Line of that error

        Returns:
            The scheduled request, or None if a request is already loading
        """
        if self.is_loading:
            self._logger.info("Assist request rejected: a request is already loading")
            if self._metrics:
                self._metrics.record_assist("rejected")
            return None

        self._transition(AssistState(status=AssistStatus.LOADING))
        if self._metrics:
            self._metrics.record_assist("requested")

        task = asyncio.create_task(
            self._run(code, dialect, error_message, error_line, self._epoch)
        )
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _run(
        self,
        code: str,
        dialect: Dialect,
        error_message: str,
        error_line: int,
        epoch: int,
    ) -> AssistState:
        try:
            response = await self._engine.assist(code, dialect, error_message, error_line)
            outcome = AssistState(status=AssistStatus.SUCCESS, text=response.suggestion)
        except EngineClientError as e:
            self._logger.warning(f"Assist request failed: {e}", extra={"error_line": error_line})
            outcome = AssistState(status=AssistStatus.FAILURE, text=ASSIST_FAILURE_MESSAGE)
        except Exception as e:
            log_error_with_context(self._logger, "Unexpected assist failure", e, error_line=error_line)
            outcome = AssistState(status=AssistStatus.FAILURE, text=ASSIST_FAILURE_MESSAGE)

        if epoch != self._epoch:
            self._logger.info("Dropping assist response for a superseded request")
            return outcome

        if self._metrics:
            succeeded = outcome.status == AssistStatus.SUCCESS
            self._metrics.record_assist("succeeded" if succeeded else "failed")
        self._transition(outcome)
        return outcome

    def reset(self) -> None:
        """Return to idle and invalidate any in-flight request."""
        self._epoch += 1
        if self.state.status != AssistStatus.IDLE:
            self._transition(AssistState())

    async def wait_idle(self) -> None:
        """Wait for every in-flight request to finish."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def _transition(self, new_state: AssistState) -> None:
        log_state_transition(self._logger, "assist", self.state.status.value, new_state.status.value)
        self.state = new_state
