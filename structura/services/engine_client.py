"""
HTTP client for the analysis engine.

Wraps the engine's two request/response endpoints, ``/analyze`` and
``/assist``, behind an ``httpx.AsyncClient`` with circuit breaker protection.
Every failure is raised as an ``EngineClientError`` subclass so callers can
handle transport and response problems uniformly.
"""

from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from structura.models.dialect import Dialect
from structura.models.engine_api import (
    AnalyzeRequest,
    AnalyzeResponse,
    AssistRequest,
    AssistResponse,
)
from structura.utils.logging import get_logger
from structura.utils.metrics import SessionMetrics, track_api_call
from structura.utils.resilience import (
    CircuitBreaker,
    CircuitBreakerOpenError,
    create_engine_circuit_breaker,
)


logger = get_logger(__name__)


class EngineClientError(Exception):
    """Base exception for analysis engine client errors."""
    pass


class EngineUnavailableError(EngineClientError):
    """The engine could not be reached (transport failure, timeout, open circuit)."""
    pass


class EngineResponseError(EngineClientError):
    """The engine answered with a non-success status or an unusable payload."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class EngineClient:
    """
    Client for the analysis engine.

    Provides:
    - analyze(): full-text analysis returning tokens and an AST
    - assist(): AI repair suggestion for one located error
    """

    ANALYZE_ENDPOINT = "/analyze"
    ASSIST_ENDPOINT = "/assist"

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        assist_timeout: float = 60.0,
        circuit_breaker: Optional[CircuitBreaker] = None,
        metrics: Optional[SessionMetrics] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the engine client.

        Args:
            base_url: Engine base URL (e.g. http://127.0.0.1:4000)
            timeout: Timeout in seconds for analysis requests
            assist_timeout: Timeout in seconds for assist requests
            circuit_breaker: Optional CircuitBreaker instance for fault tolerance
            metrics: Optional metrics collector for call latency
            transport: Optional httpx transport (in-process engines, tests)
        """
        self.base_url = base_url
        self.timeout = timeout
        self.assist_timeout = assist_timeout
        self.circuit_breaker = circuit_breaker or create_engine_circuit_breaker()
        self.metrics = metrics
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
        )

    async def analyze(self, code: str, dialect: Dialect) -> AnalyzeResponse:
        """
        Submit source text for analysis.

        Args:
            code: Full source text
            dialect: Dialect of the text

        Returns:
            Token stream and AST

        Raises:
            EngineUnavailableError: If the engine cannot be reached
            EngineResponseError: If the engine rejects the request or the payload is invalid
        """
        request = AnalyzeRequest(code=code, language=dialect)
        data = await self._post(self.ANALYZE_ENDPOINT, request.model_dump(mode="json"), self.timeout)
        try:
            return AnalyzeResponse.model_validate(data)
        except ValidationError as e:
            raise EngineResponseError(f"Malformed analysis response: {e}") from e

    async def assist(
        self,
        code: str,
        dialect: Dialect,
        error_message: str,
        error_line: int,
    ) -> AssistResponse:
        """
        Request a repair suggestion for one error.

        Args:
            code: Full source text
            dialect: Dialect of the text
            error_message: Message of the located error
            error_line: 1-based line of the located error

        Returns:
            Suggestion text

        Raises:
            EngineUnavailableError: If the engine cannot be reached
            EngineResponseError: If the engine rejects the request or the payload is invalid
        """
        request = AssistRequest(
            code=code,
            language=dialect,
            error_message=error_message,
            error_line=max(error_line, 1),
        )
        data = await self._post(self.ASSIST_ENDPOINT, request.model_dump(mode="json"), self.assist_timeout)
        try:
            return AssistResponse.model_validate(data)
        except ValidationError as e:
            raise EngineResponseError(f"Malformed assist response: {e}") from e

    async def _post(self, endpoint: str, payload: Dict[str, Any], timeout: float) -> Any:
        """
        POST a JSON payload through the circuit breaker and decode the reply.

        Raises:
            EngineUnavailableError: On transport failure or open circuit
            EngineResponseError: On non-success status or undecodable body
        """
        async def _send() -> httpx.Response:
            response = await self._client.post(endpoint, json=payload, timeout=timeout)
            response.raise_for_status()
            return response

        try:
            async with track_api_call(self.metrics, f"engine{endpoint}", endpoint, "POST", logger):
                response = await self.circuit_breaker.call(_send)
        except CircuitBreakerOpenError as e:
            raise EngineUnavailableError(str(e)) from e
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            raise EngineResponseError(
                f"Engine returned status {status_code} for {endpoint}",
                status_code=status_code,
            ) from e
        except httpx.HTTPError as e:
            raise EngineUnavailableError(f"Engine request to {endpoint} failed: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise EngineResponseError(f"Engine returned invalid JSON for {endpoint}") from e

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()


def get_engine_client(metrics: Optional[SessionMetrics] = None) -> EngineClient:
    """
    Factory function to create an EngineClient with settings from config.

    Returns:
        EngineClient instance configured with application settings
    """
    from structura.config import settings

    return EngineClient(
        base_url=settings.engine_url,
        timeout=settings.request_timeout_seconds,
        assist_timeout=settings.assist_timeout_seconds,
        metrics=metrics,
    )
