"""
Repair assistant for the analysis engine.

Asks an OpenAI (or Azure OpenAI) chat model to explain a syntax error in a
flex or bison file and propose a short fix.
"""

import logging
from typing import Optional

from openai import AsyncAzureOpenAI, AsyncOpenAI

from structura.models.dialect import Dialect
from structura.utils.resilience import CircuitBreaker, create_llm_circuit_breaker, retry_with_backoff

logger = logging.getLogger(__name__)

MISSING_KEY_SUGGESTION = (
    "The AI assistant is not configured: set OPENAI_API_KEY (or the Azure OpenAI "
    "settings) for the analysis engine."
)


class AssistantUnavailableError(Exception):
    """Raised when the LLM provider cannot produce a suggestion."""
    pass


class RepairAssistant:
    """Wrapper for OpenAI/Azure OpenAI chat completions used for repair hints."""

    def __init__(self, settings=None, circuit_breaker: Optional[CircuitBreaker] = None):
        """Initialize the LLM client based on configuration."""
        if settings is None:
            from structura.config import settings as app_settings
            settings = app_settings

        self.circuit_breaker = circuit_breaker or create_llm_circuit_breaker()
        self.model = settings.assist_model
        self.client = None

        if settings.azure_openai_endpoint and settings.azure_openai_api_key:
            self.client = AsyncAzureOpenAI(
                api_key=settings.azure_openai_api_key,
                api_version="2024-02-15-preview",
                azure_endpoint=settings.azure_openai_endpoint,
            )
            self.model = settings.azure_openai_deployment or settings.assist_model
            logger.info("Initialized Azure OpenAI client")
        elif settings.openai_api_key:
            self.client = AsyncOpenAI(api_key=settings.openai_api_key)
            logger.info("Initialized OpenAI client")
        else:
            logger.warning("No OpenAI credentials configured; repair suggestions disabled")

    @property
    def is_configured(self) -> bool:
        return self.client is not None

    async def suggest_fix(
        self,
        code: str,
        dialect: Dialect,
        error_message: str,
        error_line: int,
    ) -> str:
        """
        Produce a repair suggestion for one syntax error.

        Args:
            code: Full source text
            dialect: Dialect of the source
            error_message: Error message reported by the parser
            error_line: 1-based line of the error

        Returns:
            Suggestion text, or a configuration notice when no key is set

        Raises:
            AssistantUnavailableError: If the provider call fails
        """
        if not self.is_configured:
            return MISSING_KEY_SUGGESTION

        prompt = self._build_prompt(code, Dialect(dialect), error_message, error_line)

        try:
            return await self.circuit_breaker.call(lambda: self._complete(prompt))
        except Exception as e:
            logger.error(f"LLM API call failed: {e}", exc_info=True)
            raise AssistantUnavailableError(f"Failed to get a suggestion: {e}") from e

    @retry_with_backoff(max_retries=2, base_delay=1.0)
    async def _complete(self, prompt: str) -> str:
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": "You are an expert compiler engineer."},
                {"role": "user", "content": prompt},
            ],
            temperature=0.3,
            max_tokens=500,
        )
        content = response.choices[0].message.content
        if not content:
            raise AssistantUnavailableError("Empty response from LLM")
        return content.strip()

    def _build_prompt(self, code: str, dialect: Dialect, error_message: str, error_line: int) -> str:
        return (
            f"The user is writing a {dialect.value} file. "
            f"There is a syntax error on line {error_line}: '{error_message}'. "
            f"Here is the user's code:\n\n{code}\n\n"
            "Explain why this error is happening and provide a short snippet to fix it."
        )
