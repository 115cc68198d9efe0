"""
Analysis engine REST API endpoints.
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException

from structura.engine.assistant import AssistantUnavailableError, RepairAssistant
from structura.engine.lexer import scan
from structura.engine.parser import parse
from structura.models.engine_api import (
    AnalyzeRequest,
    AnalyzeResponse,
    AssistRequest,
    AssistResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["engine"])

_assistant: Optional[RepairAssistant] = None


def get_assistant() -> RepairAssistant:
    """Get or create the repair assistant."""
    global _assistant
    if _assistant is None:
        _assistant = RepairAssistant()
    return _assistant


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze(request: AnalyzeRequest) -> AnalyzeResponse:
    """
    Tokenize and parse source text.

    Args:
        request: Source text and dialect

    Returns:
        Token stream and AST; syntax errors are embedded in the AST
    """
    tokens = scan(request.code)
    ast = parse(request.code, request.language)
    logger.debug(f"Analyzed {request.language.value} source: {len(tokens)} tokens")
    return AnalyzeResponse(tokens=tokens, ast=ast)


@router.post("/assist", response_model=AssistResponse)
async def assist(request: AssistRequest) -> AssistResponse:
    """
    Ask the AI assistant how to fix one syntax error.

    Args:
        request: Source text, dialect and the error to explain

    Returns:
        Suggestion text

    Raises:
        HTTPException: 502 if the AI provider cannot be reached
    """
    try:
        logger.info(f"Assist requested for {request.language.value} error on line {request.error_line}")
        suggestion = await get_assistant().suggest_fix(
            request.code,
            request.language,
            request.error_message,
            request.error_line,
        )
        return AssistResponse(suggestion=suggestion)

    except AssistantUnavailableError as e:
        logger.error(f"Assist failed: {e}")
        raise HTTPException(status_code=502, detail="AI provider request failed")
