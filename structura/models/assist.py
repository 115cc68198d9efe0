"""Assist session data models."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class AssistStatus(str, Enum):
    """Lifecycle of an AI repair request."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    FAILURE = "failure"


class AssistState(BaseModel):
    """Current assist status plus the text shown once it resolves."""

    status: AssistStatus = AssistStatus.IDLE
    text: Optional[str] = None
