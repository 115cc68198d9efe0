"""Token data models."""

from pydantic import BaseModel, ConfigDict, Field


class Token(BaseModel):
    """A lexical token produced by the analysis engine."""

    model_config = ConfigDict(frozen=True)

    token_type: str
    value: str
    line: int = Field(..., ge=1)
    column: int = Field(..., ge=1)
