"""Input dialect models."""

from enum import Enum

from pydantic import BaseModel


class Dialect(str, Enum):
    """Compiler-construction dialects understood by the analysis engine."""

    FLEX = "flex"
    BISON = "bison"


class DialectInfo(BaseModel):
    """Display label and canonical example of a dialect."""

    dialect: Dialect
    label: str
    example: str
