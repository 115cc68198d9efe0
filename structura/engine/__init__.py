"""Analysis engine: lexer, recovering parser and repair assistant."""

from structura.engine.lexer import Lexer, TokenType, scan
from structura.engine.parser import GrammarParser, parse

__all__ = [
    'Lexer',
    'TokenType',
    'scan',
    'GrammarParser',
    'parse',
]
