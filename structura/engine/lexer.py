"""
Lexer shared by the flex and bison dialects.

Produces the token stream returned by ``/analyze``. Whitespace separates
tokens and is not emitted; lines and columns are 1-based.
"""

from enum import Enum
from typing import List

from structura.models.token import Token


class TokenType(str, Enum):
    """Token categories emitted by the lexer."""

    SECTION_SEPARATOR = "SectionSeparator"  # %%
    ACTION_BLOCK = "ActionBlock"            # { ... }
    BISON_KEYWORD = "BisonKeyword"          # %token, %left, ...
    IDENTIFIER = "Identifier"
    LITERAL = "Literal"                     # '+', "text"
    REGEX = "Regex"                         # flex patterns and anything unrecognised
    COLON = "Colon"
    PIPE = "Pipe"
    SEMICOLON = "Semicolon"


_PUNCTUATION = {
    ":": TokenType.COLON,
    "|": TokenType.PIPE,
    ";": TokenType.SEMICOLON,
}

_PATTERN_STOP = frozenset(" \t\r\n{")


class Lexer:
    """Single-pass scanner over one source text."""

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []

    def _peek(self, offset: int = 0) -> str:
        index = self.pos + offset
        return self.source[index] if index < len(self.source) else ""

    def _advance(self) -> str:
        char = self.source[self.pos]
        self.pos += 1
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return char

    def _emit(self, token_type: TokenType, value: str, line: int, column: int) -> None:
        self.tokens.append(Token(token_type=token_type.value, value=value, line=line, column=column))

    def scan(self) -> List[Token]:
        while self.pos < len(self.source):
            char = self._peek()
            line, column = self.line, self.column

            if char in " \t\r\n":
                self._advance()
            elif char in _PUNCTUATION:
                self._advance()
                self._emit(_PUNCTUATION[char], char, line, column)
            elif char in "'\"":
                self._emit(TokenType.LITERAL, self._quoted(char), line, column)
            elif char == "%":
                self._percent(line, column)
            elif char == "{":
                self._emit(TokenType.ACTION_BLOCK, self._action_block(), line, column)
            elif char.isalpha() or char == "_":
                self._emit(TokenType.IDENTIFIER, self._identifier(), line, column)
            else:
                self._emit(TokenType.REGEX, self._pattern(), line, column)

        return self.tokens

    def _quoted(self, quote: str) -> str:
        # Unterminated literals run to the end of the input
        value = self._advance()
        while self.pos < len(self.source):
            char = self._advance()
            value += char
            if char == quote:
                break
        return value

    def _percent(self, line: int, column: int) -> None:
        self._advance()
        if self._peek() == "%":
            self._advance()
            self._emit(TokenType.SECTION_SEPARATOR, "%%", line, column)
            return
        keyword = "%"
        while self._peek().isalpha():
            keyword += self._advance()
        self._emit(TokenType.BISON_KEYWORD, keyword, line, column)

    def _action_block(self) -> str:
        self._advance()
        depth = 1
        body = []
        while self.pos < len(self.source):
            char = self._advance()
            if char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    break
            body.append(char)
        return "".join(body).strip()

    def _identifier(self) -> str:
        start = self.pos
        while self._peek() and (self._peek().isalnum() or self._peek() == "_"):
            self._advance()
        return self.source[start:self.pos]

    def _pattern(self) -> str:
        start = self.pos
        while self._peek() and self._peek() not in _PATTERN_STOP:
            self._advance()
        return self.source[start:self.pos]


def scan(source: str) -> List[Token]:
    """
    Tokenize flex or bison source text.

    Args:
        source: Full source text

    Returns:
        Tokens in source order
    """
    return Lexer(source).scan()
