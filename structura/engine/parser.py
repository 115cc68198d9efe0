"""
Recovering parser for the flex and bison dialects.

Syntax errors never abort a parse: each one becomes an ``ErrorNode`` placed
where the expected node would have been, and parsing resumes after the
offending token.
"""

from typing import List, Optional

from structura.engine.lexer import TokenType, scan
from structura.models.ast_node import (
    ASTNode,
    BisonAlternative,
    BisonFile,
    BisonGrammarRule,
    BisonTokenDecl,
    ErrorNode,
    FlexFile,
    FlexRule,
)
from structura.models.dialect import Dialect
from structura.models.token import Token


_FLEX_PATTERN_TYPES = (TokenType.REGEX.value, TokenType.IDENTIFIER.value, TokenType.LITERAL.value)
_BISON_SYMBOL_TYPES = (TokenType.IDENTIFIER.value, TokenType.LITERAL.value)


class GrammarParser:
    """Parser over a token list produced by ``scan``."""

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.current = 0

    def _peek(self) -> Optional[Token]:
        if self.current < len(self.tokens):
            return self.tokens[self.current]
        return None

    def _advance(self) -> Optional[Token]:
        token = self._peek()
        if token is not None:
            self.current += 1
        return token

    def _at_end(self) -> bool:
        return self.current >= len(self.tokens)

    def _end_position(self) -> tuple:
        """Position reported for errors found at end of input."""
        if not self.tokens:
            return 1, 1
        last = self.tokens[-1]
        return last.line, last.column + len(last.value)

    def _error(self, message: str, token: Optional[Token]) -> ErrorNode:
        if token is None:
            line, column = self._end_position()
        else:
            line, column = token.line, token.column
        return ErrorNode(message=message, line=line, column=column)

    # Flex

    def parse_flex_program(self) -> FlexFile:
        rules: List[ASTNode] = []
        while not self._at_end():
            if self._peek().token_type == TokenType.SECTION_SEPARATOR.value:
                self._advance()
                continue
            rules.append(self._parse_flex_rule())
        return FlexFile(rules=rules)

    def _parse_flex_rule(self) -> ASTNode:
        pattern = self._advance()
        if pattern is None or pattern.token_type not in _FLEX_PATTERN_TYPES:
            return self._error("Expected regex pattern", pattern)

        action = self._advance()
        if action is None or action.token_type != TokenType.ACTION_BLOCK.value:
            return self._error(f"Expected action block after pattern '{pattern.value}'", action)

        return FlexRule(pattern=pattern.value, action=action.value)

    # Bison

    def parse_bison_program(self) -> BisonFile:
        declarations: List[ASTNode] = []
        rules: List[ASTNode] = []

        while not self._at_end():
            token = self._advance()
            if token.token_type == TokenType.SECTION_SEPARATOR.value:
                break
            if token.token_type == TokenType.BISON_KEYWORD.value and token.value == "%token":
                names = []
                while self._peek() is not None and self._peek().token_type == TokenType.IDENTIFIER.value:
                    names.append(self._advance().value)
                declarations.append(BisonTokenDecl(names=names))

        while not self._at_end():
            token = self._peek()
            if token.token_type == TokenType.SECTION_SEPARATOR.value:
                # Epilogue follows; it is C code, not grammar
                break
            if token.token_type == TokenType.IDENTIFIER.value:
                rules.append(self._parse_bison_rule())
            else:
                self._advance()

        return BisonFile(declarations=declarations, rules=rules)

    def _parse_bison_rule(self) -> ASTNode:
        name = self._advance()
        colon = self._advance()
        if colon is None or colon.token_type != TokenType.COLON.value:
            return self._error(f"Expected ':' after rule name '{name.value}'", colon or name)

        alternatives: List[ASTNode] = []
        symbols: List[str] = []
        action: Optional[str] = None

        while True:
            token = self._peek()
            if token is None or token.token_type == TokenType.SECTION_SEPARATOR.value:
                if symbols or action is not None:
                    alternatives.append(BisonAlternative(symbols=symbols, action=action))
                alternatives.append(self._error(f"Expected ';' at end of rule '{name.value}'", token))
                break

            self._advance()
            if token.token_type in _BISON_SYMBOL_TYPES:
                symbols.append(token.value)
            elif token.token_type == TokenType.ACTION_BLOCK.value:
                action = token.value
            elif token.token_type == TokenType.PIPE.value:
                alternatives.append(BisonAlternative(symbols=symbols, action=action))
                symbols, action = [], None
            elif token.token_type == TokenType.SEMICOLON.value:
                alternatives.append(BisonAlternative(symbols=symbols, action=action))
                break

        return BisonGrammarRule(name=name.value, alternatives=alternatives)


def parse(source: str, dialect: Dialect) -> ASTNode:
    """
    Parse source text of either dialect.

    Args:
        source: Full source text
        dialect: Dialect selecting the grammar

    Returns:
        ``FlexFile`` or ``BisonFile`` root, with errors embedded as ``ErrorNode``
    """
    parser = GrammarParser(scan(source))
    if Dialect(dialect) == Dialect.BISON:
        return parser.parse_bison_program()
    return parser.parse_flex_program()
