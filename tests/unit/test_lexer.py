"""Unit tests for the engine lexer."""

from structura.engine.lexer import TokenType, scan


def _types(tokens):
    return [token.token_type for token in tokens]


class TestLexer:
    """Test suite for scan()."""

    def test_empty_source(self):
        """Test empty input yields no tokens."""
        assert scan("") == []

    def test_flex_rule_tokens(self):
        """Test a scanner rule between separators."""
        tokens = scan("%%\n[0-9]+ { return NUMBER; }\n%%")

        assert _types(tokens) == [
            TokenType.SECTION_SEPARATOR.value,
            TokenType.REGEX.value,
            TokenType.ACTION_BLOCK.value,
            TokenType.SECTION_SEPARATOR.value,
        ]
        assert tokens[1].value == "[0-9]+"
        assert tokens[2].value == "return NUMBER;"

    def test_positions_are_one_based(self):
        """Test line and column tracking across lines."""
        tokens = scan("%%\n[0-9]+ { return NUMBER; }\n%%")

        assert (tokens[0].line, tokens[0].column) == (1, 1)
        assert (tokens[1].line, tokens[1].column) == (2, 1)
        assert (tokens[2].line, tokens[2].column) == (2, 8)
        assert (tokens[3].line, tokens[3].column) == (3, 1)

    def test_bison_declaration_tokens(self):
        """Test keywords and identifiers in the declarations section."""
        tokens = scan("%token NUMBER WORD\n%%")

        assert _types(tokens) == [
            TokenType.BISON_KEYWORD.value,
            TokenType.IDENTIFIER.value,
            TokenType.IDENTIFIER.value,
            TokenType.SECTION_SEPARATOR.value,
        ]
        assert [t.value for t in tokens[:3]] == ["%token", "NUMBER", "WORD"]

    def test_bison_rule_punctuation(self):
        """Test colon, pipe, semicolon and quoted literals."""
        tokens = scan("expr: expr '+' term | term ;")

        assert _types(tokens) == [
            TokenType.IDENTIFIER.value,
            TokenType.COLON.value,
            TokenType.IDENTIFIER.value,
            TokenType.LITERAL.value,
            TokenType.IDENTIFIER.value,
            TokenType.PIPE.value,
            TokenType.IDENTIFIER.value,
            TokenType.SEMICOLON.value,
        ]
        assert tokens[3].value == "'+'"

    def test_nested_action_block(self):
        """Test balanced braces inside an action block."""
        tokens = scan("x { if (a) { b(); } }")

        assert tokens[1].token_type == TokenType.ACTION_BLOCK.value
        assert tokens[1].value == "if (a) { b(); }"

    def test_multiline_action_advances_line(self):
        """Test tokens after a multi-line action keep correct positions."""
        tokens = scan("a {\n  x;\n}\nb")

        assert tokens[-1].value == "b"
        assert (tokens[-1].line, tokens[-1].column) == (4, 1)

    def test_unterminated_literal_runs_to_end(self):
        """Test an unterminated literal consumes the rest of the input."""
        tokens = scan("'abc")

        assert len(tokens) == 1
        assert tokens[0].token_type == TokenType.LITERAL.value
        assert tokens[0].value == "'abc"
