"""Unit tests for the engine parser."""

from structura.core.error_locator import find_first_error
from structura.engine.parser import parse
from structura.models.ast_node import (
    BisonAlternative,
    BisonFile,
    BisonGrammarRule,
    BisonTokenDecl,
    ErrorNode,
    FlexFile,
    FlexRule,
)
from structura.models.dialect import Dialect
from structura.services.dialects import DialectCatalog


class TestFlexParser:
    """Test suite for scanner-dialect parsing."""

    def test_single_rule(self):
        """Test one pattern/action rule between separators."""
        tree = parse("%%\n[0-9]+ { return NUMBER; }\n%%", Dialect.FLEX)

        assert isinstance(tree, FlexFile)
        assert tree.rules == [FlexRule(pattern="[0-9]+", action="return NUMBER;")]

    def test_empty_source(self):
        """Test empty input gives an empty file."""
        assert parse("", Dialect.FLEX) == FlexFile(rules=[])

    def test_literal_and_identifier_patterns(self):
        """Test quoted and bare-word patterns are accepted."""
        tree = parse('%%\n"if" { return IF; }\nwhile { return WHILE; }\n%%', Dialect.FLEX)

        assert [rule.pattern for rule in tree.rules] == ['"if"', "while"]

    def test_missing_action_block(self):
        """Test a pattern without an action becomes an error node."""
        tree = parse("%%\n[0-9]+\n%%", Dialect.FLEX)

        error = tree.rules[0]
        assert isinstance(error, ErrorNode)
        assert error.message == "Expected action block after pattern '[0-9]+'"
        assert (error.line, error.column) == (3, 1)

    def test_missing_action_at_end_of_input(self):
        """Test end-of-input errors point just past the last token."""
        tree = parse("%%\nabc", Dialect.FLEX)

        error = tree.rules[0]
        assert isinstance(error, ErrorNode)
        assert (error.line, error.column) == (2, 4)

    def test_missing_pattern(self):
        """Test an action without a pattern becomes an error node."""
        tree = parse("%%\n{ return X; }\n%%", Dialect.FLEX)

        error = tree.rules[0]
        assert isinstance(error, ErrorNode)
        assert error.message == "Expected regex pattern"
        assert (error.line, error.column) == (2, 1)


class TestBisonParser:
    """Test suite for grammar-dialect parsing."""

    def test_token_declaration(self):
        """Test %token collects the following names."""
        tree = parse("%token NUMBER WORD\n%%\n", Dialect.BISON)

        assert isinstance(tree, BisonFile)
        assert tree.declarations == [BisonTokenDecl(names=["NUMBER", "WORD"])]
        assert tree.rules == []

    def test_rule_with_alternatives(self):
        """Test alternatives, literals and actions."""
        source = "%%\nexpr:\n    expr '+' term { $$ = $1 + $3; }\n  | term\n  |\n  ;\n"
        tree = parse(source, Dialect.BISON)

        assert tree.rules == [BisonGrammarRule(name="expr", alternatives=[
            BisonAlternative(symbols=["expr", "'+'", "term"], action="$$ = $1 + $3;"),
            BisonAlternative(symbols=["term"]),
            BisonAlternative(symbols=[]),
        ])]

    def test_missing_semicolon(self):
        """Test an unterminated rule ends with an error alternative."""
        tree = parse("%%\nexpr: NUMBER\n", Dialect.BISON)

        rule = tree.rules[0]
        assert rule.alternatives[0] == BisonAlternative(symbols=["NUMBER"])
        error = rule.alternatives[1]
        assert isinstance(error, ErrorNode)
        assert error.message == "Expected ';' at end of rule 'expr'"
        assert (error.line, error.column) == (2, 13)

    def test_missing_colon(self):
        """Test a rule name without ':' becomes an error node."""
        tree = parse("%%\nexpr NUMBER ;\n", Dialect.BISON)

        error = tree.rules[0]
        assert isinstance(error, ErrorNode)
        assert error.message == "Expected ':' after rule name 'expr'"
        assert (error.line, error.column) == (2, 6)

    def test_epilogue_ignored(self):
        """Test text after the second separator is not parsed as grammar."""
        tree = parse("%%\na: B ;\n%%\nint main() { return 0; }\n", Dialect.BISON)

        assert len(tree.rules) == 1
        assert tree.rules[0].name == "a"

    def test_multiple_rules(self):
        """Test consecutive rules."""
        tree = parse("%%\na: B ;\nb: C D ;\n", Dialect.BISON)

        assert [rule.name for rule in tree.rules] == ["a", "b"]


def test_canonical_examples_parse_cleanly():
    """Test the packaged dialect examples contain no syntax errors."""
    catalog = DialectCatalog.load()

    for dialect in Dialect:
        assert find_first_error(parse(catalog.example(dialect), dialect)) is None
