"""
Unit tests for AST node models.
"""

import pytest
from pydantic import ValidationError

from structura.models.ast_node import (
    BisonAlternative,
    BisonFile,
    BisonGrammarRule,
    BisonTokenDecl,
    ErrorNode,
    FlexFile,
    FlexRule,
    UnknownNode,
    parse_ast,
)
from structura.models.engine_api import AnalyzeResponse


def test_parse_flex_file():
    """Test parsing a scanner tree from engine JSON."""
    node = parse_ast({
        "type": "FlexFile",
        "rules": [{"type": "FlexRule", "pattern": "[0-9]+", "action": "return NUMBER;"}],
    })

    assert isinstance(node, FlexFile)
    assert len(node.rules) == 1
    assert isinstance(node.rules[0], FlexRule)
    assert node.rules[0].pattern == "[0-9]+"
    assert node.rules[0].action == "return NUMBER;"


def test_parse_bison_file_with_nested_nodes():
    """Test parsing a grammar tree with every nested variant."""
    node = parse_ast({
        "type": "BisonFile",
        "declarations": [{"type": "BisonTokenDecl", "names": ["NUMBER", "WORD"]}],
        "rules": [{
            "type": "BisonGrammarRule",
            "name": "expr",
            "alternatives": [
                {"type": "BisonAlternative", "symbols": ["expr", "'+'", "term"], "action": "$$ = $1 + $3;"},
                {"type": "BisonAlternative", "symbols": []},
                {"type": "Error", "line": 4, "column": 2, "message": "Expected ';'"},
            ],
        }],
    })

    assert isinstance(node, BisonFile)
    assert isinstance(node.declarations[0], BisonTokenDecl)
    rule = node.rules[0]
    assert isinstance(rule, BisonGrammarRule)
    assert isinstance(rule.alternatives[0], BisonAlternative)
    assert rule.alternatives[1].action is None
    assert isinstance(rule.alternatives[2], ErrorNode)
    assert rule.alternatives[2].line == 4


def test_error_node_substitutes_for_any_child():
    """Test an error node is accepted in place of a rule."""
    node = parse_ast({"type": "FlexFile", "rules": [{"type": "Error", "message": "bad"}]})

    assert isinstance(node.rules[0], ErrorNode)
    assert node.rules[0].line is None
    assert node.rules[0].column is None


def test_unknown_type_is_preserved():
    """Test unknown node types load as UnknownNode with their fields."""
    node = parse_ast({"type": "LexState", "name": "COMMENT"})

    assert isinstance(node, UnknownNode)
    assert node.type == "LexState"
    assert node.model_extra["name"] == "COMMENT"


def test_missing_type_is_unknown():
    """Test a node without a type tag loads as UnknownNode."""
    node = parse_ast({"pattern": "x"})

    assert isinstance(node, UnknownNode)
    assert node.type is None


def test_absent_child_lists_default_to_empty():
    """Test absent lists are treated as empty."""
    flex = parse_ast({"type": "FlexFile"})
    bison = parse_ast({"type": "BisonFile"})

    assert flex.rules == []
    assert bison.declarations == []
    assert bison.rules == []


def test_string_leaf():
    """Test string leaves are kept as strings."""
    assert parse_ast("NUMBER") == "NUMBER"


def test_non_node_payload_rejected():
    """Test payloads that are neither objects nor strings fail validation."""
    with pytest.raises(ValidationError):
        parse_ast(42)


def test_analyze_response_round_trip():
    """Test an analyze response serializes the tree with type tags."""
    response = AnalyzeResponse(
        tokens=[],
        ast=FlexFile(rules=[FlexRule(pattern="a", action="b")]),
    )

    data = response.model_dump(mode="json")

    assert data["ast"]["type"] == "FlexFile"
    assert data["ast"]["rules"][0]["type"] == "FlexRule"
    assert isinstance(AnalyzeResponse.model_validate(data).ast, FlexFile)
