"""Unit tests for the analysis session controller."""

import asyncio

import pytest

from structura.models.assist import AssistState, AssistStatus
from structura.models.ast_node import FlexFile, FlexRule
from structura.models.dialect import Dialect
from structura.models.engine_api import AnalyzeResponse
from structura.models.token import Token
from structura.services.analysis_session import AnalysisSessionController
from structura.services.assist_session import AssistSessionController
from structura.services.dialects import DialectCatalog
from structura.services.engine_client import EngineResponseError
from structura.utils.metrics import SessionMetrics


def _response(pattern):
    return AnalyzeResponse(
        tokens=[Token(token_type="Regex", value=pattern, line=1, column=1)],
        ast=FlexFile(rules=[FlexRule(pattern=pattern, action="return X;")]),
    )


class ScriptedEngine:
    """Engine stub answering each code text once its gate is opened."""

    def __init__(self):
        self.gates = {}
        self.errors = {}

    def gate(self, code):
        return self.gates.setdefault(code, asyncio.Event())

    async def analyze(self, code, dialect):
        await self.gate(code).wait()
        if code in self.errors:
            raise self.errors[code]
        return _response(code)


@pytest.fixture
def catalog():
    """Load the packaged dialect catalogue."""
    return DialectCatalog.load()


def _controller(engine, catalog, metrics=None):
    assist = AssistSessionController(engine)
    return AnalysisSessionController(engine, catalog, assist, metrics=metrics)


def test_initial_state(catalog):
    """Test the session starts on the dialect's example with no tree."""
    controller = _controller(ScriptedEngine(), catalog)

    assert controller.state.dialect == Dialect.FLEX
    assert controller.state.source_text == catalog.example(Dialect.FLEX)
    assert controller.state.tokens == []
    assert controller.state.ast is None


@pytest.mark.asyncio
async def test_edit_applies_response(catalog):
    """Test a successful round trip replaces tokens and tree."""
    engine = ScriptedEngine()
    controller = _controller(engine, catalog)

    task = controller.edit_source("[a-z]+")
    assert controller.state.source_text == "[a-z]+"
    engine.gate("[a-z]+").set()

    assert await task is True
    assert controller.state.ast.rules[0].pattern == "[a-z]+"
    assert controller.state.tokens[0].value == "[a-z]+"


@pytest.mark.asyncio
async def test_stale_response_discarded(catalog):
    """Test only the latest submission may replace the tree."""
    engine = ScriptedEngine()
    metrics = SessionMetrics()
    controller = _controller(engine, catalog, metrics)

    older = controller.edit_source("old")
    newer = controller.edit_source("new")

    engine.gate("new").set()
    assert await newer is True
    engine.gate("old").set()
    assert await older is False

    assert controller.state.source_text == "new"
    assert controller.state.ast.rules[0].pattern == "new"
    assert metrics.analyses_requested == 2
    assert metrics.analyses_applied == 1
    assert metrics.analyses_discarded == 1


@pytest.mark.asyncio
async def test_failure_keeps_previous_tree_and_text(catalog):
    """Test a failed round trip leaves tokens and tree untouched."""
    engine = ScriptedEngine()
    metrics = SessionMetrics()
    controller = _controller(engine, catalog, metrics)

    engine.gate("good").set()
    await controller.edit_source("good")
    previous_ast = controller.state.ast

    engine.errors["bad"] = EngineResponseError("Engine returned status 500", status_code=500)
    engine.gate("bad").set()
    assert await controller.edit_source("bad") is False

    assert controller.state.source_text == "bad"
    assert controller.state.ast == previous_ast
    assert metrics.analyses_failed == 1


@pytest.mark.asyncio
async def test_edit_resets_assist(catalog):
    """Test an edit returns the assist state to idle."""
    engine = ScriptedEngine()
    controller = _controller(engine, catalog)
    controller._assist.state = AssistState(status=AssistStatus.SUCCESS, text="old hint")

    controller.edit_source("x")

    assert controller._assist.state.status == AssistStatus.IDLE
    engine.gate("x").set()
    await controller.wait_idle()


@pytest.mark.asyncio
async def test_switch_dialect_resets_session(catalog):
    """Test a dialect switch clears tokens, tree and assist state."""
    engine = ScriptedEngine()
    controller = _controller(engine, catalog)
    engine.gate("x").set()
    await controller.edit_source("x")
    controller._assist.state = AssistState(status=AssistStatus.FAILURE, text="offline")

    controller.switch_dialect(Dialect.BISON)

    assert controller.state.dialect == Dialect.BISON
    assert controller.state.source_text == catalog.example(Dialect.BISON)
    assert controller.state.tokens == []
    assert controller.state.ast is None
    assert controller._assist.state.status == AssistStatus.IDLE


@pytest.mark.asyncio
async def test_switch_discards_in_flight_analysis(catalog):
    """Test a response for text typed before a switch is discarded."""
    engine = ScriptedEngine()
    controller = _controller(engine, catalog)

    task = controller.edit_source("typed")
    controller.switch_dialect(Dialect.BISON)
    engine.gate("typed").set()

    assert await task is False
    assert controller.state.ast is None


def test_listeners_notified_on_switch(catalog):
    """Test listeners run after a dialect switch."""
    controller = _controller(ScriptedEngine(), catalog)
    calls = []
    controller.add_listener(lambda: calls.append(controller.state.dialect))

    controller.switch_dialect(Dialect.BISON)

    assert calls == [Dialect.BISON]
    assert controller.generation == 1
