"""Unit tests for the dialect catalogue."""

import pytest

from structura.models.dialect import Dialect, DialectInfo
from structura.services.dialects import DialectCatalog, DialectCatalogError


def test_load_packaged_catalogue():
    """Test the packaged catalogue covers both dialects."""
    catalog = DialectCatalog.load()

    assert [info.dialect for info in catalog.all()] == [Dialect.FLEX, Dialect.BISON]
    assert catalog.info(Dialect.FLEX).label == "Flex"
    assert catalog.example(Dialect.FLEX).startswith("%%\n[0-9]+")
    assert catalog.example("bison").startswith("%token NUMBER WORD\n%%\n")


def test_missing_dialect_rejected():
    """Test a catalogue without every dialect is rejected."""
    with pytest.raises(DialectCatalogError):
        DialectCatalog({Dialect.FLEX: DialectInfo(dialect=Dialect.FLEX, label="Flex", example="")})


def test_load_custom_file(tmp_path):
    """Test loading a catalogue file, ignoring unknown dialects."""
    path = tmp_path / "dialects.yaml"
    path.write_text(
        "flex:\n  label: Lex\n  example: '%%'\n"
        "bison:\n  example: '%%'\n"
        "antlr:\n  example: grammar X;\n"
    )

    catalog = DialectCatalog.load(path)

    assert catalog.info(Dialect.FLEX).label == "Lex"
    assert catalog.info(Dialect.BISON).label == "Bison"


def test_load_missing_file(tmp_path):
    """Test a missing file raises DialectCatalogError."""
    with pytest.raises(DialectCatalogError):
        DialectCatalog.load(tmp_path / "missing.yaml")
