"""Structura: grammar workbench for flex and bison sources."""

__version__ = "0.1.0"
