"""
Dialect catalogue.

Holds the display label and canonical example text of each dialect, loaded
from ``dialects.yaml``. Switching dialect always resets the editor to the
example text registered here.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from structura.models.dialect import Dialect, DialectInfo


logger = logging.getLogger(__name__)

DIALECTS_FILE = Path(__file__).resolve().parent.parent / "dialects.yaml"


class DialectCatalogError(Exception):
    """Raised when the dialect catalogue is missing or incomplete."""
    pass


class DialectCatalog:
    """Canonical examples keyed by dialect."""

    def __init__(self, entries: Dict[Dialect, DialectInfo]):
        missing = [d.value for d in Dialect if d not in entries]
        if missing:
            raise DialectCatalogError(f"No catalogue entry for dialect(s): {', '.join(missing)}")
        self._entries = entries

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "DialectCatalog":
        """
        Load the catalogue from a YAML file.

        Args:
            path: YAML file, defaults to the packaged ``dialects.yaml``

        Returns:
            Loaded catalogue

        Raises:
            DialectCatalogError: If the file cannot be read or lacks a dialect
        """
        path = path or DIALECTS_FILE
        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise DialectCatalogError(f"Failed to load dialect catalogue {path}: {e}") from e

        entries: Dict[Dialect, DialectInfo] = {}
        for key, value in raw.items():
            try:
                dialect = Dialect(key)
            except ValueError:
                logger.warning(f"Ignoring unknown dialect in catalogue: {key}")
                continue
            entries[dialect] = DialectInfo(
                dialect=dialect,
                label=value.get("label", dialect.value.title()),
                example=value.get("example", ""),
            )

        logger.debug(f"Loaded {len(entries)} dialects from {path}")
        return cls(entries)

    def info(self, dialect: Dialect) -> DialectInfo:
        return self._entries[Dialect(dialect)]

    def example(self, dialect: Dialect) -> str:
        """Canonical example text of a dialect."""
        return self.info(dialect).example

    def all(self) -> List[DialectInfo]:
        return [self._entries[d] for d in Dialect]


_catalog: Optional[DialectCatalog] = None


def get_dialect_catalog() -> DialectCatalog:
    """
    Get or load the global dialect catalogue.

    Returns:
        DialectCatalog instance
    """
    global _catalog
    if _catalog is None:
        _catalog = DialectCatalog.load()
    return _catalog
