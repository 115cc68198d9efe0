"""
Editor diagnostic bridge.

Projects the located error onto the text editor as a single marker. The
editor is reached through the ``MarkerSink`` interface, whose
``set_model_markers`` call replaces every marker of one owner at once.
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Optional

from structura.models.diagnostic import ErrorLocation, Marker, MarkerSeverity


logger = logging.getLogger(__name__)

MARKER_OWNER = "compiler"

# Fixed-width highlight past the reported column. This does not follow the
# real token length; the engine reports no end position.
HIGHLIGHT_WIDTH = 10


class MarkerSink(ABC):
    """Editor capability to hold markers keyed by owner."""

    @abstractmethod
    def set_model_markers(self, owner: str, markers: List[Marker]) -> None:
        """
        Replace all markers of ``owner``; an empty list clears them.

        Args:
            owner: Marker source identity
            markers: New markers for that owner
        """
        pass


class EditorModel(MarkerSink):
    """
    In-process text editor model.

    Holds the editor text, fires ``on_change`` for user edits, and stores
    markers per owner so independent sources never overwrite each other.
    """

    def __init__(self, text: str = "", on_change: Optional[Callable[[str], None]] = None):
        self.text = text
        self.on_change = on_change
        self._markers: Dict[str, List[Marker]] = {}

    def type_text(self, text: str) -> None:
        """Apply a user edit and notify the change callback."""
        self.text = text
        if self.on_change is not None:
            self.on_change(text)

    def set_value(self, text: str) -> None:
        """Replace the text programmatically without firing ``on_change``."""
        self.text = text

    def set_model_markers(self, owner: str, markers: List[Marker]) -> None:
        if markers:
            self._markers[owner] = list(markers)
        else:
            self._markers.pop(owner, None)

    def get_markers(self, owner: Optional[str] = None) -> List[Marker]:
        """Markers of one owner, or of every owner when ``owner`` is None."""
        if owner is not None:
            return list(self._markers.get(owner, []))
        return [marker for markers in self._markers.values() for marker in markers]


def build_marker(error: ErrorLocation, owner: str = MARKER_OWNER) -> Marker:
    """Build the single error marker for a located error."""
    return Marker(
        owner=owner,
        severity=MarkerSeverity.ERROR,
        message=error.message,
        start_line_number=error.line,
        start_column=error.column,
        end_line_number=error.line,
        end_column=error.column + HIGHLIGHT_WIDTH,
    )


class EditorDiagnosticBridge:
    """Keeps the editor's ``compiler`` markers in step with the located error."""

    def __init__(self, sink: MarkerSink, owner: str = MARKER_OWNER):
        self.sink = sink
        self.owner = owner

    def update(self, error: Optional[ErrorLocation]) -> None:
        """
        Install one marker for ``error`` or clear this bridge's markers.

        Args:
            error: Located error, or None when the tree has no error
        """
        if error is None:
            self.sink.set_model_markers(self.owner, [])
            return

        self.sink.set_model_markers(self.owner, [build_marker(error, self.owner)])
        logger.debug(
            f"Diagnostic marker at {error.line}:{error.column}",
            extra={"error_line": error.line, "error_column": error.column},
        )
