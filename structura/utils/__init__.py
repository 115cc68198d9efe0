"""
Utility modules for Structura.
"""

from structura.utils.logging import (
    get_logger,
    setup_logging,
    log_state_transition,
    log_api_call,
    log_error_with_context,
)
from structura.utils.metrics import (
    SessionMetrics,
    track_api_call,
    emit_metric,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "log_state_transition",
    "log_api_call",
    "log_error_with_context",
    "SessionMetrics",
    "track_api_call",
    "emit_metric",
]
