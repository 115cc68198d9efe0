"""
Metrics collection and emission for observability.

This module provides metrics tracking for:
- Analysis round trips (requested, applied, discarded as stale, failed)
- Assist requests and their outcomes
- Engine API call latency
"""

import time
from typing import Optional, Dict, Any
from contextlib import asynccontextmanager

from structura.utils.logging import get_logger, log_api_call

logger = get_logger(__name__)


class SessionMetrics:
    """
    Collects metrics for one workbench session.

    Tracks:
    - Analysis submissions and what happened to their responses
    - Assist requests, rejections and outcomes
    - API call counts and latency per service
    """

    def __init__(self, session_id: str = "default"):
        self.session_id = session_id

        # Analysis metrics
        self.analyses_requested: int = 0
        self.analyses_applied: int = 0
        self.analyses_discarded: int = 0
        self.analyses_failed: int = 0

        # Assist metrics
        self.assists_requested: int = 0
        self.assists_rejected: int = 0
        self.assists_succeeded: int = 0
        self.assists_failed: int = 0

        # API metrics
        self.api_calls: Dict[str, int] = {}
        # Running aggregates per service: count, total_ms, min_ms, max_ms
        self.api_latencies: Dict[str, Dict[str, float]] = {}

    def record_analysis(self, outcome: str) -> None:
        """
        Record an analysis event.

        Args:
            outcome: 'requested', 'applied', 'discarded' or 'failed'
        """
        attribute = f"analyses_{outcome}"
        setattr(self, attribute, getattr(self, attribute) + 1)

    def record_assist(self, outcome: str) -> None:
        """
        Record an assist event.

        Args:
            outcome: 'requested', 'rejected', 'succeeded' or 'failed'
        """
        attribute = f"assists_{outcome}"
        setattr(self, attribute, getattr(self, attribute) + 1)

    def record_api_call(self, service: str, duration_ms: float) -> None:
        """
        Record API call and latency.

        Args:
            service: Service name (e.g., 'engine.analyze')
            duration_ms: Call duration in milliseconds
        """
        self.api_calls[service] = self.api_calls.get(service, 0) + 1

        stats = self.api_latencies.get(service)
        if stats is None:
            self.api_latencies[service] = {
                "count": 1,
                "total_ms": duration_ms,
                "min_ms": duration_ms,
                "max_ms": duration_ms,
            }
            return
        stats["count"] += 1
        stats["total_ms"] += duration_ms
        stats["min_ms"] = min(stats["min_ms"], duration_ms)
        stats["max_ms"] = max(stats["max_ms"], duration_ms)

    def get_metrics_summary(self) -> Dict[str, Any]:
        """
        Get summary of collected metrics.

        Returns:
            Dictionary of metrics
        """
        summary = {
            "session_id": self.session_id,
            "analyses_requested": self.analyses_requested,
            "analyses_applied": self.analyses_applied,
            "analyses_discarded": self.analyses_discarded,
            "analyses_failed": self.analyses_failed,
            "assists_requested": self.assists_requested,
            "assists_rejected": self.assists_rejected,
            "assists_succeeded": self.assists_succeeded,
            "assists_failed": self.assists_failed,
            "api_calls": self.api_calls,
        }

        if self.api_latencies:
            latency_stats = {}
            for service, stats in self.api_latencies.items():
                latency_stats[service] = {
                    "count": int(stats["count"]),
                    "min_ms": round(stats["min_ms"], 2),
                    "max_ms": round(stats["max_ms"], 2),
                    "avg_ms": round(stats["total_ms"] / stats["count"], 2),
                }
            summary["api_latencies"] = latency_stats

        return summary

    def complete(self) -> Dict[str, Any]:
        """
        Mark the session finished and emit its counters.

        Returns:
            The final metrics summary
        """
        summary = self.get_metrics_summary()

        logger.info(
            f"Metrics collection completed for session {self.session_id}",
            extra={
                "session_id": self.session_id,
                "analyses_requested": self.analyses_requested,
                "analyses_applied": self.analyses_applied,
                "analyses_discarded": self.analyses_discarded,
                "analyses_failed": self.analyses_failed,
                "assists_requested": self.assists_requested,
                "assists_succeeded": self.assists_succeeded,
                "assists_failed": self.assists_failed,
            }
        )

        for service, stats in summary.get("api_latencies", {}).items():
            emit_metric("api_latency_avg_ms", stats["avg_ms"], session_id=self.session_id, service=service)

        return summary


@asynccontextmanager
async def track_api_call(
    metrics: Optional[SessionMetrics],
    service: str,
    endpoint: str,
    method: str,
    logger_adapter
):
    """
    Context manager to track API call timing.

    Usage:
        async with track_api_call(metrics, "engine", "/analyze", "POST", logger):
            response = await client.post("/analyze", json=body)

    Args:
        metrics: Session metrics (optional)
        service: Service name
        endpoint: API endpoint
        method: HTTP method
        logger_adapter: Logger for logging API calls

    Yields:
        None
    """
    start_time = time.time()
    error = None

    try:
        yield
    except Exception as e:
        error = e
        raise
    finally:
        duration_ms = (time.time() - start_time) * 1000

        if metrics:
            metrics.record_api_call(service, duration_ms)

        log_api_call(
            logger_adapter,
            service=service,
            endpoint=endpoint,
            method=method,
            duration_ms=duration_ms,
            error=str(error) if error else None
        )


def emit_metric(metric_name: str, value: float, **tags: Any) -> None:
    """
    Emit a metric as a structured log record.

    Args:
        metric_name: Metric name
        value: Metric value
        **tags: Metric tags/labels
    """
    logger.info(
        f"Metric: {metric_name}",
        extra={
            "metric_name": metric_name,
            "metric_value": value,
            "metric_tags": tags,
        }
    )
