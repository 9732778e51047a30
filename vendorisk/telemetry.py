"""
Scoring telemetry.

Only categorical and numeric attributes are emitted. Never response
values, question text or vendor identifiers.
"""
import logging
from typing import Literal

from azure.monitor.opentelemetry import configure_azure_monitor
from opentelemetry.trace import get_current_span

from vendorisk.config import get_settings

logger = logging.getLogger("vendorisk.telemetry")

RISK_LEVELS = ("LOW", "MEDIUM", "HIGH", "CRITICAL", "UNKNOWN")


def init_telemetry():
    """
    Initialize Azure Application Insights via OpenTelemetry.
    Does nothing when no connection string is configured (local / tests).
    """
    connection_string = get_settings().appinsights_connection_string

    if not connection_string:
        return

    configure_azure_monitor(
        connection_string=connection_string
    )
    logger.info("Telemetry exporter configured")


def emit_scoring_telemetry(
    scoring_latency_ms: int,
    risk_score: int,
    risk_level: str,
    score_scale: Literal["legacy", "normalized"],
):
    """
    Emit a single span event for a scoring run. Attributes are fixed.
    """
    assert isinstance(scoring_latency_ms, int), "scoring_latency_ms must be int"
    assert isinstance(risk_score, int), "risk_score must be int"
    assert risk_level in RISK_LEVELS, f"risk_level must be one of {RISK_LEVELS}, got {risk_level}"
    assert score_scale in ("legacy", "normalized"), f"score_scale must be 'legacy' or 'normalized', got {score_scale}"

    span = get_current_span()
    if not span:
        return

    span.add_event(
        name="vendorisk.scoring",
        attributes={
            "scoring_latency_ms": scoring_latency_ms,
            "risk_score": risk_score,
            "risk_level": risk_level,
            "score_scale": score_scale,
        }
    )


def emit_validation_failure(error_count: int):
    """Emit the number of validation errors; never the messages."""
    assert isinstance(error_count, int), "error_count must be int"

    span = get_current_span()
    if not span:
        return

    span.add_event(
        name="vendorisk.validation_failed",
        attributes={"error_count": error_count},
    )


def emit_exception_telemetry(exception: Exception):
    """Emit the exception class name only."""
    span = get_current_span()
    if not span:
        return

    span.add_event(
        name="vendorisk.exception",
        attributes={"exception_type": type(exception).__name__},
    )
