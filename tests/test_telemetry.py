import pytest

from vendorisk.telemetry import (
    emit_exception_telemetry,
    emit_scoring_telemetry,
    emit_validation_failure,
    init_telemetry,
)


def test_init_telemetry_is_a_noop_without_connection_string(monkeypatch):
    monkeypatch.delenv("AZURE_APPINSIGHTS_CONNECTION_STRING", raising=False)
    init_telemetry()


def test_emit_scoring_telemetry_does_not_crash():
    """
    Telemetry safely no-ops when no span is recording (local / tests).
    """
    emit_scoring_telemetry(
        scoring_latency_ms=3,
        risk_score=42,
        risk_level="MEDIUM",
        score_scale="normalized",
    )
    emit_scoring_telemetry(
        scoring_latency_ms=5,
        risk_score=5000,
        risk_level="UNKNOWN",
        score_scale="legacy",
    )
    emit_validation_failure(3)
    emit_exception_telemetry(ValueError("boom"))


def test_emit_scoring_telemetry_rejects_unknown_attributes():
    with pytest.raises(AssertionError):
        emit_scoring_telemetry(
            scoring_latency_ms=3,
            risk_score=42,
            risk_level="SEVERE",
            score_scale="normalized",
        )
