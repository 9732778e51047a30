import pytest

from vendorisk.scoring.classifier import RiskLevel, classify


@pytest.mark.parametrize("score,level", [
    (0, RiskLevel.LOW),
    (30, RiskLevel.LOW),
    (31, RiskLevel.MEDIUM),
    (60, RiskLevel.MEDIUM),
    (61, RiskLevel.HIGH),
    (80, RiskLevel.HIGH),
    (81, RiskLevel.CRITICAL),
    (100, RiskLevel.CRITICAL),
    (-1, RiskLevel.UNKNOWN),
    (101, RiskLevel.UNKNOWN),
    (5000, RiskLevel.UNKNOWN),
])
def test_band_edges(score, level):
    assert classify(score) == level


def test_fractional_scores_between_bands_are_unknown():
    assert classify(30.5) == RiskLevel.UNKNOWN
    assert classify(12.5) == RiskLevel.LOW


def test_risk_level_is_a_plain_string():
    assert classify(45) == "MEDIUM"
    assert classify(45).value == "MEDIUM"
