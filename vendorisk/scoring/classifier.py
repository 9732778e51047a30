from enum import Enum

from vendorisk.scoring.thresholds import (
    CRITICAL_RISK_MAX,
    CRITICAL_RISK_MIN,
    HIGH_RISK_MAX,
    HIGH_RISK_MIN,
    LOW_RISK_MAX,
    LOW_RISK_MIN,
    MEDIUM_RISK_MAX,
    MEDIUM_RISK_MIN,
)


class RiskLevel(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"
    UNKNOWN = "UNKNOWN"


RISK_BANDS = (
    (LOW_RISK_MIN, LOW_RISK_MAX, RiskLevel.LOW),
    (MEDIUM_RISK_MIN, MEDIUM_RISK_MAX, RiskLevel.MEDIUM),
    (HIGH_RISK_MIN, HIGH_RISK_MAX, RiskLevel.HIGH),
    (CRITICAL_RISK_MIN, CRITICAL_RISK_MAX, RiskLevel.CRITICAL),
)


def classify(score: float) -> RiskLevel:
    """
    Map a risk score to its qualitative band.
    Total: out-of-range scores return UNKNOWN rather than raising.
    """
    for low, high, level in RISK_BANDS:
        if low <= score <= high:
            return level
    return RiskLevel.UNKNOWN
