import logging
from datetime import datetime, timezone
from typing import Optional

import requests

from vendorisk.config import get_settings
from vendorisk.scoring.classifier import RiskLevel

logger = logging.getLogger("vendorisk.integration")

# Decided on the normalized 0-100 score; UNKNOWN never alerts
ALERT_LEVELS = frozenset({RiskLevel.HIGH, RiskLevel.CRITICAL})


def should_alert(risk_level: RiskLevel) -> bool:
    return RiskLevel(risk_level) in ALERT_LEVELS


def trigger_high_risk_alert(
    risk_score: int,
    risk_level: RiskLevel,
    template_name: str,
    assessment_id: Optional[str] = None,
) -> bool:
    """
    Post a high-risk notice to the configured webhook (Logic App, Teams,
    Power Automate...). Returns True when the webhook accepted it.

    Failures are logged and swallowed: a missed alert must not fail
    the scoring request.
    """
    webhook_url = get_settings().alert_webhook_url

    if not webhook_url:
        logger.warning("Alert triggered but VENDORISK_ALERT_WEBHOOK_URL is not set.")
        return False

    # Responses are deliberately left out of the payload
    payload = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "alert_level": "HIGH_RISK",
        "assessment_id": assessment_id or "Unknown",
        "template": template_name,
        "risk_score": risk_score,
        "risk_level": RiskLevel(risk_level).value,
    }

    try:
        response = requests.post(
            webhook_url,
            json=payload,
            timeout=2.0,
            headers={"Content-Type": "application/json"}
        )
        response.raise_for_status()
        logger.info(f"High risk alert sent. Status: {response.status_code}")
        return True

    except requests.exceptions.RequestException as e:
        logger.error(f"Failed to send high risk alert: {e}")
        return False
