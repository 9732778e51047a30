"""
Environment-level configuration.

Values come from the process environment, optionally seeded from a
local .env file. Settings are re-read on every call so tests can
monkeypatch the environment.
"""
import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from dotenv import load_dotenv

from vendorisk.rules.loader import DEFAULT_RULE_TABLE_VERSION

load_dotenv()


class ScoreScale(str, Enum):
    # round(weighted_mean * 100): the arithmetic existing scores were produced with
    LEGACY = "legacy"
    # round(weighted_mean): keeps results on the 0-100 scale
    NORMALIZED = "normalized"


SCORE_SCALE_MULTIPLIERS = {
    ScoreScale.LEGACY: 100,
    ScoreScale.NORMALIZED: 1,
}


@dataclass(frozen=True)
class Settings:
    score_scale: ScoreScale
    rule_table_version: str
    alert_webhook_url: Optional[str]
    appinsights_connection_string: Optional[str]
    audit_log_path: str


def get_settings() -> Settings:
    raw_scale = os.getenv("VENDORISK_SCORE_SCALE", ScoreScale.LEGACY.value).strip().lower()
    try:
        score_scale = ScoreScale(raw_scale)
    except ValueError:
        raise ValueError(
            f"VENDORISK_SCORE_SCALE must be one of "
            f"{[s.value for s in ScoreScale]}, got {raw_scale!r}"
        )

    return Settings(
        score_scale=score_scale,
        rule_table_version=os.getenv("VENDORISK_RULE_TABLE_VERSION", DEFAULT_RULE_TABLE_VERSION),
        alert_webhook_url=os.getenv("VENDORISK_ALERT_WEBHOOK_URL") or None,
        appinsights_connection_string=os.getenv("AZURE_APPINSIGHTS_CONNECTION_STRING") or None,
        audit_log_path=os.getenv("VENDORISK_AUDIT_LOG", "audit.log"),
    )
