import pytest

from vendorisk.config import ScoreScale, get_settings


def test_defaults(monkeypatch):
    for name in ("VENDORISK_SCORE_SCALE", "VENDORISK_RULE_TABLE_VERSION", "VENDORISK_ALERT_WEBHOOK_URL"):
        monkeypatch.delenv(name, raising=False)

    settings = get_settings()

    assert settings.score_scale == ScoreScale.LEGACY
    assert settings.rule_table_version == "rule_table_2025.1"
    assert settings.alert_webhook_url is None


def test_scale_is_case_insensitive(monkeypatch):
    monkeypatch.setenv("VENDORISK_SCORE_SCALE", " Normalized ")
    assert get_settings().score_scale == ScoreScale.NORMALIZED


def test_invalid_scale_is_rejected(monkeypatch):
    monkeypatch.setenv("VENDORISK_SCORE_SCALE", "percent")
    with pytest.raises(ValueError):
        get_settings()
