import pytest
import requests
from fastapi.testclient import TestClient

from vendorisk.api.main import app

client = TestClient(app)

GENERAL = "General Vendor Risk Assessment"

INLINE_TEMPLATE = {
    "name": "Two Question Check",
    "category": "CYBERSECURITY",
    "questions": {
        "sections": [
            {
                "title": "Controls",
                "questions": [
                    {"id": "q1", "text": "Do you enforce MFA?", "type": "yesno", "required": True},
                    {"id": "q2", "text": "Do you encrypt backups?", "type": "yesno", "required": True},
                ],
            }
        ]
    },
    "riskWeights": {"sections": {"Controls": 1.0}, "questions": {"q1": 0.5, "q2": 0.5}},
}


def test_health_check():
    """Verify the API is alive."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "online"


def test_list_templates_and_filter_by_category():
    response = client.get("/templates")
    assert response.status_code == 200
    assert len(response.json()["templates"]) == 3

    response = client.get("/templates", params={"category": "CYBERSECURITY"})
    names = [t["name"] for t in response.json()["templates"]]
    assert names == ["Cybersecurity Assessment"]


def test_unknown_category_is_a_client_error():
    response = client.get("/templates", params={"category": "ESG"})
    assert response.status_code == 422


def test_get_template_by_name():
    response = client.get(f"/templates/{GENERAL}")
    assert response.status_code == 200
    assert response.json()["riskWeights"]["questions"]["q7"] == 0.15

    assert client.get("/templates/Nope").status_code == 404


def test_validate_reports_every_problem():
    payload = {"template_name": GENERAL, "responses": {"q1": "Forever"}}

    response = client.post("/assessments/validate", json=payload)

    assert response.status_code == 200
    data = response.json()
    assert data["isValid"] is False
    assert 'Invalid response type for question "How long has your company been in business?"' in data["errors"]
    assert 'Required question "What is your annual revenue?" is not answered' in data["errors"]


def test_score_inline_template_normalized():
    payload = {
        "template": INLINE_TEMPLATE,
        "responses": {"q1": True, "q2": False},
        "score_scale": "normalized",
    }

    response = client.post("/assessments/score", json=payload)

    assert response.status_code == 200
    data = response.json()
    assert data["risk_score"] == 50
    assert data["risk_level"] == "MEDIUM"
    assert data["score_scale"] == "normalized"
    assert data["rule_table_version"] == "rule_table_2025.1"
    assert len(data["fingerprint"]) == 64


def test_score_inline_template_legacy(monkeypatch):
    monkeypatch.delenv("VENDORISK_SCORE_SCALE", raising=False)
    monkeypatch.delenv("VENDORISK_ALERT_WEBHOOK_URL", raising=False)

    response = client.post(
        "/assessments/score",
        json={"template": INLINE_TEMPLATE, "responses": {"q1": True, "q2": False}},
    )

    assert response.status_code == 200
    assert response.json()["risk_score"] == 5000
    assert response.json()["risk_level"] == "UNKNOWN"


def test_score_rejects_invalid_responses():
    payload = {"template": INLINE_TEMPLATE, "responses": {"q1": True}}

    response = client.post("/assessments/score", json=payload)

    assert response.status_code == 422
    assert response.json()["detail"]["errors"] == [
        'Required question "Do you encrypt backups?" is not answered'
    ]


def test_score_requires_a_template():
    response = client.post("/assessments/score", json={"responses": {"q1": True}})
    assert response.status_code == 422

    response = client.post("/assessments/score", json={"template_name": "Nope", "responses": {}})
    assert response.status_code == 404


def test_malformed_inline_template_is_rejected():
    bad = dict(INLINE_TEMPLATE)
    bad["questions"] = {"sections": [{"title": "X", "questions": [{"id": "a", "text": "A", "type": "slider"}]}]}

    response = client.post("/assessments/score", json={"template": bad, "responses": {}})
    assert response.status_code == 422


def test_high_risk_score_triggers_alert(monkeypatch):
    sent = []
    monkeypatch.setattr(
        "vendorisk.api.main.trigger_high_risk_alert",
        lambda **kwargs: sent.append(kwargs),
    )

    payload = {
        "template": INLINE_TEMPLATE,
        "responses": {"q1": False, "q2": False},
        "score_scale": "normalized",
        "assessment_id": "assessment-7",
    }
    response = client.post("/assessments/score", json=payload)

    assert response.json()["risk_level"] == "HIGH"
    assert sent[0]["risk_score"] == 80
    assert sent[0]["assessment_id"] == "assessment-7"


class _AcceptedResponse:
    status_code = 202

    def raise_for_status(self):
        pass


@pytest.fixture
def webhook_calls(monkeypatch):
    calls = []
    monkeypatch.delenv("VENDORISK_SCORE_SCALE", raising=False)
    monkeypatch.setenv("VENDORISK_ALERT_WEBHOOK_URL", "https://hooks.example.test/risk")
    monkeypatch.setattr(requests, "post", lambda url, **kwargs: calls.append(kwargs["json"]) or _AcceptedResponse())
    return calls


def test_low_risk_legacy_score_sends_no_alert(webhook_calls):
    response = client.post(
        "/assessments/score",
        json={"template": INLINE_TEMPLATE, "responses": {"q1": True, "q2": True}},
    )

    assert response.status_code == 200
    assert response.json()["risk_score"] == 2000
    assert webhook_calls == []


def test_high_risk_legacy_score_alerts_on_normalized_value(webhook_calls):
    response = client.post(
        "/assessments/score",
        json={"template": INLINE_TEMPLATE, "responses": {"q1": False, "q2": False}},
    )

    assert response.json()["risk_score"] == 8000
    assert len(webhook_calls) == 1
    assert webhook_calls[0]["risk_score"] == 80
    assert webhook_calls[0]["risk_level"] == "HIGH"


def test_submit_completes_assessment(webhook_calls):
    payload = {
        "vendor_id": "vendor-1",
        "template": INLINE_TEMPLATE,
        "responses": {"q1": True, "q2": False},
        "score_scale": "normalized",
    }

    response = client.post("/assessments/assessment-9/submit", json=payload)

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == "assessment-9"
    assert data["status"] == "COMPLETED"
    assert data["risk_score"] == 50
    assert data["risk_level"] == "MEDIUM"
    assert len(data["fingerprint"]) == 64
    assert webhook_calls == []


def test_submit_high_risk_assessment_alerts(webhook_calls):
    payload = {
        "vendor_id": "vendor-1",
        "template": INLINE_TEMPLATE,
        "responses": {"q1": False, "q2": False},
    }

    response = client.post("/assessments/assessment-10/submit", json=payload)

    assert response.status_code == 200
    assert response.json()["risk_score"] == 8000
    assert webhook_calls[0]["assessment_id"] == "assessment-10"
    assert webhook_calls[0]["risk_score"] == 80


@pytest.mark.parametrize("status", ["COMPLETED", "REVIEWED", "APPROVED", "REJECTED"])
def test_submit_from_non_submittable_status_conflicts(status):
    payload = {
        "vendor_id": "vendor-1",
        "status": status,
        "template": INLINE_TEMPLATE,
        "responses": {"q1": True, "q2": True},
    }

    response = client.post("/assessments/assessment-11/submit", json=payload)

    assert response.status_code == 409
    assert f"{status} to COMPLETED" in response.json()["detail"]


def test_submit_invalid_responses_lists_every_error():
    payload = {"vendor_id": "vendor-1", "template": INLINE_TEMPLATE, "responses": {"q1": "yes"}}

    response = client.post("/assessments/assessment-12/submit", json=payload)

    assert response.status_code == 422
    assert response.json()["detail"]["errors"] == [
        'Required question "Do you encrypt backups?" is not answered',
        'Invalid response type for question "Do you enforce MFA?"',
    ]


def test_template_check_endpoint():
    draft = dict(INLINE_TEMPLATE, riskWeights={"sections": {"Controls": 1.0}, "questions": {"q1": 0.5}})

    response = client.post("/templates/check", json=draft)

    assert response.status_code == 200
    assert response.json()["ok"] is False
    assert "Question weights sum to 0.5, expected 1.0" in response.json()["warnings"]
