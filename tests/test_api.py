"""
tests/test_api.py — HTTP tests for the FastAPI routes.

The get_db dependency is overridden with the in-memory test session, and the
LLM adapter is patched so no network calls are made.
"""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from app.ai_engine.processor import ClassifierFailure, ClassifierSuccess
from app.db.models import LeadResult
from app.db.session import get_db
from api.main import app


LEADS_CSV = (
    b"name,role,company,industry,location,linkedin_bio\n"
    b"Ava Patel,VP Sales,FlowMetrics,FinTech,Austin,Scaling revenue teams.\n"
    b"Ben Ode,Accountant,Bricks Ltd,Construction,Leeds,\n"
)


@pytest.fixture
def client(db):
    def _override_get_db():
        yield db
        db.commit()

    app.dependency_overrides[get_db] = _override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def offer_id(client):
    r = client.post("/offers", json={
        "name": "Acme CRM",
        "value_props": ["Close deals faster"],
        "ideal_use_cases": ["saas", "fintech"],
    })
    assert r.status_code == 200
    return r.json()["id"]


@pytest.fixture
def batch_id(client, offer_id):
    r = client.post(
        "/leads/upload",
        data={"offer_id": str(offer_id)},
        files={"file": ("leads.csv", LEADS_CSV, "text/csv")},
    )
    assert r.status_code == 200
    return r.json()["batch_id"]


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


# ── Offers ────────────────────────────────────────────────────────────────────

def test_create_and_read_offer(client, offer_id):
    r = client.get(f"/offers/{offer_id}")
    assert r.status_code == 200
    assert r.json()["ideal_use_cases"] == ["saas", "fintech"]


def test_offer_requires_name(client):
    r = client.post("/offers", json={"value_props": []})
    assert r.status_code == 422


def test_unknown_offer_404(client):
    assert client.get("/offers/999").status_code == 404


# ── Upload ────────────────────────────────────────────────────────────────────

def test_upload_creates_batch(client, offer_id):
    r = client.post(
        "/leads/upload",
        data={"offer_id": str(offer_id)},
        files={"file": ("leads.csv", LEADS_CSV, "text/csv")},
    )
    assert r.status_code == 200
    assert r.json()["inserted_count"] == 2


def test_upload_empty_csv_400(client, offer_id):
    r = client.post(
        "/leads/upload",
        data={"offer_id": str(offer_id)},
        files={"file": ("leads.csv", b"", "text/csv")},
    )
    assert r.status_code == 400


def test_upload_unknown_offer_404(client):
    r = client.post(
        "/leads/upload",
        data={"offer_id": "999"},
        files={"file": ("leads.csv", LEADS_CSV, "text/csv")},
    )
    assert r.status_code == 404


# ── Score ─────────────────────────────────────────────────────────────────────

def test_score_missing_ids_400(client):
    r = client.post("/score", json={"batch_id": 1})
    assert r.status_code == 400
    assert "required" in r.json()["detail"]


def test_score_unknown_offer_404(client, batch_id):
    r = client.post("/score", json={"batch_id": batch_id, "offer_id": 999})
    assert r.status_code == 404


@patch("app.services.lead_service.classify_intent")
def test_score_batch(mock_classify, client, db, offer_id, batch_id):
    mock_classify.side_effect = [
        ClassifierSuccess(text="INTENT: High\nREASON: Strong buying signals detected."),
        ClassifierFailure(error="timeout"),
    ]
    r = client.post("/score", json={"batchId": batch_id, "offerId": offer_id})
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert [x["name"] for x in body["results"]] == ["Ava Patel", "Ben Ode"]
    assert [x["intent"] for x in body["results"]] == ["High", "Medium"]
    assert [x["score"] for x in body["results"]] == [100, 40]
    assert mock_classify.call_count == 2


@patch("app.services.lead_service.classify_intent")
def test_rescoring_does_not_duplicate(mock_classify, client, db, offer_id, batch_id):
    mock_classify.return_value = ClassifierSuccess(text="INTENT: Low\nREASON: No budget.")
    for _ in range(2):
        assert client.post("/score", json={"batch_id": batch_id, "offer_id": offer_id}).status_code == 200
    assert db.query(LeadResult).count() == 2


@patch("app.services.lead_service.upsert_lead_result")
@patch("app.services.lead_service.classify_intent")
def test_persistence_failure_500(mock_classify, mock_upsert, client, offer_id, batch_id):
    mock_classify.return_value = ClassifierSuccess(text="INTENT: Low\nREASON: x")
    mock_upsert.side_effect = RuntimeError("disk full")
    r = client.post("/score", json={"batch_id": batch_id, "offer_id": offer_id})
    assert r.status_code == 500
    assert "results" not in r.json()


# ── Results ───────────────────────────────────────────────────────────────────

@patch("app.services.lead_service.classify_intent")
def test_results_json_and_csv(mock_classify, client, offer_id, batch_id):
    before = client.get("/results", params={"batch_id": batch_id}).json()
    assert [row["intent"] for row in before] == ["Unknown", "Unknown"]

    mock_classify.return_value = ClassifierSuccess(text="INTENT: High\nREASON: Great fit.")
    client.post("/score", json={"batch_id": batch_id, "offer_id": offer_id})

    rows = client.get("/results", params={"offer_id": offer_id}).json()
    assert [row["score"] for row in rows] == [100, 60]
    assert rows[0]["reasoning"] == "Rule: role 20, industry 20, completeness 10. AI: Great fit."

    r = client.get("/results/csv", params={"batch_id": batch_id})
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/csv")
    lines = r.text.strip().splitlines()
    assert lines[0] == "name,role,company,industry,location,intent,score,reasoning"
    assert lines[1].startswith("Ava Patel,VP Sales,FlowMetrics,FinTech,Austin,High,100,")


def test_results_accept_camel_case_filters(client, offer_id, batch_id):
    other = client.post(
        "/leads/upload",
        data={"offer_id": str(offer_id)},
        files={"file": ("more.csv", b"name,role\nZed,CTO\n", "text/csv")},
    )
    assert other.status_code == 200

    rows = client.get("/results", params={"batchId": batch_id}).json()
    assert [row["name"] for row in rows] == ["Ava Patel", "Ben Ode"]

    rows = client.get("/results", params={"offerId": offer_id}).json()
    assert [row["name"] for row in rows] == ["Ava Patel", "Ben Ode", "Zed"]

    r = client.get("/results/csv", params={"batchId": other.json()["batch_id"]})
    lines = r.text.strip().splitlines()
    assert len(lines) == 2
    assert lines[1].startswith("Zed,CTO,")


def test_results_unknown_offer_filter_is_empty(client, batch_id):
    assert client.get("/results", params={"offerId": 999}).json() == []
    csv_lines = client.get("/results/csv", params={"offerId": 999}).text.strip().splitlines()
    assert csv_lines == ["name,role,company,industry,location,intent,score,reasoning"]
