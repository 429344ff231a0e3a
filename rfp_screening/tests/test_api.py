"""
Tests: HTTP routes via FastAPI's TestClient.

Run with:
    pytest rfp_screening/tests/test_api.py -v
"""

import pytest
from fastapi.testclient import TestClient

from rfp_screening.api import create_app
from rfp_screening.api.routes import get_profile_repository
from rfp_screening.data.sample_rfps import REFERENCE_COMPANY_ID, SAMPLE_RFPS
from rfp_screening.persistence import InMemoryProfileRepository


@pytest.fixture
def client(reference_profile):
    app = create_app()
    app.dependency_overrides[get_profile_repository] = (
        lambda: InMemoryProfileRepository([reference_profile])
    )
    return TestClient(app)


@pytest.fixture
def profile_json(reference_profile):
    return reference_profile.model_dump(mode="json")


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["llm_configured"] is False
        assert body["decision_scheme"] == "three_tier"


class TestAnalyze:
    def test_analyze_with_company_id(self, client):
        response = client.post("/api/screening/analyze", json={
            "rfp_text": SAMPLE_RFPS["glendale-city-hall"],
            "company_id": REFERENCE_COMPANY_ID,
        })
        assert response.status_code == 200
        body = response.json()
        assert body["decision"] == "GO"
        assert body["score"] == 100
        assert set(body["breakdown"]) == {"geographic", "insurance", "services", "certifications"}

    def test_analyze_with_inline_profile(self, client, profile_json):
        response = client.post("/api/screening/analyze", json={
            "rfp_text": SAMPLE_RFPS["san-francisco-civic-center"],
            "profile": profile_json,
            "scheme": "four_tier",
        })
        assert response.status_code == 200
        assert response.json()["decision"] == "NO_GO"

    def test_unknown_company(self, client):
        response = client.post("/api/screening/analyze", json={
            "rfp_text": "General Liability $1M", "company_id": "nobody",
        })
        assert response.status_code == 404

    def test_no_profile_source(self, client):
        response = client.post("/api/screening/analyze", json={"rfp_text": "General Liability $1M"})
        assert response.status_code == 400

    def test_empty_rfp_text(self, client):
        response = client.post("/api/screening/analyze", json={
            "rfp_text": "   ", "company_id": REFERENCE_COMPANY_ID,
        })
        assert response.status_code == 400
        assert "empty" in response.json()["detail"]


class TestExtract:
    def test_extract(self, client):
        response = client.post("/api/screening/extract", json={
            "rfp_text": SAMPLE_RFPS["burbank-airport"],
        })
        assert response.status_code == 200
        body = response.json()
        assert body["extraction_source"] == "deterministic"
        assert body["requirements"]["location"]["zip"] == "91505"
        assert "epa" in body["requirements"]["certifications"]

    def test_extract_empty(self, client):
        assert client.post("/api/screening/extract", json={"rfp_text": ""}).status_code == 400


class TestBenchmark:
    def test_default_cases(self, client):
        response = client.post("/api/screening/benchmark", json={"company_id": REFERENCE_COMPANY_ID})
        assert response.status_code == 200
        body = response.json()
        assert body["total"] == len(SAMPLE_RFPS)
        assert body["passed"] == body["total"]


class TestProfileAndProposal:
    def test_validate_profile(self, client, profile_json):
        response = client.post("/api/profile/validate", json=profile_json)
        assert response.status_code == 200
        assert response.json()["completeness"] >= 97

    def test_validate_empty_profile(self, client):
        response = client.post("/api/profile/validate", json={})
        assert response.status_code == 200
        assert response.json()["completeness"] == 0

    def test_generate_proposal(self, client):
        response = client.post("/api/proposal/generate", json={
            "rfp_text": SAMPLE_RFPS["glendale-city-hall"],
            "company_id": REFERENCE_COMPANY_ID,
        })
        assert response.status_code == 200
        body = response.json()
        assert body["generated_by"] == "deterministic"
        assert "HydroJet Pros" in body["cover_letter"]
