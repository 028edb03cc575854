"""
API tests for the discovery endpoints.

Runs the FastAPI app against the in-memory store with the session and
application context dependencies overridden.
"""
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from core.app_context import AppContext
from core.config_loader import AppConfig
from web.backend.app import app
from web.backend.dependencies import get_db, get_app_context
from tests.mocks.embedding_mocks import MockEmbeddingProvider, unit_vector


@pytest.fixture
def context():
    return AppContext(config=AppConfig(), embedding_client=None)


@pytest.fixture
def client(db_session, context):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_app_context] = lambda: context
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def data_agent(make_agent):
    return make_agent(
        "DataBot",
        rating=4.8,
        completion_rate=98,
        response_time_avg=1800,
        trust_tier="verified",
        skills=[
            {"name": "python", "category": "code", "price": 25},
            {"name": "pandas", "description": "Data analysis with pandas", "category": "data", "price": 30},
        ],
    )


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


class TestRecommendations:

    def test_explicit_requirement(self, client, data_agent):
        response = client.get(
            "/api/agents/recommendations",
            params={"skills": "python,data", "category": "data", "budget": 1}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["requirement"] == {"skills": ["python", "data"], "category": "data", "budget": 1.0}
        top = body["recommendations"][0]
        assert top["agent"]["name"] == "DataBot"
        assert top["score"] == 100
        assert top["breakdown"]["rating"] == 14
        assert len(top["reasons"]) == 4

    def test_free_text_query(self, client, data_agent):
        response = client.get(
            "/api/agents/recommendations",
            params={"q": "I need help with Python data analysis"}
        )

        body = response.json()
        assert body["requirement"]["category"] == "research"
        assert body["requirement"]["skills"] == ["python", "data", "analysis"]
        assert body["count"] == 1

    def test_limit(self, client, make_agent):
        for i in range(4):
            make_agent(f"Agent {i}")

        response = client.get("/api/agents/recommendations", params={"limit": 2})

        assert response.json()["count"] == 2

    def test_invalid_limit(self, client):
        assert client.get("/api/agents/recommendations", params={"limit": 0}).status_code == 422


class TestSearch:

    def test_without_provider_uses_text_fallback(self, client, data_agent):
        response = client.get("/api/agents/search", params={"q": "pandas"})

        assert response.status_code == 200
        body = response.json()
        assert body["method"] == "text-fallback"
        assert body["total_with_embeddings"] == 0
        assert [r["agent"]["name"] for r in body["results"]] == ["DataBot"]
        assert body["results"][0]["matched_skills"] == ["pandas"]

    def test_semantic_search_with_supplements(self, client, context, make_agent):
        context.embedding_client = MockEmbeddingProvider(fixed={"pandas": unit_vector(0)})
        make_agent("Embedded", embedding=unit_vector(0), skills=[{"name": "pandas"}])
        make_agent("Pandas Pal")

        body = client.get("/api/agents/search", params={"q": "pandas"}).json()

        assert body["method"] == "semantic"
        assert body["results"][0]["agent"]["name"] == "Embedded"
        assert body["results"][0]["similarity"] == 1.0
        assert [s["name"] for s in body["supplements"]] == ["Pandas Pal"]
        assert body["supplements"][0]["note"] == "Text match (no embedding yet)"

    def test_min_similarity_out_of_range(self, client):
        assert client.get("/api/agents/search", params={"q": "x", "min_similarity": 2}).status_code == 422


class TestOutcomes:

    def test_record_and_stats(self, client):
        payload = {"job_id": "job-1", "agent_id": 7, "match_score": 91, "outcome": "completed"}

        response = client.post("/api/outcomes", json=payload)
        assert response.status_code == 200
        assert response.json() == {"success": True, "job_id": "job-1"}

        stats = client.get("/api/outcomes/stats").json()
        assert stats["total_outcomes"] == 1
        assert [r["score_range"] for r in stats["ranges"]] == ["low", "medium", "high"]
        assert stats["ranges"][2]["completed"] == 1

    def test_invalid_outcome(self, client):
        payload = {"job_id": "job-1", "agent_id": 7, "match_score": 91, "outcome": "abandoned"}

        response = client.post("/api/outcomes", json=payload)

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["type"] == "InvalidOutcomeException"


class TestEmbeddingStats:

    def test_coverage(self, client, make_agent):
        make_agent("A", embedding=unit_vector(0))
        make_agent("B")

        body = client.get("/api/embeddings/stats").json()

        assert body["total_agents"] == 2
        assert body["with_embeddings"] == 1
        assert body["coverage_percent"] == 50
        assert body["embeddings_available"] is False
        assert body["model"] == "text-embedding-3-small"


class TestStoreUnavailable:

    def test_persistence_error_maps_to_503(self, context):
        broken_session = MagicMock()
        broken_session.execute.side_effect = OperationalError("SELECT 1", {}, Exception("connection refused"))

        def override_get_db():
            yield broken_session

        app.dependency_overrides[get_db] = override_get_db
        app.dependency_overrides[get_app_context] = lambda: context
        try:
            response = TestClient(app).get("/api/agents/recommendations", params={"q": "python"})
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 503
        assert response.json()["success"] is False
        assert response.json()["type"] == "PersistenceError"
