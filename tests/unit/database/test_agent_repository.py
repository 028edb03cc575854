"""
Tests for AgentRepository against in-memory SQLite.
"""
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from core.exceptions import PersistenceError
from database.repositories import AgentRepository

VECTOR = [0.0] * 1536


@pytest.fixture
def repo(db_session):
    return AgentRepository(db_session)


class TestAgentReads:

    def test_get_by_id_loads_skills(self, repo, make_agent):
        agent = make_agent("Loaded", skills=[{"name": "a"}, {"name": "b"}])

        found = repo.get_by_id(agent.id)

        assert [s.name for s in found.skills] == ["a", "b"]
        assert repo.get_by_id(12345) is None

    def test_active_agents_include_null_is_active(self, repo, make_agent):
        make_agent("On")
        make_agent("Unknown", is_active=None)
        make_agent("Off", is_active=False)

        assert [a.name for a in repo.get_active_agents()] == ["On", "Unknown"]

    def test_agents_with_and_without_embeddings(self, repo, make_agent):
        make_agent("With", embedding=VECTOR)
        make_agent("Without")

        assert [a.name for a in repo.get_agents_with_embeddings()] == ["With"]
        assert [a.name for a in repo.get_agents_without_embeddings()] == ["Without"]

    def test_category_filter_ignores_inactive_skills(self, repo, make_agent):
        make_agent("Live", embedding=VECTOR, skills=[{"name": "x", "category": "Data"}])
        make_agent("Stale", embedding=VECTOR, skills=[{"name": "y", "category": "data", "is_active": False}])

        assert [a.name for a in repo.get_agents_with_embeddings(category="data")] == ["Live"]

    def test_trust_tier_filter_treats_null_as_new(self, repo, make_agent):
        make_agent("Null tier", embedding=VECTOR, trust_tier=None)
        make_agent("Verified", embedding=VECTOR, trust_tier="verified")

        assert [a.name for a in repo.get_agents_with_embeddings(trust_tiers=["new"])] == ["Null tier"]


class TestTextSearch:

    def test_matches_name_bio_and_skills(self, repo, make_agent):
        make_agent("Python Pete")
        make_agent("Bio", bio="I love PYTHON")
        make_agent("Skilled", skills=[{"name": "scripts", "description": "python tooling"}])
        make_agent("Categorised", skills=[{"name": "misc", "category": "python"}])
        make_agent("Nope", bio="Go only")

        names = {a.name for a in repo.search_agents_by_text("python")}

        assert names == {"Python Pete", "Bio", "Skilled", "Categorised"}

    def test_ordering_founder_rating_jobs(self, repo, make_agent):
        make_agent("python low", rating=3.0, total_jobs=50)
        make_agent("python high", rating=4.9, total_jobs=1)
        make_agent("python founder", rating=2.0, is_founder=True)
        make_agent("python busy", rating=4.9, total_jobs=10)

        names = [a.name for a in repo.search_agents_by_text("python")]

        assert names == ["python founder", "python busy", "python high", "python low"]

    def test_wildcards_are_literal(self, repo, make_agent):
        make_agent("100% uptime")
        make_agent("1000 jobs")

        assert [a.name for a in repo.search_agents_by_text("100%")] == ["100% uptime"]

    def test_unembedded_search_excludes_ids_and_categories(self, repo, make_agent):
        first = make_agent("python one")
        make_agent("python two")
        make_agent("python embedded", embedding=VECTOR)
        make_agent("Categorised", skills=[{"name": "misc", "category": "python"}])

        results = repo.search_unembedded_agents_by_text("python", exclude_ids=[first.id], limit=5)

        assert [a.name for a in results] == ["python two"]
        assert repo.search_unembedded_agents_by_text("python", limit=0) == []


class TestEmbeddingWrites:

    def test_store_embedding_overwrites(self, repo, make_agent, db_session):
        agent = make_agent("Vec", embedding=VECTOR)
        new_vector = [1.0] + [0.0] * 1535

        assert repo.store_embedding(agent.id, new_vector) is True
        repo.commit()

        db_session.expire_all()
        stored = repo.get_by_id(agent.id)
        assert stored.embedding[0] == 1.0
        assert stored.embedding_updated_at is not None

    def test_store_embedding_unknown_agent(self, repo):
        assert repo.store_embedding(999, VECTOR) is False

    def test_coverage_counts_active_only(self, repo, make_agent):
        make_agent("A", embedding=VECTOR)
        make_agent("B")
        make_agent("C", is_active=False, embedding=VECTOR)

        assert repo.count_embedding_coverage() == (2, 1)


class TestReadFailures:

    def test_sqlalchemy_errors_become_persistence_errors(self):
        session = MagicMock()
        session.execute.side_effect = OperationalError("SELECT 1", {}, Exception("connection refused"))
        repo = AgentRepository(session)

        with pytest.raises(PersistenceError):
            repo.get_active_agents()
        with pytest.raises(PersistenceError):
            repo.count_embedding_coverage()
