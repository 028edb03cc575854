"""
Unit tests for the text-fallback scoring heuristic.
"""
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from core.matcher.text_fallback import text_match_score, matching_skill_names, text_fallback_search


def skill(name, description=None, category=None):
    return SimpleNamespace(name=name, description=description, category=category, is_active=True)


def agent(name="Agent", bio=None, skills=(), trust_score=0):
    return SimpleNamespace(name=name, bio=bio, skills=list(skills), trust_score=trust_score)


class TestTextMatchScore:

    def test_name_match(self):
        assert text_match_score(agent(name="Python Pete"), "python") == 0.5

    def test_bio_match(self):
        assert text_match_score(agent(bio="I write Python"), "python") == 0.3

    def test_skill_matches_capped_at_two(self):
        skills = [skill("python"), skill("python web"), skill("python data")]
        assert text_match_score(agent(skills=skills), "python") == pytest.approx(0.4)

    def test_trust_score_adds_half_percent(self):
        assert text_match_score(agent(bio="python", trust_score=50), "python") == pytest.approx(0.55)

    def test_capped_below_one(self):
        subject = agent(name="python", bio="python", skills=[skill("python")], trust_score=100)
        assert text_match_score(subject, "python") == 0.99

    def test_rounded_to_three_decimals(self):
        assert text_match_score(agent(bio="python", trust_score=33.3333), "python") == 0.467


class TestMatchingSkillNames:

    def test_matches_name_description_and_category(self):
        subject = agent(skills=[
            skill("pandas", description="python dataframes"),
            skill("django"),
            skill("scripts", category="python"),
        ])

        assert matching_skill_names(subject, "python") == ["pandas", "scripts"]

    def test_category_can_be_excluded(self):
        subject = agent(skills=[skill("scripts", category="python")])

        assert matching_skill_names(subject, "python", include_category=False) == []


class TestCategoryOnlySkills:

    def test_category_hit_earns_no_skill_points(self):
        subject = agent(name="Zed", skills=[skill("pipelines", category="data")])

        assert text_match_score(subject, "data") == 0.0

    def test_category_hit_not_reported_as_matched_skill(self):
        repo = MagicMock()
        repo.search_agents_by_text.return_value = [
            agent(name="Zed", skills=[skill("pipelines", category="data")]),
            agent(name="Dana", skills=[skill("etl", description="data loading", category="data")]),
        ]

        results = text_fallback_search(repo, "Data", limit=10)

        assert [(r.agent.name, r.similarity, r.matched_skills) for r in results] == [
            ("Dana", 0.2, ["etl"]),
            ("Zed", 0.0, []),
        ]
