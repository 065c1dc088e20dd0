"""Tests for trigger scoring strategies."""

from __future__ import annotations

import pytest

from skill_engine.config.settings import ScoringConfig
from skill_engine.matching.result import Request
from skill_engine.matching.strategies import (
    KeywordOverlapStrategy,
    SemanticSimilarityStrategy,
    build_strategy,
)
from skill_engine.skills.config import Skill
from skill_engine.skills.registry import SkillRegistry
from skill_engine.skills.triggers import extract_triggers


def _skill(skill_id: str, triggers: list[str]) -> Skill:
    return Skill(
        id=skill_id,
        name=skill_id.title(),
        description="Demo skill.",
        body="Body.",
        triggers=extract_triggers("Demo skill.", explicit=triggers),
    )


class TestKeywordOverlapStrategy:
    """Tests for KeywordOverlapStrategy."""

    def test_keyword_match(self, registry: SkillRegistry) -> None:
        """Test that a single keyword saturates a small trigger set."""
        strategy = KeywordOverlapStrategy()
        result = strategy.score(
            Request.from_text("write tests for the login feature"),
            registry.require("writing-tests"),
        )

        assert result.skill_id == "writing-tests"
        assert result.score == 1.0
        assert result.matched_terms == ("test",)
        assert result.position == 6

    def test_phrase_match(self, registry: SkillRegistry) -> None:
        strategy = KeywordOverlapStrategy()
        result = strategy.score(
            Request.from_text("prepare a commit message"),
            registry.require("git-commit-message"),
        )

        assert result.score == 1.0
        assert result.matched_terms == ("commit message",)
        assert result.position == 10

    def test_phrase_requires_adjacent_words(self, registry: SkillRegistry) -> None:
        strategy = KeywordOverlapStrategy()
        result = strategy.score(
            Request.from_text("commit the message"),
            registry.require("git-commit-message"),
        )

        assert result.score == 0.0
        assert result.position is None

    def test_score_normalized_by_trigger_count(self) -> None:
        """Test that a loosely matching skill with many triggers scores lower."""
        words = ["alpha", "bravo", "charlie", "delta", "echo",
                 "foxtrot", "golf", "hotel", "india", "juliet"]
        skill = _skill("many", words)
        strategy = KeywordOverlapStrategy()

        assert strategy.score(Request.from_text("alpha"), skill).score == pytest.approx(1 / 3)
        assert strategy.score(Request.from_text("alpha bravo charlie"), skill).score == 1.0

    def test_phrase_weight(self) -> None:
        skill = _skill("git", ["commit message", "git", "branch", "rebase"])
        strategy = KeywordOverlapStrategy(coverage_fraction=1.0)

        assert strategy.score(Request.from_text("a commit message"), skill).score == 0.5
        assert strategy.score(Request.from_text("git"), skill).score == 0.25

    def test_skill_without_triggers(self) -> None:
        skill = Skill(id="bare", name="Bare", description="It.", body="Body.")

        assert KeywordOverlapStrategy().score(Request.from_text("anything"), skill).score == 0.0

    def test_morphological_variants_match(self, registry: SkillRegistry) -> None:
        result = KeywordOverlapStrategy().score(
            Request.from_text("I am testing the parser"),
            registry.require("writing-tests"),
        )

        assert result.score == 1.0

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"phrase_weight": 0},
            {"keyword_weight": -1},
            {"coverage_fraction": 0},
            {"coverage_fraction": 1.5},
        ],
    )
    def test_invalid_parameters(self, kwargs: dict[str, float]) -> None:
        with pytest.raises(ValueError):
            KeywordOverlapStrategy(**kwargs)

    def test_repr(self) -> None:
        assert repr(KeywordOverlapStrategy()) == (
            "KeywordOverlapStrategy(phrase_weight=2.0, keyword_weight=1.0, coverage_fraction=0.3)"
        )


class TestSemanticSimilarityStrategy:
    """Tests for SemanticSimilarityStrategy."""

    def test_term_frequency_similarity(self, registry: SkillRegistry) -> None:
        strategy = SemanticSimilarityStrategy()
        request = Request.from_text("write tests for login")

        tests_result = strategy.score(request, registry.require("writing-tests"))
        commit_result = strategy.score(request, registry.require("git-commit-message"))

        assert 0.0 < tests_result.score <= 1.0
        assert tests_result.score > commit_result.score
        assert tests_result.matched_terms == ("write", "tests")
        assert tests_result.position == 0

    def test_no_shared_terms(self, registry: SkillRegistry) -> None:
        result = SemanticSimilarityStrategy().score(
            Request.from_text("summarize this PDF"),
            registry.require("writing-tests"),
        )

        assert result.score == 0.0

    def test_custom_embedding(self, registry: SkillRegistry) -> None:
        """Test that a dense embedding function drives the score."""

        def embed(text: str) -> list[float]:
            return [1.0, 0.0] if "test" in text.lower() else [0.0, 1.0]

        strategy = SemanticSimilarityStrategy(embed=embed)
        request = Request.from_text("tests please")

        assert strategy.score(request, registry.require("writing-tests")).score == 1.0
        assert strategy.score(request, registry.require("git-commit-message")).score == 0.0

    def test_negative_similarity_is_clamped(self, registry: SkillRegistry) -> None:
        def embed(text: str) -> list[float]:
            return [-1.0, 0.0] if text == "opposite" else [1.0, 0.0]

        result = SemanticSimilarityStrategy(embed=embed).score(
            Request.from_text("opposite"), registry.require("writing-tests")
        )

        assert result.score == 0.0


class TestBuildStrategy:
    """Tests for build_strategy."""

    def test_keyword(self) -> None:
        strategy = build_strategy(ScoringConfig(phrase_weight=3.0))

        assert isinstance(strategy, KeywordOverlapStrategy)
        assert strategy.phrase_weight == 3.0

    def test_semantic(self) -> None:
        assert isinstance(
            build_strategy(ScoringConfig(strategy="semantic")), SemanticSimilarityStrategy
        )

    def test_unknown(self) -> None:
        config = ScoringConfig.model_construct(strategy="fuzzy")

        with pytest.raises(ValueError, match="Unknown scoring strategy"):
            build_strategy(config)
