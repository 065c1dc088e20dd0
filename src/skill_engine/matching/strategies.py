"""Pluggable trigger scoring strategies.

Every strategy maps ``(request, skill)`` to a ``MatchResult`` with a score
in ``[0.0, 1.0]``. Strategies hold configuration only; they keep no state
between calls, so one instance can serve concurrent requests.

Strategies:
    KeywordOverlapStrategy: Weighted phrase/keyword overlap (default).
    SemanticSimilarityStrategy: Cosine similarity between request and
        skill profile, over term frequencies or a caller-supplied embedding.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from collections import Counter
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from skill_engine.matching.result import MatchResult, Request
from skill_engine.skills.config import Skill
from skill_engine.skills.triggers import Trigger, TriggerKind
from skill_engine.text import find_sequence, is_stopword, tokenize

if TYPE_CHECKING:
    from skill_engine.config.settings import ScoringConfig

Embedder = Callable[[str], Sequence[float]]


class ScoringStrategy(ABC):
    """Interface for scoring a request against one skill."""

    name: str = "abstract"

    @abstractmethod
    def score(self, request: Request, skill: Skill) -> MatchResult:
        """Score one skill against a request.

        Args:
            request: Tokenized request.
            skill: Skill to score.

        Returns:
            Match result; a score of ``0.0`` means no relevance.
        """
        ...


class KeywordOverlapStrategy(ScoringStrategy):
    """Score skills by the weighted share of their triggers found in the request.

    A phrase trigger matches when its stems appear contiguously in the
    request; a keyword trigger matches anywhere. The summed weights are
    normalized by the skill's own trigger count::

        score = min(1.0, matched_weight / max(1, n_triggers * coverage_fraction))

    so a skill with one precise phrase is not drowned out by a skill with
    many loosely-matching keywords.

    Args:
        phrase_weight: Weight of a matched phrase trigger.
        keyword_weight: Weight of a matched keyword trigger.
        coverage_fraction: Fraction of a skill's triggers whose keyword
            weight saturates its score.
    """

    name = "keyword"

    def __init__(
        self,
        phrase_weight: float = 2.0,
        keyword_weight: float = 1.0,
        coverage_fraction: float = 0.3,
    ) -> None:
        if phrase_weight <= 0 or keyword_weight <= 0:
            raise ValueError("Trigger weights must be positive")
        if not 0 < coverage_fraction <= 1:
            raise ValueError("coverage_fraction must be in (0, 1]")
        self.phrase_weight = phrase_weight
        self.keyword_weight = keyword_weight
        self.coverage_fraction = coverage_fraction

    def _locate(self, request: Request, trigger: Trigger) -> int | None:
        if trigger.kind is TriggerKind.PHRASE:
            index = find_sequence(request.tokens, trigger.stems)
            return None if index is None else request.tokens[index].start
        target = trigger.stems[0]
        for token in request.tokens:
            if token.stem == target:
                return token.start
        return None

    def score(self, request: Request, skill: Skill) -> MatchResult:
        if not skill.triggers:
            return MatchResult(skill_id=skill.id, score=0.0)

        matched: list[str] = []
        weight = 0.0
        first: int | None = None
        for trigger in skill.triggers:
            position = self._locate(request, trigger)
            if position is None:
                continue
            matched.append(trigger.text)
            weight += (
                self.phrase_weight if trigger.kind is TriggerKind.PHRASE else self.keyword_weight
            )
            first = position if first is None else min(first, position)

        normalizer = max(1.0, len(skill.triggers) * self.coverage_fraction)
        return MatchResult(
            skill_id=skill.id,
            score=min(1.0, weight / normalizer),
            matched_terms=tuple(matched),
            position=first,
        )

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(phrase_weight={self.phrase_weight}, "
            f"keyword_weight={self.keyword_weight}, coverage_fraction={self.coverage_fraction})"
        )


def _profile(skill: Skill) -> str:
    """Text that represents a skill for similarity scoring."""
    return " ".join([skill.name, skill.description, *(t.text for t in skill.triggers)])


def _cosine(a: Sequence[float], b: Sequence[float]) -> float:
    dot = sum(x * y for x, y in zip(a, b))
    norm = math.sqrt(sum(x * x for x in a)) * math.sqrt(sum(y * y for y in b))
    if norm < 1e-12:
        return 0.0
    return dot / norm


class SemanticSimilarityStrategy(ScoringStrategy):
    """Score skills by cosine similarity between request and skill profile.

    A skill's profile is its name, description, and trigger texts. Without
    an ``embed`` callable, both sides are compared as stemmed term-frequency
    vectors (stopwords dropped), which keeps the engine free of network
    calls and reports the shared terms as matches. With ``embed``, any
    dense embedding can be plugged in; matched terms and position are then
    unavailable.

    Args:
        embed: Optional function mapping text to a dense vector.
    """

    name = "semantic"

    def __init__(self, embed: Embedder | None = None) -> None:
        self._embed = embed

    def score(self, request: Request, skill: Skill) -> MatchResult:
        if self._embed is not None:
            similarity = _cosine(self._embed(request.text), self._embed(_profile(skill)))
            return MatchResult(skill_id=skill.id, score=max(0.0, min(1.0, similarity)))

        request_terms = [t for t in request.tokens if not is_stopword(t)]
        skill_counts = Counter(t.stem for t in tokenize(_profile(skill)) if not is_stopword(t))
        request_counts = Counter(t.stem for t in request_terms)
        shared = request_counts.keys() & skill_counts.keys()
        if not shared:
            return MatchResult(skill_id=skill.id, score=0.0)

        vocabulary = sorted(request_counts.keys() | skill_counts.keys())
        similarity = _cosine(
            [request_counts[term] for term in vocabulary],
            [skill_counts[term] for term in vocabulary],
        )

        matched: list[str] = []
        first: int | None = None
        for token in request_terms:
            if token.stem in shared and token.text not in matched:
                matched.append(token.text)
                first = token.start if first is None else first
        return MatchResult(
            skill_id=skill.id,
            score=min(1.0, similarity),
            matched_terms=tuple(matched),
            position=first,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(embed={self._embed!r})"


def build_strategy(config: ScoringConfig, *, embed: Embedder | None = None) -> ScoringStrategy:
    """Create the strategy named in a scoring config.

    Args:
        config: Scoring configuration.
        embed: Embedding function for the semantic strategy, if any.

    Returns:
        A configured strategy.

    Raises:
        ValueError: If the strategy name is unknown.
    """
    if config.strategy == "keyword":
        return KeywordOverlapStrategy(
            phrase_weight=config.phrase_weight,
            keyword_weight=config.keyword_weight,
            coverage_fraction=config.coverage_fraction,
        )
    if config.strategy == "semantic":
        return SemanticSimilarityStrategy(embed=embed)
    raise ValueError(
        f"Unknown scoring strategy: {config.strategy!r}. Valid strategies: keyword, semantic"
    )
