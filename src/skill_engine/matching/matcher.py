"""Trigger matcher: score a request against every registered skill."""

from __future__ import annotations

import logging

from skill_engine.matching.result import MatchResult, Request
from skill_engine.matching.strategies import KeywordOverlapStrategy, ScoringStrategy
from skill_engine.skills.registry import SkillRegistry

logger = logging.getLogger(__name__)


class TriggerMatcher:
    """Rank skills by how well their triggers match a request.

    The scoring function is delegated to a ``ScoringStrategy`` so that the
    matching algorithm can be swapped without touching the registry,
    activation, or composition.

    Example::

        matcher = TriggerMatcher()
        for result in matcher.match("write tests for login", registry):
            print(result.skill_id, result.score, result.matched_terms)

    Args:
        strategy: Scoring strategy. Defaults to ``KeywordOverlapStrategy()``.
    """

    def __init__(self, strategy: ScoringStrategy | None = None) -> None:
        self._strategy = strategy or KeywordOverlapStrategy()

    @property
    def strategy(self) -> ScoringStrategy:
        """The scoring strategy in use."""
        return self._strategy

    def match(self, request_text: str, registry: SkillRegistry) -> list[MatchResult]:
        """Score every skill and return those with a positive score.

        Args:
            request_text: Free-text request.
            registry: Skills to score.

        Returns:
            Results by descending score; ties go to the skill registered first.
        """
        request = Request.from_text(request_text)
        results = [
            result
            for result in (self._strategy.score(request, skill) for skill in registry)
            if result.score > 0
        ]
        results.sort(key=lambda r: (-r.score, registry.position(r.skill_id)))

        if results:
            logger.debug(
                "Matched %s",
                ", ".join(f"{r.skill_id}={r.score:.3f}" for r in results),
            )
        return results


def match(
    request_text: str,
    registry: SkillRegistry,
    strategy: ScoringStrategy | None = None,
) -> list[MatchResult]:
    """Score ``request_text`` against ``registry`` (see ``TriggerMatcher.match``)."""
    return TriggerMatcher(strategy).match(request_text, registry)
