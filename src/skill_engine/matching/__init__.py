"""Trigger matching.

Classes:
    TriggerMatcher: Scores a request against every registered skill.
    ScoringStrategy: Interface for pluggable scoring functions.
    KeywordOverlapStrategy: Weighted phrase/keyword overlap (default).
    SemanticSimilarityStrategy: Cosine similarity strategy.
    MatchResult: Score of one skill for one request.
    Request: Tokenized request text.
"""

from __future__ import annotations

from skill_engine.matching.matcher import TriggerMatcher, match
from skill_engine.matching.result import MatchResult, Request
from skill_engine.matching.strategies import (
    KeywordOverlapStrategy,
    ScoringStrategy,
    SemanticSimilarityStrategy,
    build_strategy,
)

__all__ = [
    "KeywordOverlapStrategy",
    "MatchResult",
    "Request",
    "ScoringStrategy",
    "SemanticSimilarityStrategy",
    "TriggerMatcher",
    "build_strategy",
    "match",
]
