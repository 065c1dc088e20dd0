"""Request and match result types."""

from __future__ import annotations

from dataclasses import dataclass

from skill_engine.text import Token, tokenize


@dataclass(frozen=True)
class Request:
    """A request tokenized once for every strategy and skill.

    Attributes:
        text: Original request text.
        tokens: Normalized tokens of ``text``.
    """

    text: str
    tokens: tuple[Token, ...]

    @classmethod
    def from_text(cls, text: str) -> Request:
        return cls(text=text, tokens=tuple(tokenize(text)))


@dataclass(frozen=True)
class MatchResult:
    """How well one skill's triggers match one request.

    Attributes:
        skill_id: Id of the scored skill.
        score: Relevance in ``[0.0, 1.0]``.
        matched_terms: Triggers (or shared terms) that matched, in
            declaration order.
        position: Character offset in the request of the earliest match,
            or ``None`` when the strategy cannot locate one.
    """

    skill_id: str
    score: float
    matched_terms: tuple[str, ...] = ()
    position: int | None = None
