"""Activation policy: decide which scored skills fire for a request.

Every candidate whose score reaches the threshold fires, so several skills
can be active at once. Naming a skill explicitly in the request forces it
on regardless of score. The resulting ``ActiveSet`` is ordered by:

1. descending score,
2. position of the skill's first matched trigger (or mention) in the
   request, earlier first,
3. registration order.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from skill_engine.matching.result import MatchResult
from skill_engine.skills.registry import SkillRegistry
from skill_engine.text import tokenize

logger = logging.getLogger(__name__)

# Explicit invocation prefixes: "/writing-tests", "@writing-tests", "$writing-tests".
_INVOCATION_PREFIXES = "/@$"


@dataclass(frozen=True)
class Activation:
    """One skill selected for a request.

    Attributes:
        skill_id: Id of the active skill.
        score: Match score (may be below threshold when forced).
        position: Ordering position in the request text, or ``None``.
        forced: Whether the skill was activated by an explicit mention.
        matched_terms: Triggers that matched.
    """

    skill_id: str
    score: float
    position: int | None = None
    forced: bool = False
    matched_terms: tuple[str, ...] = ()


@dataclass(frozen=True)
class ActiveSet:
    """Ordered, duplicate-free set of skills active for one request.

    Iterating yields skill ids in activation order; ``entries`` exposes the
    full ``Activation`` records.
    """

    entries: tuple[Activation, ...] = ()

    @property
    def ids(self) -> tuple[str, ...]:
        """Active skill ids in order."""
        return tuple(entry.skill_id for entry in self.entries)

    def get(self, skill_id: str) -> Activation | None:
        """The activation record for a skill, if it is active."""
        for entry in self.entries:
            if entry.skill_id == skill_id:
                return entry
        return None

    def __iter__(self) -> Iterator[str]:
        return iter(self.ids)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, skill_id: object) -> bool:
        return skill_id in self.ids

    def __bool__(self) -> bool:
        return bool(self.entries)


def _mention_pattern(term: str, *, bare: bool) -> re.Pattern[str]:
    prefix = f"[{re.escape(_INVOCATION_PREFIXES)}]" if not bare else ""
    return re.compile(rf"(?<![\w-]){prefix}{re.escape(term)}(?![\w-])", re.IGNORECASE)


def find_mentions(request_text: str, registry: SkillRegistry) -> dict[str, int]:
    """Find skills named explicitly in a request.

    A mention is unambiguous when it is:

    - the skill id with an invocation prefix (``/writing-tests``),
    - a bare id that contains a hyphen (``writing-tests``), or
    - a multi-word display name that no other skill shares.

    Args:
        request_text: Free-text request.
        registry: Skills that may be mentioned.

    Returns:
        Mapping of skill id to the character offset of its first mention.
    """
    name_counts: dict[str, int] = {}
    for skill in registry:
        key = skill.name.lower()
        name_counts[key] = name_counts.get(key, 0) + 1

    mentions: dict[str, int] = {}
    for skill in registry:
        patterns = [_mention_pattern(skill.id, bare=False)]
        if "-" in skill.id:
            patterns.append(_mention_pattern(skill.id, bare=True))
        name = skill.name.lower()
        if name != skill.id and name_counts[name] == 1 and len(tokenize(name)) > 1:
            patterns.append(_mention_pattern(skill.name, bare=True))

        positions = [m.start() for p in patterns if (m := p.search(request_text))]
        if positions:
            mentions[skill.id] = min(positions)
    return mentions


class ActivationPolicy:
    """Threshold-and-override policy turning match results into an ``ActiveSet``.

    Args:
        registry: Registry the candidates were scored against.
        threshold: Minimum score for a candidate to fire.
        allow_name_override: Whether explicit mentions force activation.
    """

    def __init__(
        self,
        registry: SkillRegistry,
        *,
        threshold: float = 0.3,
        allow_name_override: bool = True,
    ) -> None:
        if not 0 <= threshold <= 1:
            raise ValueError("threshold must be in [0, 1]")
        self._registry = registry
        self.threshold = threshold
        self.allow_name_override = allow_name_override

    def activate(self, candidates: Iterable[MatchResult], request_text: str) -> ActiveSet:
        """Select and order the skills that fire for a request.

        Args:
            candidates: Match results for the request.
            request_text: The request the candidates were scored for.

        Returns:
            The ordered ``ActiveSet``; empty when nothing applies.
        """
        scored: dict[str, MatchResult] = {}
        for candidate in candidates:
            if candidate.skill_id not in self._registry:
                logger.warning("Ignoring match for unregistered skill '%s'", candidate.skill_id)
                continue
            best = scored.get(candidate.skill_id)
            if best is None or candidate.score > best.score:
                scored[candidate.skill_id] = candidate

        mentions = (
            find_mentions(request_text, self._registry) if self.allow_name_override else {}
        )

        entries: list[Activation] = []
        for skill_id in self._registry.ids:
            result = scored.get(skill_id)
            fires = result is not None and result.score >= self.threshold
            forced = not fires and skill_id in mentions
            if not (fires or forced):
                continue
            position = result.position if result is not None else None
            if position is None:
                position = mentions.get(skill_id)
            entries.append(
                Activation(
                    skill_id=skill_id,
                    score=result.score if result is not None else 0.0,
                    position=position,
                    forced=forced,
                    matched_terms=result.matched_terms if result is not None else (),
                )
            )
            if forced:
                logger.debug("Skill '%s' force-activated by explicit mention", skill_id)

        unplaced = len(request_text) + 1
        entries.sort(
            key=lambda e: (
                -e.score,
                e.position if e.position is not None else unplaced,
                self._registry.position(e.skill_id),
            )
        )
        active = ActiveSet(tuple(entries))
        logger.debug("Active skills: %s", ", ".join(active.ids) or "<none>")
        return active


def activate(
    candidates: Iterable[MatchResult],
    request_text: str,
    registry: SkillRegistry,
    *,
    threshold: float = 0.3,
    allow_name_override: bool = True,
) -> ActiveSet:
    """Apply an ``ActivationPolicy`` once (see ``ActivationPolicy.activate``)."""
    policy = ActivationPolicy(
        registry,
        threshold=threshold,
        allow_name_override=allow_name_override,
    )
    return policy.activate(candidates, request_text)
