"""Conflict resolver: annotate overlapping or contradictory guidance.

The resolver never edits skill bodies. It reads ``MergedGuidance`` and
returns advisories that a consumer can surface next to the guidance:

- every overlap region yields one advisory per pair of skills in it,
  ``CONFLICT`` when the two sections direct opposite things about the same
  term and ``REDUNDANT`` otherwise;
- outside shared headings, a term one body encourages ("use mocks heavily")
  while the other discourages it ("avoid mocks") yields a ``CONFLICT``.

Directives are recognized by cue words only. This is deliberately shallow:
advisories are prompts for a human, not verdicts.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from itertools import combinations

from skill_engine.composition.composer import heading_key
from skill_engine.composition.models import (
    Advisory,
    AdvisoryKind,
    MergedGuidance,
    OverlapRegion,
    Section,
)
from skill_engine.text import Token, is_stopword, stem, tokenize

logger = logging.getLogger(__name__)

_NEGATIVE_CUES = re.compile(
    r"\b(?:avoid|never|don't|dont|do not|shouldn't|should not|must not|mustn't|"
    r"refrain from|stop|discourage[sd]?|minimi[sz]e)\b"
)
_POSITIVE_CUES = re.compile(
    r"\b(?:always|prefer|use|favou?r|recommend(?:ed)?|encourage[sd]?|rely on|"
    r"embrace|maximi[sz]e|heavily|liberally|must|should)\b"
)
_SENTENCE_SPLIT = re.compile(r"[.!?;]+(?:\s+|$)|\n+")
_FENCE = re.compile(r"^\s*(```|~~~)", re.MULTILINE)

# Verbs that introduce the object of a directive rather than naming it.
_GENERIC_VERBS = frozenset(
    stem(word)
    for word in (
        "add", "call", "create", "do", "go", "have", "keep", "let", "make",
        "put", "rely", "run", "start", "take", "try", "write",
    )
)
_CUE_WORDS = frozenset(
    stem(word)
    for word in (
        "always", "avoid", "discourage", "dont", "encourage", "favor", "favour",
        "heavily", "liberally", "maximize", "minimize", "must", "never", "prefer",
        "recommend", "refrain", "should", "stop",
    )
)
_MIN_TERM_LENGTH = 3


@dataclass(frozen=True)
class Directive:
    """A term that a sentence encourages or discourages.

    Attributes:
        term: Stem of the directed term.
        surface: Term as written.
        polarity: ``1`` when encouraged, ``-1`` when discouraged.
    """

    term: str
    surface: str
    polarity: int


def _strip_fences(text: str) -> str:
    kept: list[str] = []
    in_fence = False
    for line in text.splitlines():
        if _FENCE.match(line):
            in_fence = not in_fence
            continue
        if not in_fence:
            kept.append(line)
    return "\n".join(kept)


def _is_term(token: Token) -> bool:
    return (
        len(token.stem) >= _MIN_TERM_LENGTH
        and not is_stopword(token)
        and token.stem not in _GENERIC_VERBS
        and token.stem not in _CUE_WORDS
    )


def _sentence_directive(sentence: str) -> Directive | None:
    normalized = sentence.lower().replace("’", "'")
    cue = _NEGATIVE_CUES.search(normalized)
    polarity = -1
    if cue is None:
        cue = _POSITIVE_CUES.search(normalized)
        polarity = 1
    if cue is None:
        return None

    tokens = tokenize(normalized)
    after = [t for t in tokens if t.start >= cue.end() and _is_term(t)]
    if after:
        term = after[0]
    else:
        before = [t for t in tokens if t.start < cue.start() and _is_term(t)]
        if not before:
            return None
        term = before[-1]
    return Directive(term=term.stem, surface=term.text, polarity=polarity)


def extract_directives(text: str) -> list[Directive]:
    """Find encourage/discourage directives in markdown text.

    Each sentence contributes at most one directive: the first cue word
    decides the polarity (negative cues win) and the first meaningful term
    after it is the object. Fenced code is ignored.

    Args:
        text: Markdown text.

    Returns:
        Directives in order of appearance.
    """
    directives = []
    for sentence in _SENTENCE_SPLIT.split(_strip_fences(text)):
        directive = _sentence_directive(sentence.strip(" \t-*>#"))
        if directive is not None:
            directives.append(directive)
    return directives


def _polarities(directives: Iterable[Directive]) -> dict[str, Directive]:
    """Map each term to its directive, dropping terms a text directs both ways."""
    by_term: dict[str, Directive] = {}
    mixed: set[str] = set()
    for directive in directives:
        seen = by_term.get(directive.term)
        if seen is None:
            by_term[directive.term] = directive
        elif seen.polarity != directive.polarity:
            mixed.add(directive.term)
    return {term: d for term, d in by_term.items() if term not in mixed}


def _opposed(left: dict[str, Directive], right: dict[str, Directive]) -> list[Directive]:
    """Directives from ``left`` whose term ``right`` directs the other way."""
    return [
        directive
        for term, directive in left.items()
        if term in right and right[term].polarity != directive.polarity
    ]


def _verb(polarity: int) -> str:
    return "encourages" if polarity > 0 else "discourages"


class ConflictResolver:
    """Raise advisories for overlapping or contradictory active skills."""

    def resolve(self, merged: MergedGuidance) -> list[Advisory]:
        """Review merged guidance and return advisories.

        Args:
            merged: Output of the composer.

        Returns:
            Advisories ordered by the active-set position of the first skill,
            then the second, then topic. Empty when nothing overlaps.
        """
        order = {skill_id: index for index, skill_id in enumerate(merged.skill_ids)}
        advisories: list[Advisory] = []
        # Terms and heading stems already reported per skill pair.
        reported: dict[tuple[str, str], set[str]] = {}

        for region in merged.overlaps:
            for first, second in combinations(self._ordered(region, order), 2):
                advisory, terms = self._region_advisory(region.topic, first, second)
                advisories.append(advisory)
                pair = (first.skill_id, second.skill_id)
                reported.setdefault(pair, set()).update(terms | heading_key(region.topic))

        directives = {
            block.skill_id: _polarities(extract_directives(block.body)) for block in merged.blocks
        }
        for first, second in combinations(merged.blocks, 2):
            pair = (first.skill_id, second.skill_id)
            already = reported.get(pair, set())
            for directive in _opposed(directives[first.skill_id], directives[second.skill_id]):
                if directive.term in already:
                    continue
                advisories.append(
                    Advisory(
                        skill_id_a=first.skill_id,
                        skill_id_b=second.skill_id,
                        topic=directive.surface,
                        note=(
                            f"'{first.skill_id}' {_verb(directive.polarity)} "
                            f"'{directive.surface}' while '{second.skill_id}' "
                            f"{_verb(-directive.polarity)} it."
                        ),
                        kind=AdvisoryKind.CONFLICT,
                    )
                )

        advisories.sort(
            key=lambda a: (order[a.skill_id_a], order[a.skill_id_b], a.topic.lower(), a.kind.value)
        )
        for advisory in advisories:
            logger.debug(
                "Advisory [%s] %s / %s: %s",
                advisory.kind.value,
                advisory.skill_id_a,
                advisory.skill_id_b,
                advisory.topic,
            )
        return advisories

    @staticmethod
    def _ordered(region: OverlapRegion, order: dict[str, int]) -> list[Section]:
        return sorted(region.sections, key=lambda s: order.get(s.skill_id, len(order)))

    @staticmethod
    def _region_advisory(
        topic: str, first: Section, second: Section
    ) -> tuple[Advisory, set[str]]:
        opposed = _opposed(
            _polarities(extract_directives(first.text)),
            _polarities(extract_directives(second.text)),
        )
        if opposed:
            surfaces = ", ".join(f"'{d.surface}'" for d in opposed)
            note = (
                f"'{first.skill_id}' and '{second.skill_id}' give opposing guidance "
                f"on {surfaces} under '{topic}'."
            )
            kind = AdvisoryKind.CONFLICT
        else:
            note = (
                f"'{first.skill_id}' and '{second.skill_id}' both give guidance "
                f"under '{topic}'; both blocks are kept as written."
            )
            kind = AdvisoryKind.REDUNDANT
        advisory = Advisory(
            skill_id_a=first.skill_id,
            skill_id_b=second.skill_id,
            topic=topic,
            note=note,
            kind=kind,
        )
        return advisory, {d.term for d in opposed}


def resolve(merged: MergedGuidance) -> list[Advisory]:
    """Resolve once with a default ``ConflictResolver``."""
    return ConflictResolver().resolve(merged)
