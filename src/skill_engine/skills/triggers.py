"""Trigger extraction from free-text skill descriptions.

A skill's triggers are compiled once when its source is loaded:

- Explicit ``triggers:`` listed in the header are used as given.
- Otherwise the description is decomposed into quoted phrases
  (``"commit message"``) plus its content keywords.
- Quoted phrases in the description are always included.

Multi-word triggers are phrases; single words are keywords.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from skill_engine.text import is_stopword, stems, tokenize

# Straight double, curly, and backtick quotes. Single quotes collide with
# apostrophes and are not treated as phrase delimiters.
_QUOTED_PATTERN = re.compile(r"\"([^\"]+)\"|“([^”]+)”|`([^`]+)`")


class TriggerKind(str, Enum):
    """Kind of trigger, which determines its match weight.

    Attributes:
        PHRASE: Multi-word trigger matched as a contiguous run.
        KEYWORD: Single-word trigger matched anywhere in the request.
    """

    PHRASE = "phrase"
    KEYWORD = "keyword"


@dataclass(frozen=True)
class Trigger:
    """A compiled trigger phrase or keyword.

    Attributes:
        text: Trigger as written by the skill author.
        stems: Normalized token stems, in order.
        kind: Phrase or keyword.
    """

    text: str
    stems: tuple[str, ...]
    kind: TriggerKind

    @classmethod
    def from_text(cls, text: str) -> Trigger | None:
        """Compile a trigger from raw text.

        Returns:
            The compiled trigger, or ``None`` if the text has no tokens.
        """
        trigger_stems = stems(text)
        if not trigger_stems:
            return None
        kind = TriggerKind.PHRASE if len(trigger_stems) > 1 else TriggerKind.KEYWORD
        return cls(text=text.strip(), stems=trigger_stems, kind=kind)


def quoted_phrases(description: str) -> list[str]:
    """Return every quoted span in a description, in order."""
    phrases: list[str] = []
    for match in _QUOTED_PATTERN.finditer(description):
        phrase = next(group for group in match.groups() if group is not None)
        phrases.append(phrase.strip())
    return phrases


def _keywords(description: str) -> list[str]:
    unquoted = _QUOTED_PATTERN.sub(" ", description)
    return [
        token.text
        for token in tokenize(unquoted)
        if len(token.stem) >= 3 and not is_stopword(token)
    ]


def extract_triggers(
    description: str,
    explicit: Iterable[str] | None = None,
) -> tuple[Trigger, ...]:
    """Compile the trigger set for a skill.

    Triggers are deduplicated by stem sequence; the first occurrence wins
    and declaration order is preserved.

    Args:
        description: Free-text description of when the skill applies.
        explicit: Trigger phrases declared in the skill header, if any.

    Returns:
        Tuple of compiled triggers.
    """
    candidates = list(explicit) if explicit else _keywords(description)
    candidates = quoted_phrases(description) + candidates

    seen: set[tuple[str, ...]] = set()
    triggers: list[Trigger] = []
    for text in candidates:
        trigger = Trigger.from_text(text)
        if trigger is None or trigger.stems in seen:
            continue
        seen.add(trigger.stems)
        triggers.append(trigger)
    return tuple(triggers)
