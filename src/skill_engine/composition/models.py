"""Composition data models."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


@dataclass(frozen=True)
class GuidanceBlock:
    """One active skill's guidance, labeled and verbatim.

    Attributes:
        skill_id: Id of the skill.
        name: Display label of the skill.
        body: Skill body, exactly as loaded.
    """

    skill_id: str
    name: str
    body: str


@dataclass(frozen=True)
class Section:
    """A headed region inside a skill body.

    Attributes:
        skill_id: Skill whose body contains the section.
        heading: Heading text as written (markers stripped).
        line: Zero-based line number of the heading within the body.
        text: Lines under the heading, up to the next heading.
    """

    skill_id: str
    heading: str
    line: int
    text: str


@dataclass(frozen=True)
class OverlapRegion:
    """Sections from different active skills that share a topic.

    Attributes:
        topic: Heading of the first section in the region.
        sections: One section per skill, in active-set order.
    """

    topic: str
    sections: tuple[Section, ...]

    @property
    def skill_ids(self) -> tuple[str, ...]:
        return tuple(section.skill_id for section in self.sections)


class AdvisoryKind(str, Enum):
    """Kind of advisory.

    Attributes:
        REDUNDANT: Both skills cover the same topic; safe to note.
        CONFLICT: The skills appear to give opposite guidance.
    """

    REDUNDANT = "redundant"
    CONFLICT = "conflict"


@dataclass(frozen=True)
class Advisory:
    """Non-fatal annotation about two active skills' guidance.

    Attributes:
        skill_id_a: Skill that comes first in the active set.
        skill_id_b: Skill that comes second.
        topic: Shared heading or contested term.
        note: Human-readable explanation.
        kind: Redundant or conflicting.
    """

    skill_id_a: str
    skill_id_b: str
    topic: str
    note: str
    kind: AdvisoryKind = AdvisoryKind.REDUNDANT


@dataclass(frozen=True)
class MergedGuidance:
    """Final artifact handed to the consumer for one request.

    Attributes:
        blocks: One block per active skill, in active-set order.
        overlaps: Regions marked by the composer for conflict review.
        advisories: Annotations raised by the conflict resolver.
    """

    blocks: tuple[GuidanceBlock, ...] = ()
    overlaps: tuple[OverlapRegion, ...] = ()
    advisories: tuple[Advisory, ...] = ()

    @property
    def skill_ids(self) -> tuple[str, ...]:
        """Ids of the composed skills, in order."""
        return tuple(block.skill_id for block in self.blocks)

    @property
    def pairs(self) -> tuple[tuple[str, str], ...]:
        """``(skill_id, body)`` pairs, in order."""
        return tuple((block.skill_id, block.body) for block in self.blocks)

    @property
    def is_empty(self) -> bool:
        return not self.blocks

    def with_advisories(self, advisories: tuple[Advisory, ...] | list[Advisory]) -> MergedGuidance:
        """Return a copy carrying the given advisories."""
        return replace(self, advisories=tuple(advisories))

    def render(self, template: str | None = None) -> str:
        """Render the guidance as one context string.

        Args:
            template: Jinja2 template source. Uses the default block
                template if ``None``.

        Returns:
            The rendered text; empty when there is no guidance.
        """
        from skill_engine.composition.template import render_guidance

        return render_guidance(self, template)

    def __len__(self) -> int:
        return len(self.blocks)
