"""Composer: assemble active skills' bodies into merged guidance.

Bodies are copied verbatim and never deduplicated or truncated. The only
analysis the composer performs is locating headings that two or more active
skills share, so the conflict resolver can review those regions.

Headings are markdown ATX headings (``## Keep setup minimal``) and lines that
consist only of bold text (``**Keep setup minimal**``). Lines inside fenced
code blocks are ignored.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from skill_engine.composition.models import GuidanceBlock, MergedGuidance, OverlapRegion, Section
from skill_engine.skills.registry import SkillRegistry
from skill_engine.text import content_stems, jaccard, stems

logger = logging.getLogger(__name__)

_ATX_HEADING = re.compile(r"^\s{0,3}#{1,6}\s+(?P<text>.+?)\s*#*\s*$")
_BOLD_HEADING = re.compile(r"^\s*(?:\*\*(?P<star>[^*]+?)\*\*|__(?P<under>[^_]+?)__):?\s*$")
_FENCE = re.compile(r"^\s*(```|~~~)")


def _heading_text(line: str) -> str | None:
    match = _ATX_HEADING.match(line)
    if match is not None:
        return match.group("text").strip()
    match = _BOLD_HEADING.match(line)
    if match is not None:
        return (match.group("star") or match.group("under")).strip().rstrip(":").strip()
    return None


def extract_sections(skill_id: str, body: str) -> list[Section]:
    """Split a skill body into headed sections.

    Args:
        skill_id: Skill the body belongs to.
        body: Markdown body.

    Returns:
        Sections in order of appearance. Text before the first heading
        belongs to no section.
    """
    lines = body.splitlines()
    headings: list[tuple[int, str]] = []
    in_fence = False
    for number, line in enumerate(lines):
        if _FENCE.match(line):
            in_fence = not in_fence
            continue
        if in_fence:
            continue
        text = _heading_text(line)
        if text:
            headings.append((number, text))

    sections = []
    for index, (number, text) in enumerate(headings):
        end = headings[index + 1][0] if index + 1 < len(headings) else len(lines)
        sections.append(
            Section(
                skill_id=skill_id,
                heading=text,
                line=number,
                text="\n".join(lines[number + 1 : end]).strip(),
            )
        )
    return sections


def heading_key(heading: str) -> frozenset[str]:
    """Normalized stem set used to compare headings.

    Falls back to every stem when a heading is made only of stopwords, so
    that e.g. "What to do" still compares against itself.
    """
    return content_stems(heading) or frozenset(stems(heading))


class Composer:
    """Assemble an ``ActiveSet`` into ``MergedGuidance``.

    Args:
        overlap_similarity: Minimum Jaccard similarity of two headings'
            stem sets for them to count as the same topic.
    """

    def __init__(self, overlap_similarity: float = 0.8) -> None:
        if not 0 < overlap_similarity <= 1:
            raise ValueError("overlap_similarity must be in (0, 1]")
        self.overlap_similarity = overlap_similarity

    def compose(self, active_set: Iterable[str], registry: SkillRegistry) -> MergedGuidance:
        """Build one labeled block per active skill, in active-set order.

        Args:
            active_set: Active skill ids in order (an ``ActiveSet`` works).
            registry: Registry holding the skills.

        Returns:
            Merged guidance with overlap regions marked and no advisories.

        Raises:
            SkillNotFoundError: If an id is not in the registry.
        """
        blocks: list[GuidanceBlock] = []
        seen: set[str] = set()
        for skill_id in active_set:
            if skill_id in seen:
                continue
            seen.add(skill_id)
            skill = registry.require(skill_id)
            blocks.append(GuidanceBlock(skill_id=skill.id, name=skill.name, body=skill.body))

        overlaps = self.find_overlaps(blocks)
        if overlaps:
            logger.debug(
                "Overlapping topics: %s",
                "; ".join(f"{o.topic} ({', '.join(o.skill_ids)})" for o in overlaps),
            )
        return MergedGuidance(blocks=tuple(blocks), overlaps=tuple(overlaps))

    def find_overlaps(self, blocks: Iterable[GuidanceBlock]) -> list[OverlapRegion]:
        """Group headings shared by two or more blocks.

        Each region holds at most one section per skill. Regions are
        ordered by the first section that opened them.

        Args:
            blocks: Guidance blocks in active-set order.

        Returns:
            Overlap regions spanning at least two skills.
        """
        groups: list[tuple[frozenset[str], list[Section]]] = []
        for block in blocks:
            for section in extract_sections(block.skill_id, block.body):
                key = heading_key(section.heading)
                if not key:
                    continue
                for group_key, members in groups:
                    if any(m.skill_id == section.skill_id for m in members):
                        continue
                    if key == group_key or jaccard(key, group_key) >= self.overlap_similarity:
                        members.append(section)
                        break
                else:
                    groups.append((key, [section]))

        return [
            OverlapRegion(topic=members[0].heading, sections=tuple(members))
            for _, members in groups
            if len(members) > 1
        ]


def compose(
    active_set: Iterable[str],
    registry: SkillRegistry,
    *,
    overlap_similarity: float = 0.8,
) -> MergedGuidance:
    """Compose once with a default ``Composer`` (see ``Composer.compose``)."""
    return Composer(overlap_similarity).compose(active_set, registry)
