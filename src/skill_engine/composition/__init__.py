"""Composition of active skills into merged guidance.

Classes:
    Composer: Assembles active skill bodies and marks overlapping headings.
    ConflictResolver: Raises advisories for overlaps and contradictions.
    MergedGuidance: Ordered guidance blocks plus overlaps and advisories.
    GuidanceBlock: One labeled skill body.
    OverlapRegion: Sections from different skills sharing a heading.
    Advisory: Non-fatal annotation about a pair of skills.
    AdvisoryKind: Redundant or conflicting.
"""

from __future__ import annotations

from skill_engine.composition.composer import Composer, compose, extract_sections
from skill_engine.composition.models import (
    Advisory,
    AdvisoryKind,
    GuidanceBlock,
    MergedGuidance,
    OverlapRegion,
    Section,
)
from skill_engine.composition.resolver import ConflictResolver, extract_directives, resolve
from skill_engine.composition.template import DEFAULT_BLOCK_TEMPLATE, render_guidance

__all__ = [
    "DEFAULT_BLOCK_TEMPLATE",
    "Advisory",
    "AdvisoryKind",
    "Composer",
    "ConflictResolver",
    "GuidanceBlock",
    "MergedGuidance",
    "OverlapRegion",
    "Section",
    "compose",
    "extract_directives",
    "extract_sections",
    "render_guidance",
    "resolve",
]
