"""Skill registry subsystem.

Loads skill documents (YAML frontmatter plus markdown body), validates them
in one pass, and exposes them through an immutable ``SkillRegistry``.

Quick Start:
    >>> from skill_engine.skills import load_registry
    >>> registry = load_registry(["skills"])
    >>> registry.require("writing-tests").name
    'Writing Tests'

Classes:
    Skill: Validated, immutable skill.
    SkillSource: Raw skill document before parsing.
    SkillRegistry: Read-only ordered mapping from id to skill.
    Trigger: Compiled trigger phrase or keyword.
    ValidationResult: Result from validating one source.

Exceptions:
    SkillEngineError: Base exception for all engine errors.
    SkillNotFoundError: Skill id not registered.
    SkillParseError: Source frontmatter cannot be parsed.
    SkillValidationError: One source fails validation.
    RegistryValidationError: Aggregated failure of registry construction.
"""

from __future__ import annotations

from skill_engine.skills.config import Skill, SkillSource, ValidationResult
from skill_engine.skills.errors import (
    RegistryValidationError,
    SkillEngineError,
    SkillNotFoundError,
    SkillParseError,
    SkillValidationError,
)
from skill_engine.skills.loader import parse_source, read_source
from skill_engine.skills.registry import SkillRegistry, load_registry
from skill_engine.skills.triggers import Trigger, TriggerKind, extract_triggers

__all__ = [
    "RegistryValidationError",
    "Skill",
    "SkillEngineError",
    "SkillNotFoundError",
    "SkillParseError",
    "SkillRegistry",
    "SkillSource",
    "SkillValidationError",
    "Trigger",
    "TriggerKind",
    "ValidationResult",
    "extract_triggers",
    "load_registry",
    "parse_source",
    "read_source",
]
