"""Skill data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from skill_engine.skills.triggers import Trigger


@dataclass(frozen=True)
class SkillSource:
    """One raw skill document before parsing.

    Attributes:
        origin: Human-readable label for error reports (usually a file path).
        text: Full document text: YAML frontmatter followed by the body.
        default_id: Id to use when the header does not declare one. For
            ``SKILL.md`` files this is the containing directory name.
    """

    origin: str
    text: str
    default_id: str | None = None


class Skill(BaseModel):
    """A validated, immutable skill.

    Attributes:
        id: Unique, stable identifier.
        name: Display label.
        description: Free-text description of when the skill applies.
        body: Guidance text handed to the agent when the skill is active.
        triggers: Triggers compiled from the description at load time.
        origin: Label of the source the skill was loaded from.
        metadata: Free-form key-value metadata from the header.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str = Field(min_length=1)
    body: str = Field(min_length=1)
    triggers: tuple[Trigger, ...] = ()
    origin: str = "<memory>"
    metadata: dict[str, Any] = Field(default_factory=dict)


@dataclass
class ValidationResult:
    """Result from validating one skill source.

    Attributes:
        valid: Whether the source passed validation.
        errors: Validation error messages.
        warnings: Non-fatal findings (unknown header fields and the like).
        skill_id: Resolved skill id, if one could be determined.
    """

    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    skill_id: str | None = None
