"""Skill header validation and id resolution.

Checks parsed frontmatter against the skill schema. Nothing here raises;
every problem is collected into a ``ValidationResult`` so that the loader
can report all of a source's problems at once.
"""

from __future__ import annotations

import re
from typing import Any

from skill_engine.skills.config import ValidationResult
from skill_engine.skills.triggers import Trigger, extract_triggers

# Id format: lowercase alphanumeric + hyphens, max 64 chars
_ID_PATTERN = re.compile(r"^[a-z0-9]([a-z0-9-]*[a-z0-9])?$")
_ID_MAX_LENGTH = 64

_SLUG_PATTERN = re.compile(r"[^a-z0-9]+")

_REQUIRED_FIELDS = ("name", "description")

# Unknown fields produce warnings, not errors.
_KNOWN_FIELDS: set[str] = {
    "id",
    "name",
    "description",
    "triggers",
    "metadata",
    "license",
    "version",
}

_FIELD_TYPES: dict[str, tuple[type | tuple[type, ...], str]] = {
    "id": (str, "string"),
    "name": (str, "string"),
    "description": (str, "string"),
    "triggers": (list, "list of strings"),
    "metadata": (dict, "mapping (key-value pairs)"),
    "license": (str, "string"),
    "version": ((str, int, float), "string"),
}


def slugify(text: str) -> str:
    """Turn a display name into an id candidate (``"Writing Tests"`` -> ``"writing-tests"``)."""
    return _SLUG_PATTERN.sub("-", text.lower()).strip("-")


def resolve_skill_id(data: dict[str, Any], default_id: str | None = None) -> str | None:
    """Determine the id for a skill.

    Precedence: header ``id``, then the source's default id, then a slug
    of the header ``name``.

    Args:
        data: Parsed frontmatter.
        default_id: Id implied by the source location, if any.

    Returns:
        The resolved id, or ``None`` if nothing usable is available.
    """
    declared = data.get("id")
    if isinstance(declared, str) and declared.strip():
        return declared.strip()
    if default_id:
        return default_id
    name = data.get("name")
    if isinstance(name, str) and name.strip():
        return slugify(name) or None
    return None


def validate_frontmatter(
    data: dict[str, Any],
    *,
    default_id: str | None = None,
) -> ValidationResult:
    """Validate parsed frontmatter against the skill schema.

    Checks required fields, field types, id format, and trigger entries,
    requires at least one trigger that can match a request, and reports
    unknown fields as warnings.

    Args:
        data: Parsed YAML frontmatter as a dictionary.
        default_id: Id implied by the source location, if any.

    Returns:
        ValidationResult with valid flag, errors, warnings, and skill id.
    """
    errors: list[str] = []
    warnings: list[str] = []

    for field_name in _REQUIRED_FIELDS:
        value = data.get(field_name)
        if field_name not in data or value is None:
            errors.append(f"Missing required field: '{field_name}'")
        elif isinstance(value, str) and not value.strip():
            errors.append(f"Field '{field_name}' must not be empty")

    for field_name, (expected_type, type_desc) in _FIELD_TYPES.items():
        value = data.get(field_name)
        if value is not None and not isinstance(value, expected_type):
            errors.append(
                f"Field '{field_name}' must be {type_desc}, got {type(value).__name__}"
            )

    triggers = data.get("triggers")
    triggers_ok = triggers is None or isinstance(triggers, list)
    if isinstance(triggers, list):
        for i, item in enumerate(triggers):
            if not isinstance(item, str) or not item.strip():
                errors.append(f"Field 'triggers' item at index {i} must be a non-empty string")
                triggers_ok = False
            elif Trigger.from_text(item) is None:
                errors.append(f"Field 'triggers' item at index {i} has no matchable words")
                triggers_ok = False

    description = data.get("description")
    if (
        triggers_ok
        and isinstance(description, str)
        and description.strip()
        and not extract_triggers(description, triggers)
    ):
        errors.append(
            "Skill has no matchable triggers: declare 'triggers' or describe "
            "the skill with content words"
        )

    skill_id = resolve_skill_id(data, default_id)
    if skill_id is None:
        if "name" in data:
            errors.append("Could not derive a skill id from 'name'")
    elif len(skill_id) > _ID_MAX_LENGTH:
        errors.append(
            f"Skill id '{skill_id}' exceeds maximum length of {_ID_MAX_LENGTH} characters"
        )
    elif not _ID_PATTERN.match(skill_id):
        errors.append(
            f"Skill id '{skill_id}' must be lowercase alphanumeric with hyphens "
            "and must not start or end with a hyphen"
        )

    for key in data:
        if key not in _KNOWN_FIELDS:
            warnings.append(f"Unknown frontmatter field: '{key}'")

    return ValidationResult(
        valid=not errors,
        errors=errors,
        warnings=warnings,
        skill_id=skill_id,
    )


def validate(
    data: dict[str, Any],
    body: str | None,
    *,
    default_id: str | None = None,
) -> ValidationResult:
    """Validate a whole skill: frontmatter plus body.

    Args:
        data: Parsed YAML frontmatter.
        body: Markdown body following the frontmatter, if any.
        default_id: Id implied by the source location, if any.

    Returns:
        ValidationResult covering both header and body.
    """
    result = validate_frontmatter(data, default_id=default_id)
    if body is None or not body.strip():
        result.errors.append("Missing skill body")
        result.valid = False
    return result
