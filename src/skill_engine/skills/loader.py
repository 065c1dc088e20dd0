"""Skill source reader and parser.

Parses skill documents with YAML frontmatter and a markdown body::

    ---
    name: Writing Tests
    description: Guidance for writing and organizing tests
    triggers: [test, spec, coverage]
    ---

    # Writing tests
    ...

``read_source(path)`` turns a file into a ``SkillSource``;
``parse_source(source)`` turns a ``SkillSource`` into a validated ``Skill``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from skill_engine.skills.config import Skill, SkillSource
from skill_engine.skills.errors import SkillParseError, SkillValidationError
from skill_engine.skills.triggers import extract_triggers
from skill_engine.skills.validator import validate

logger = logging.getLogger(__name__)

SKILL_FILENAME = "SKILL.md"

# Maximum recommended body size in estimated tokens (chars / 4 heuristic).
DEFAULT_LARGE_BODY_TOKEN_THRESHOLD = 5000


def _split_frontmatter(content: str, origin: str) -> tuple[str, str | None]:
    """Split a skill document into frontmatter YAML and markdown body.

    Expects content beginning with ``---`` on the first line and a closing
    ``---`` delimiter. Only the first pair of markers is used, so horizontal
    rules (``---``) in the body are preserved.

    Args:
        content: Raw document content.
        origin: Source label (for error messages).

    Returns:
        Tuple of (frontmatter_yaml, body_or_none). Body is ``None`` when
        there is no content after the closing ``---``.

    Raises:
        SkillParseError: If the ``---`` delimiters are missing or malformed.
    """
    stripped = content.lstrip("\ufeff").lstrip()
    if not stripped.startswith("---"):
        raise SkillParseError(origin, "Missing opening '---' frontmatter delimiter")

    lines = stripped.split("\n")
    closing_idx = None
    for i, line in enumerate(lines[1:], start=1):
        if line.strip() == "---":
            closing_idx = i
            break

    if closing_idx is None:
        raise SkillParseError(origin, "Missing closing '---' frontmatter delimiter")

    frontmatter_yaml = "\n".join(lines[1:closing_idx])
    body_text = "\n".join(lines[closing_idx + 1 :]).strip("\n")

    body: str | None = body_text if body_text.strip() else None
    return frontmatter_yaml, body


def _parse_yaml(yaml_str: str, origin: str) -> dict[str, Any]:
    """Parse YAML frontmatter into a dictionary.

    Args:
        yaml_str: Raw YAML string extracted from frontmatter.
        origin: Source label (for error messages).

    Returns:
        Parsed dictionary of frontmatter fields.

    Raises:
        SkillParseError: If the YAML is invalid or not a mapping.
    """
    try:
        data = yaml.safe_load(yaml_str)
    except yaml.YAMLError as exc:
        detail = str(exc)
        mark = getattr(exc, "problem_mark", None)
        if mark is not None:
            detail = (
                f"YAML syntax error at line {mark.line + 1}, "
                f"column {mark.column + 1}: {getattr(exc, 'problem', exc)}"
            )
        raise SkillParseError(origin, detail) from exc

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise SkillParseError(
            origin,
            "Frontmatter must be a YAML mapping, got " + type(data).__name__,
        )

    return data


def default_id_for(path: Path) -> str:
    """Id implied by a file's location.

    ``skills/writing-tests/SKILL.md`` -> ``writing-tests``;
    ``skills/writing-tests.md`` -> ``writing-tests``.
    """
    if path.name == SKILL_FILENAME and path.parent.name:
        return path.parent.name
    return path.stem


def read_source(path: str | Path) -> SkillSource:
    """Read a skill file into a ``SkillSource``.

    Args:
        path: Path to a skill document, or a directory holding ``SKILL.md``.

    Returns:
        The raw source.

    Raises:
        SkillParseError: If the file is missing or cannot be read.
    """
    file_path = Path(path)
    if file_path.is_dir():
        file_path = file_path / SKILL_FILENAME

    if not file_path.exists():
        raise SkillParseError(str(file_path), "File not found")

    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SkillParseError(str(file_path), f"Could not read file ({exc})") from exc

    return SkillSource(origin=str(file_path), text=text, default_id=default_id_for(file_path))


def parse_source(
    source: SkillSource,
    *,
    large_body_token_threshold: int = DEFAULT_LARGE_BODY_TOKEN_THRESHOLD,
) -> Skill:
    """Parse and validate a skill source.

    All header and body problems in the source are reported together.

    Args:
        source: Raw skill document.
        large_body_token_threshold: Estimated token count above which a
            warning is logged for the body.

    Returns:
        The validated ``Skill`` with compiled triggers.

    Raises:
        SkillParseError: If frontmatter delimiters or YAML syntax is invalid.
        SkillValidationError: If required fields are missing or invalid.
    """
    frontmatter_yaml, body = _split_frontmatter(source.text, source.origin)
    data = _parse_yaml(frontmatter_yaml, source.origin)
    result = validate(data, body, default_id=source.default_id)

    for warning in result.warnings:
        logger.warning("%s: %s", source.origin, warning)

    if not result.valid or result.skill_id is None or body is None:
        raise SkillValidationError(source.origin, result.errors, skill_id=result.skill_id)

    estimated_tokens = len(body) // 4
    if estimated_tokens > large_body_token_threshold:
        logger.warning(
            "Skill '%s' body is approximately %d tokens (recommended: <%d).",
            result.skill_id,
            estimated_tokens,
            large_body_token_threshold,
        )

    description = data["description"].strip()
    return Skill(
        id=result.skill_id,
        name=data["name"].strip(),
        description=description,
        body=body,
        triggers=extract_triggers(description, data.get("triggers")),
        origin=source.origin,
        metadata=data.get("metadata") or {},
    )
