"""Immutable skill registry and its one-pass loader.

A registry is built once from a batch of sources and never mutated
afterwards; reloading means building a new registry. Construction either
succeeds for every source or fails with a single report listing every
offending source.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from types import MappingProxyType

from skill_engine.skills.config import Skill, SkillSource
from skill_engine.skills.discovery import expand_path
from skill_engine.skills.errors import (
    RegistryValidationError,
    SkillNotFoundError,
    SkillParseError,
    SkillValidationError,
)
from skill_engine.skills.loader import (
    DEFAULT_LARGE_BODY_TOKEN_THRESHOLD,
    parse_source,
    read_source,
)

logger = logging.getLogger(__name__)

SourceLike = SkillSource | str | Path


class SkillRegistry:
    """Read-only, ordered mapping from skill id to ``Skill``.

    Registration order is the order skills were given; it is the final
    tie-breaker when ranking skills. Instances are safe to share between
    concurrent readers since nothing can change after construction.

    Example::

        registry = load_registry([Path("skills")])
        skill = registry.require("writing-tests")
        for skill in registry:
            ...
    """

    __slots__ = ("_order", "_skills")

    def __init__(self, skills: Iterable[Skill] = ()) -> None:
        """Build a registry from already-validated skills.

        Args:
            skills: Skills in registration order.

        Raises:
            RegistryValidationError: If two skills share an id.
        """
        ordered: dict[str, Skill] = {}
        duplicates: list[SkillValidationError] = []
        for skill in skills:
            if skill.id in ordered:
                duplicates.append(
                    SkillValidationError(
                        skill.origin,
                        [
                            f"Duplicate skill id '{skill.id}' "
                            f"(also defined in {ordered[skill.id].origin})"
                        ],
                        skill_id=skill.id,
                    )
                )
                continue
            ordered[skill.id] = skill
        if duplicates:
            raise RegistryValidationError(duplicates)

        self._skills = MappingProxyType(ordered)
        self._order = MappingProxyType({skill_id: i for i, skill_id in enumerate(ordered)})

    def get(self, skill_id: str) -> Skill | None:
        """Get a skill by id, or ``None`` if it is not registered."""
        return self._skills.get(skill_id)

    def require(self, skill_id: str) -> Skill:
        """Get a skill by id.

        Raises:
            SkillNotFoundError: If the skill is not registered.
        """
        skill = self._skills.get(skill_id)
        if skill is None:
            raise SkillNotFoundError(skill_id)
        return skill

    def has(self, skill_id: str) -> bool:
        """Check if a skill is registered."""
        return skill_id in self._skills

    def position(self, skill_id: str) -> int:
        """Registration index of a skill.

        Raises:
            SkillNotFoundError: If the skill is not registered.
        """
        try:
            return self._order[skill_id]
        except KeyError:
            raise SkillNotFoundError(skill_id) from None

    @property
    def ids(self) -> tuple[str, ...]:
        """Registered ids in registration order."""
        return tuple(self._skills)

    @property
    def skills(self) -> tuple[Skill, ...]:
        """Registered skills in registration order."""
        return tuple(self._skills.values())

    def __contains__(self, skill_id: object) -> bool:
        return skill_id in self._skills

    def __iter__(self) -> Iterator[Skill]:
        return iter(self._skills.values())

    def __len__(self) -> int:
        """Return the number of registered skills."""
        return len(self._skills)

    def __repr__(self) -> str:
        """Return a string representation of the registry."""
        return f"SkillRegistry(skills={list(self._skills)})"


def _iter_sources(sources: Iterable[SourceLike]) -> Iterator[SkillSource | SkillParseError]:
    """Yield raw sources in order, turning unreadable files into errors."""
    seen: set[Path] = set()
    for item in sources:
        if isinstance(item, SkillSource):
            yield item
            continue
        for file_path in expand_path(Path(item).expanduser()):
            key = file_path.resolve() if file_path.exists() else file_path
            if key in seen:
                continue
            seen.add(key)
            try:
                yield read_source(file_path)
            except SkillParseError as exc:
                yield exc


def as_source_list(sources: Iterable[SourceLike] | SourceLike) -> list[SourceLike]:
    """Normalize one source or many into a list.

    A bare ``str`` or ``Path`` is a single source, never an iterable of
    characters or path parts.
    """
    if isinstance(sources, (SkillSource, str, Path)):
        return [sources]
    return list(sources)


def load_registry(
    sources: Iterable[SourceLike] | SourceLike,
    *,
    large_body_token_threshold: int = DEFAULT_LARGE_BODY_TOKEN_THRESHOLD,
) -> SkillRegistry:
    """Load and validate every source, then build the registry.

    Every source is checked before anything is returned: missing header
    fields, malformed frontmatter, empty bodies, unreadable files, and
    duplicate ids are all collected. No partial registry is ever produced.

    Args:
        sources: ``SkillSource`` objects and/or paths (skill files, skill
            directories, or directories of skills), or a single one.
        large_body_token_threshold: Estimated token count above which a
            warning is logged for a skill body.

    Returns:
        The immutable registry.

    Raises:
        RegistryValidationError: One entry per offending source. A duplicate
            id produces an entry for every source that declares it.
    """
    # (origin, skill or None, problems) per source, in source order.
    parsed: list[tuple[str, Skill | None, list[str]]] = []

    for source in _iter_sources(as_source_list(sources)):
        if isinstance(source, SkillParseError):
            parsed.append((source.origin, None, [source.detail]))
            continue
        try:
            skill = parse_source(source, large_body_token_threshold=large_body_token_threshold)
        except SkillParseError as exc:
            parsed.append((source.origin, None, [exc.detail]))
        except SkillValidationError as exc:
            parsed.append((source.origin, None, list(exc.errors)))
        else:
            parsed.append((source.origin, skill, []))

    indices_by_id: dict[str, list[int]] = {}
    for index, (_, skill, _) in enumerate(parsed):
        if skill is not None:
            indices_by_id.setdefault(skill.id, []).append(index)

    errors: list[SkillValidationError] = []
    for index, (origin, skill, problems) in enumerate(parsed):
        skill_id = skill.id if skill is not None else None
        if skill_id is not None and len(indices_by_id[skill_id]) > 1:
            others = ", ".join(parsed[i][0] for i in indices_by_id[skill_id] if i != index)
            problems = [*problems, f"Duplicate skill id '{skill_id}' (also defined in {others})"]
        if problems:
            errors.append(SkillValidationError(origin, problems, skill_id=skill_id))

    if errors:
        logger.error("Skill registry not created: %d invalid source(s)", len(errors))
        raise RegistryValidationError(errors)

    registry = SkillRegistry(skill for _, skill, _ in parsed if skill is not None)
    logger.info("Loaded %d skill(s): %s", len(registry), ", ".join(registry.ids))
    return registry
