"""Guidance testing harness for skill authors.

Provides ``GuidanceTestHarness`` for checking which skills a request
activates, in what order, and what guidance results, and a
``guidance_harness`` pytest fixture for convenient test setup.
"""

from __future__ import annotations

from collections.abc import Iterable

import pytest

from skill_engine.activation import ActiveSet
from skill_engine.composition.models import MergedGuidance
from skill_engine.config.settings import EngineSettings
from skill_engine.engine import GuidanceEngine
from skill_engine.skills.config import Skill
from skill_engine.skills.registry import SkillRegistry, SourceLike, as_source_list


class GuidanceTestHarness:
    """Test harness for exercising skills against sample requests.

    Accepts either skill sources (paths or ``SkillSource`` objects), which
    go through the full load and validation path, or pre-built ``Skill``
    instances.

    Example::

        harness = GuidanceTestHarness(sources=[Path("skills")])
        harness.assert_activates("write tests for login", "writing-tests")
        harness.assert_order(
            "write tests, then a commit message",
            "writing-tests",
            "git-commit-message",
        )

    Args:
        sources: Skill files, directories, or ``SkillSource`` objects.
        skills: Pre-built ``Skill`` instances to register directly.
        settings: Engine settings. Uses defaults if ``None``.

    Raises:
        ValueError: If neither ``sources`` nor ``skills`` is provided.
    """

    def __init__(
        self,
        sources: Iterable[SourceLike] | SourceLike | None = None,
        skills: Iterable[Skill] | None = None,
        settings: EngineSettings | None = None,
    ) -> None:
        if sources is None and skills is None:
            raise ValueError("Either 'sources' or 'skills' must be provided")

        self._sources = as_source_list(sources) if sources is not None else None
        self._skills = list(skills) if skills is not None else None
        self._engine = GuidanceEngine(settings or EngineSettings())
        self._loaded = False

    @property
    def engine(self) -> GuidanceEngine:
        """The engine under test (loads skills on first access)."""
        self.load()
        return self._engine

    def load(self) -> SkillRegistry:
        """Load the skills once and return the registry.

        Raises:
            RegistryValidationError: If any source is invalid.
        """
        if not self._loaded:
            if self._sources is not None:
                self._engine.load(self._sources)
            else:
                self._engine = GuidanceEngine(
                    self._engine.settings,
                    registry=SkillRegistry(self._skills or ()),
                )
            self._loaded = True
        return self._engine.registry

    def select(self, request_text: str) -> ActiveSet:
        return self.engine.select(request_text)

    def guide(self, request_text: str) -> MergedGuidance:
        return self.engine.guide(request_text)

    def scores(self, request_text: str) -> dict[str, float]:
        """Positive match scores by skill id."""
        return {r.skill_id: r.score for r in self.engine.match(request_text)}

    def assert_activates(self, request_text: str, *skill_ids: str) -> None:
        """Assert that every given skill is active for the request."""
        active = self.select(request_text)
        missing = [skill_id for skill_id in skill_ids if skill_id not in active]
        if missing:
            raise AssertionError(
                f"Expected {missing} to activate for {request_text!r}; "
                f"active={list(active.ids)}, scores={self.scores(request_text)}"
            )

    def assert_not_activates(self, request_text: str, *skill_ids: str) -> None:
        """Assert that none of the given skills is active for the request."""
        active = self.select(request_text)
        unexpected = [skill_id for skill_id in skill_ids if skill_id in active]
        if unexpected:
            raise AssertionError(
                f"Expected {unexpected} not to activate for {request_text!r}; "
                f"scores={self.scores(request_text)}"
            )

    def assert_order(self, request_text: str, *skill_ids: str) -> None:
        """Assert that the active set is exactly ``skill_ids``, in order."""
        active = self.select(request_text)
        if active.ids != tuple(skill_ids):
            raise AssertionError(
                f"Expected active skills {list(skill_ids)} for {request_text!r}, "
                f"got {list(active.ids)}"
            )


@pytest.fixture
def guidance_harness():
    """Pytest fixture providing a factory for ``GuidanceTestHarness`` instances.

    Usage::

        def test_my_skill(guidance_harness):
            harness = guidance_harness(sources=[Path("skills")])
            harness.assert_activates("write tests", "writing-tests")
    """

    def _harness(
        sources: Iterable[SourceLike] | SourceLike | None = None,
        skills: Iterable[Skill] | None = None,
        settings: EngineSettings | None = None,
    ) -> GuidanceTestHarness:
        return GuidanceTestHarness(sources=sources, skills=skills, settings=settings)

    return _harness
