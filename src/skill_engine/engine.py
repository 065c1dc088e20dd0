"""Top-level GuidanceEngine facade.

Composes the registry, trigger matcher, activation policy, composer, and
conflict resolver behind a single API. The registry is the only state the
engine holds; it is replaced wholesale on reload, so a request in flight
keeps working against the snapshot it started with.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from skill_engine.activation import ActivationPolicy, ActiveSet
from skill_engine.composition.composer import Composer
from skill_engine.composition.models import MergedGuidance
from skill_engine.composition.resolver import ConflictResolver
from skill_engine.config.settings import EngineSettings
from skill_engine.matching.matcher import TriggerMatcher
from skill_engine.matching.result import MatchResult
from skill_engine.matching.strategies import Embedder, ScoringStrategy, build_strategy
from skill_engine.observability.logging import setup_logging
from skill_engine.skills.registry import (
    SkillRegistry,
    SourceLike,
    as_source_list,
    load_registry,
)

logger = logging.getLogger(__name__)


class GuidanceEngine:
    """Facade for selecting and composing skills for a request.

    Example::

        engine = GuidanceEngine()
        engine.load(["skills"])
        guidance = engine.guide("write tests for the login handler")
        print(guidance.render())

    Args:
        settings: Engine settings. Uses defaults (and the environment) if ``None``.
        registry: Initial registry. Empty until ``load`` is called if ``None``.
        strategy: Scoring strategy. Built from ``settings.scoring`` if ``None``.
        embed: Optional embedding function for the semantic strategy.
        configure_logging: Apply ``settings.logging`` to the package logger.
    """

    def __init__(
        self,
        settings: EngineSettings | None = None,
        *,
        registry: SkillRegistry | None = None,
        strategy: ScoringStrategy | None = None,
        embed: Embedder | None = None,
        configure_logging: bool = False,
    ) -> None:
        self._settings = settings or EngineSettings()
        if configure_logging:
            setup_logging(self._settings.logging)
        self._registry = registry if registry is not None else SkillRegistry()
        self._sources: list[SourceLike] | None = None
        self._matcher = TriggerMatcher(
            strategy or build_strategy(self._settings.scoring, embed=embed)
        )
        self._composer = Composer(self._settings.overlap_similarity)
        self._resolver = ConflictResolver()

    @property
    def settings(self) -> EngineSettings:
        """Get the engine settings."""
        return self._settings

    @property
    def registry(self) -> SkillRegistry:
        """Get the current registry snapshot."""
        return self._registry

    @property
    def matcher(self) -> TriggerMatcher:
        return self._matcher

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self, sources: Iterable[SourceLike] | SourceLike | None = None) -> SkillRegistry:
        """Build a registry from sources and make it current.

        The previous registry stays in place if construction fails.

        Args:
            sources: Skill files, skill directories, directories of skills,
                or in-memory ``SkillSource`` objects, or a single one.
                Defaults to ``settings.skills_dirs``.

        Returns:
            The new registry.

        Raises:
            RegistryValidationError: If any source is invalid.
        """
        resolved = (
            as_source_list(sources) if sources is not None else list(self._settings.skills_dirs)
        )
        registry = load_registry(
            resolved,
            large_body_token_threshold=self._settings.large_body_token_threshold,
        )
        self._registry = registry
        self._sources = resolved
        return registry

    def reload(self) -> SkillRegistry:
        """Rebuild the registry from the sources of the last ``load``.

        Returns:
            The new registry.

        Raises:
            RegistryValidationError: If any source is now invalid. The
                current registry is kept.
        """
        if self._sources is None:
            logger.debug("Reload requested before load; using configured directories")
        return self.load(self._sources)

    # ------------------------------------------------------------------
    # Request pipeline
    # ------------------------------------------------------------------

    def match(self, request_text: str) -> list[MatchResult]:
        """Score every registered skill against a request.

        Args:
            request_text: Free-text request.

        Returns:
            Results with a positive score, best first.
        """
        return self._matcher.match(request_text, self._registry)

    def select(self, request_text: str) -> ActiveSet:
        """Decide which skills are active for a request.

        Args:
            request_text: Free-text request.

        Returns:
            The ordered ``ActiveSet``; empty when nothing applies.
        """
        return self._select(request_text, self._registry)

    def compose(self, active_set: Sequence[str] | ActiveSet) -> MergedGuidance:
        """Compose active skills and attach advisories.

        Args:
            active_set: Active skill ids in order.

        Returns:
            Merged guidance with advisories.

        Raises:
            SkillNotFoundError: If an id is not in the registry.
        """
        return self._compose(active_set, self._registry)

    def guide(self, request_text: str) -> MergedGuidance:
        """Run the full pipeline for one request.

        Args:
            request_text: Free-text request.

        Returns:
            Merged guidance for the active skills, with advisories. Empty
            when no skill applies; never raises for a no-match.
        """
        registry = self._registry
        active = self._select(request_text, registry)
        merged = self._compose(active, registry)
        logger.info(
            "Guidance for request: %d skill(s), %d advisory(ies)",
            len(merged.blocks),
            len(merged.advisories),
            extra={"skill_ids": list(merged.skill_ids)},
        )
        return merged

    def render(self, request_text: str) -> str:
        """Run the pipeline and render the result with ``settings.block_template``."""
        return self.guide(request_text).render(self._settings.block_template)

    def _select(self, request_text: str, registry: SkillRegistry) -> ActiveSet:
        candidates = self._matcher.match(request_text, registry)
        policy = ActivationPolicy(
            registry,
            threshold=self._settings.activation_threshold,
            allow_name_override=self._settings.allow_name_override,
        )
        return policy.activate(candidates, request_text)

    def _compose(self, active_set: Iterable[str], registry: SkillRegistry) -> MergedGuidance:
        merged = self._composer.compose(active_set, registry)
        return merged.with_advisories(self._resolver.resolve(merged))

    def __repr__(self) -> str:
        return (
            f"GuidanceEngine(skills={list(self._registry.ids)!r}, "
            f"matcher={self._matcher.strategy!r})"
        )
