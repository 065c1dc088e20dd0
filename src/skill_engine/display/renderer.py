"""Abstract base class for guidance renderers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from skill_engine.activation import ActiveSet
    from skill_engine.composition.models import MergedGuidance
    from skill_engine.matching.result import MatchResult


class GuidanceRenderer(ABC):
    """Abstract base class for display renderers.

    Implementations produce a human-readable string for merged guidance and
    for the match scores behind an activation decision. Concrete
    implementations are ``RichRenderer`` and ``PlainTextRenderer``.
    """

    @abstractmethod
    def render_guidance(self, merged: MergedGuidance) -> str:
        """Render merged guidance with its advisories.

        Args:
            merged: Guidance to render.

        Returns:
            Formatted string representation of the guidance.
        """
        ...

    @abstractmethod
    def render_matches(
        self,
        results: Sequence[MatchResult],
        active: ActiveSet | None = None,
    ) -> str:
        """Render match scores as a table.

        Args:
            results: Match results, best first.
            active: Active set, used to flag which skills fired.

        Returns:
            Formatted string representation of the scores.
        """
        ...
