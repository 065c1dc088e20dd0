"""Standalone helper functions for guidance display.

Functions:
    print_guidance: Render merged guidance in the chosen format.
    print_matches: Render match scores in the chosen format.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from skill_engine.display.plain_renderer import PlainTextRenderer
from skill_engine.display.rich_renderer import RichRenderer

if TYPE_CHECKING:
    from rich.console import Console

    from skill_engine.activation import ActiveSet
    from skill_engine.composition.models import MergedGuidance
    from skill_engine.matching.result import MatchResult

#: Supported format names mapped to their renderer classes.
_FORMATS: dict[str, type] = {
    "rich": RichRenderer,
    "plain": PlainTextRenderer,
}


def _resolve_renderer(format: str) -> RichRenderer | PlainTextRenderer:
    """Create a renderer instance for the given format name.

    Raises:
        ValueError: If *format* is not a recognised format name.
    """
    cls = _FORMATS.get(format)
    if cls is None:
        valid = ", ".join(sorted(_FORMATS))
        raise ValueError(f"Unknown format: {format!r}. Valid formats: {valid}")
    return cls()


def print_guidance(
    merged: MergedGuidance,
    *,
    format: str = "rich",
    console: Console | None = None,
) -> str:
    """Render merged guidance in the chosen format.

    Args:
        merged: Guidance to render.
        format: Output format (``"rich"`` or ``"plain"``).
        console: Optional Rich ``Console``. Only used when *format* is
            ``"rich"``.

    Returns:
        The rendered string.

    Raises:
        ValueError: If *format* is not recognised.

    Example::

        from skill_engine.display import print_guidance

        output = print_guidance(engine.guide("write tests"))
        output = print_guidance(merged, format="plain")
    """
    renderer = _resolve_renderer(format)
    if isinstance(renderer, RichRenderer):
        return renderer.render_guidance(merged, console=console)
    return renderer.render_guidance(merged)


def print_matches(
    results: Sequence[MatchResult],
    active: ActiveSet | None = None,
    *,
    format: str = "rich",
    console: Console | None = None,
) -> str:
    """Render match scores in the chosen format.

    Args:
        results: Match results, best first.
        active: Active set, used to flag which skills fired.
        format: Output format (``"rich"`` or ``"plain"``).
        console: Optional Rich ``Console``. Only used when *format* is
            ``"rich"``.

    Returns:
        The rendered string.

    Raises:
        ValueError: If *format* is not recognised.
    """
    renderer = _resolve_renderer(format)
    if isinstance(renderer, RichRenderer):
        return renderer.render_matches(results, active, console=console)
    return renderer.render_matches(results, active)
