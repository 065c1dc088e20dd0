"""Rich Console renderer for guidance display."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from skill_engine.composition.models import AdvisoryKind
from skill_engine.display.renderer import GuidanceRenderer

if TYPE_CHECKING:
    from skill_engine.activation import ActiveSet
    from skill_engine.composition.models import MergedGuidance
    from skill_engine.matching.result import MatchResult


class RichRenderer(GuidanceRenderer):
    """Rich Console renderer for guidance and match scores.

    Each render method accepts an optional ``console``. Output is always
    captured through a recording console so the rendered text can be
    returned as well as printed.

    Example::

        renderer = RichRenderer()
        output = renderer.render_guidance(engine.guide("write tests"))
    """

    def render_guidance(
        self,
        merged: MergedGuidance,
        *,
        console: Console | None = None,
    ) -> str:
        """Render each guidance block as a panel, followed by advisories.

        Args:
            merged: Guidance to render.
            console: Optional Rich Console instance.

        Returns:
            The rendered string captured from the console.
        """
        console = self._ensure_console(console)

        if merged.is_empty:
            console.print(Panel("No skills active", title="Guidance", expand=False))
            return console.export_text()

        for block in merged.blocks:
            console.print(
                Panel(
                    Markdown(block.body),
                    title=f"{escape(block.name)} [dim]({escape(block.skill_id)})[/dim]",
                    title_align="left",
                )
            )

        if merged.advisories:
            table = Table(title="Advisories", show_lines=False)
            table.add_column("Kind")
            table.add_column("Skills")
            table.add_column("Topic")
            table.add_column("Note")
            for advisory in merged.advisories:
                style = "red" if advisory.kind is AdvisoryKind.CONFLICT else "yellow"
                table.add_row(
                    Text(advisory.kind.value, style=style),
                    f"{advisory.skill_id_a} / {advisory.skill_id_b}",
                    advisory.topic,
                    advisory.note,
                )
            console.print(table)

        return console.export_text()

    def render_matches(
        self,
        results: Sequence[MatchResult],
        active: ActiveSet | None = None,
        *,
        console: Console | None = None,
    ) -> str:
        """Render match scores as a Rich table.

        Args:
            results: Match results, best first.
            active: Active set, used to flag which skills fired.
            console: Optional Rich Console instance.

        Returns:
            The rendered string captured from the console.
        """
        console = self._ensure_console(console)

        if not results:
            console.print(Panel("No matching skills", title="Skill Matches", expand=False))
            return console.export_text()

        table = Table(title="Skill Matches")
        table.add_column("Skill", style="cyan")
        table.add_column("Score", justify="right")
        table.add_column("Active", justify="center")
        table.add_column("Matched")
        for result in results:
            fired = active is not None and result.skill_id in active
            table.add_row(
                result.skill_id,
                f"{result.score:.3f}",
                Text("yes", style="green") if fired else "",
                ", ".join(result.matched_terms),
            )
        console.print(table)
        return console.export_text()

    @staticmethod
    def _ensure_console(console: Console | None) -> Console:
        """Return a recording console matching a caller's console width."""
        if console is not None:
            return Console(record=True, width=console.width)
        return Console(record=True)
