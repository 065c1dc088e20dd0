"""Plain text renderer for guidance display.

Produces aligned ASCII output suitable for terminals, log files, and
screen readers, without any Rich markup.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from skill_engine.display.renderer import GuidanceRenderer

if TYPE_CHECKING:
    from skill_engine.activation import ActiveSet
    from skill_engine.composition.models import MergedGuidance
    from skill_engine.matching.result import MatchResult


class PlainTextRenderer(GuidanceRenderer):
    """Plain text renderer for guidance and match scores.

    Each render method prints to stdout and returns the output as a string.
    An optional ``file`` parameter redirects output to a different stream.
    """

    def render_guidance(self, merged: MergedGuidance, *, file: Any | None = None) -> str:
        """Render merged guidance as labeled text sections.

        Args:
            merged: Guidance to render.
            file: Optional output stream. Defaults to ``sys.stdout``.

        Returns:
            The rendered string.
        """
        if merged.is_empty:
            return self._emit("No skills active", file)

        lines: list[str] = []
        for index, block in enumerate(merged.blocks, start=1):
            title = f"[{index}] {block.name} ({block.skill_id})"
            lines.append(title)
            lines.append("=" * len(title))
            lines.append(block.body)
            lines.append("")

        if merged.advisories:
            lines.append("Advisories")
            lines.append("----------")
            for advisory in merged.advisories:
                lines.append(
                    f"  {advisory.kind.value.upper():<9}  "
                    f"{advisory.skill_id_a} / {advisory.skill_id_b}: {advisory.note}"
                )

        return self._emit("\n".join(lines).rstrip("\n"), file)

    def render_matches(
        self,
        results: Sequence[MatchResult],
        active: ActiveSet | None = None,
        *,
        file: Any | None = None,
    ) -> str:
        """Render match scores as an ASCII table.

        Args:
            results: Match results, best first.
            active: Active set, used to flag which skills fired.
            file: Optional output stream. Defaults to ``sys.stdout``.

        Returns:
            The rendered string.
        """
        if not results:
            return self._emit("No matching skills", file)

        rows = [
            (
                result.skill_id,
                f"{result.score:.3f}",
                "yes" if active is not None and result.skill_id in active else "",
                ", ".join(result.matched_terms),
            )
            for result in results
        ]
        headers = ("Skill", "Score", "Active", "Matched")
        widths = [max(len(headers[i]), *(len(row[i]) for row in rows)) for i in range(3)]

        def _line(cells: tuple[str, str, str, str]) -> str:
            return (
                f"  {cells[0]:<{widths[0]}}"
                f"  {cells[1]:>{widths[1]}}"
                f"  {cells[2]:<{widths[2]}}"
                f"  {cells[3]}"
            ).rstrip()

        lines = ["Skill Matches", "", _line(headers)]
        lines.append("  " + "-" * (sum(widths) + 4 + 2 + len(headers[3])))
        lines.extend(_line(row) for row in rows)
        return self._emit("\n".join(lines), file)

    @staticmethod
    def _emit(text: str, file: Any | None) -> str:
        print(text, file=file if file is not None else sys.stdout)
        return text
