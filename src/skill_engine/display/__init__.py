"""Display helpers for merged guidance and match scores.

Public API:
    GuidanceRenderer: ABC for format-specific renderers.
    RichRenderer: Renderer producing Rich Console output.
    PlainTextRenderer: Renderer producing ASCII text output.
    print_guidance: Render merged guidance.
    print_matches: Render match scores.
"""

from skill_engine.display.functions import print_guidance, print_matches
from skill_engine.display.plain_renderer import PlainTextRenderer
from skill_engine.display.renderer import GuidanceRenderer
from skill_engine.display.rich_renderer import RichRenderer

__all__ = [
    "GuidanceRenderer",
    "PlainTextRenderer",
    "RichRenderer",
    "print_guidance",
    "print_matches",
]
