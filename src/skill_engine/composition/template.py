"""Jinja2 rendering of merged guidance into a single context string."""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING

from jinja2 import Environment, Template, TemplateError

from skill_engine.skills.errors import TemplateRenderError

if TYPE_CHECKING:
    from skill_engine.composition.models import MergedGuidance

# Available variables: ``blocks`` (GuidanceBlock list), ``advisories``
# (Advisory list) and ``overlaps`` (OverlapRegion list).
DEFAULT_BLOCK_TEMPLATE = """\
{% for block in blocks %}
<skill id="{{ block.skill_id }}" name="{{ block.name }}">
{{ block.body }}
</skill>
{% if not loop.last %}

{% endif %}
{% endfor %}
{% if advisories %}

<advisories>
{% for advisory in advisories %}
- [{{ advisory.kind.value }}] {{ advisory.skill_id_a }} / {{ advisory.skill_id_b }} \
({{ advisory.topic }}): {{ advisory.note }}
{% endfor %}
</advisories>
{% endif %}
"""

_environment = Environment(trim_blocks=True, lstrip_blocks=True, autoescape=False)


@lru_cache(maxsize=16)
def _compile(source: str) -> Template:
    return _environment.from_string(source)


def render_guidance(merged: MergedGuidance, template: str | None = None) -> str:
    """Render merged guidance with a Jinja2 block template.

    Skill bodies are inserted unchanged; only the surrounding labels come
    from the template.

    Args:
        merged: Guidance to render.
        template: Template source. Defaults to ``DEFAULT_BLOCK_TEMPLATE``.

    Returns:
        The rendered text, or ``""`` when ``merged`` has no blocks.

    Raises:
        TemplateRenderError: If the template fails to compile or render.
    """
    if merged.is_empty:
        return ""
    try:
        compiled = _compile(template if template is not None else DEFAULT_BLOCK_TEMPLATE)
        rendered = compiled.render(
            blocks=list(merged.blocks),
            advisories=list(merged.advisories),
            overlaps=list(merged.overlaps),
        )
    except TemplateError as e:
        raise TemplateRenderError(e) from e
    return rendered.strip("\n")
