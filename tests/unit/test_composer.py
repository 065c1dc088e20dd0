"""Tests for the composer."""

from __future__ import annotations

import pytest

from skill_engine.composition.composer import Composer, compose, extract_sections, heading_key
from skill_engine.skills.config import Skill
from skill_engine.skills.errors import SkillNotFoundError
from skill_engine.skills.registry import SkillRegistry


def _registry(**bodies: str) -> SkillRegistry:
    return SkillRegistry(
        Skill(id=skill_id, name=skill_id.upper(), description="Demo.", body=body)
        for skill_id, body in bodies.items()
    )


class TestExtractSections:
    """Tests for heading detection."""

    def test_atx_and_bold_headings(self) -> None:
        body = "Intro line.\n\n## Setup ##\nFirst.\n\n**Teardown:**\nSecond."

        sections = extract_sections("demo", body)

        assert [(s.heading, s.line, s.text) for s in sections] == [
            ("Setup", 2, "First."),
            ("Teardown", 5, "Second."),
        ]
        assert all(s.skill_id == "demo" for s in sections)

    def test_fenced_code_is_ignored(self) -> None:
        body = "# Setup\n```bash\n# not a heading\n```\n# Next\nmore"

        sections = extract_sections("demo", body)

        assert [s.heading for s in sections] == ["Setup", "Next"]
        assert sections[0].text == "```bash\n# not a heading\n```"

    def test_inline_bold_is_not_a_heading(self) -> None:
        assert extract_sections("demo", "**Note** this is prose.\n**a** and **b**") == []

    def test_heading_key(self) -> None:
        assert heading_key("Keeping the setup minimal") == frozenset({"keep", "setup", "minimal"})
        assert heading_key("What to do") == frozenset({"what", "to", "do"})


class TestComposer:
    """Tests for Composer.compose."""

    def test_blocks_in_active_order(self, registry: SkillRegistry) -> None:
        merged = compose(["git-commit-message", "writing-tests"], registry)

        assert merged.skill_ids == ("git-commit-message", "writing-tests")
        assert [b.name for b in merged.blocks] == ["Git Commit Message", "Writing Tests"]
        assert merged.advisories == ()

    def test_bodies_are_verbatim(self, registry: SkillRegistry) -> None:
        merged = compose(["writing-tests", "git-commit-message"], registry)

        assert merged.pairs == (
            ("writing-tests", registry.require("writing-tests").body),
            ("git-commit-message", registry.require("git-commit-message").body),
        )

    def test_marks_shared_heading(self, registry: SkillRegistry) -> None:
        merged = compose(["writing-tests", "git-commit-message"], registry)

        assert len(merged.overlaps) == 1
        region = merged.overlaps[0]
        assert region.topic == "Keep setup minimal"
        assert region.skill_ids == ("writing-tests", "git-commit-message")
        assert [s.line for s in region.sections] == [4, 4]
        assert region.sections[0].text == "Create only the fixtures the test reads."

    def test_near_identical_headings(self) -> None:
        registry = _registry(
            a="## Keep setup minimal\nA.",
            b="## Keeping the setup minimal\nB.",
            c="## Keep setup minimal and fast\nC.",
        )

        merged = Composer().compose(["a", "b", "c"], registry)

        assert [r.skill_ids for r in merged.overlaps] == [("a", "b")]

    def test_similarity_is_configurable(self) -> None:
        registry = _registry(
            a="## Keep setup minimal\nA.",
            c="## Keep setup minimal and fast\nC.",
        )

        merged = Composer(overlap_similarity=0.7).compose(["a", "c"], registry)

        assert [r.skill_ids for r in merged.overlaps] == [("a", "c")]

    def test_single_skill_has_no_overlaps(self) -> None:
        registry = _registry(a="## Setup\nA.\n## Setup\nAgain.")

        assert Composer().compose(["a"], registry).overlaps == ()

    def test_empty_active_set(self, registry: SkillRegistry) -> None:
        merged = compose([], registry)

        assert merged.is_empty
        assert len(merged) == 0

    def test_duplicate_ids_are_ignored(self, registry: SkillRegistry) -> None:
        merged = compose(["writing-tests", "writing-tests"], registry)

        assert merged.skill_ids == ("writing-tests",)

    def test_unknown_id(self, registry: SkillRegistry) -> None:
        with pytest.raises(SkillNotFoundError):
            compose(["missing"], registry)

    def test_idempotent(self, registry: SkillRegistry) -> None:
        active = ["writing-tests", "git-commit-message"]

        assert compose(active, registry) == compose(active, registry)

    def test_invalid_similarity(self) -> None:
        with pytest.raises(ValueError):
            Composer(overlap_similarity=0)
