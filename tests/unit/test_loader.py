"""Tests for skill source loading and parsing."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from skill_engine.skills.config import SkillSource
from skill_engine.skills.errors import SkillParseError, SkillValidationError
from skill_engine.skills.loader import default_id_for, parse_source, read_source
from skill_engine.skills.triggers import TriggerKind


def _source(text: str, origin: str = "memory.md", default_id: str | None = None) -> SkillSource:
    return SkillSource(origin=origin, text=text, default_id=default_id)


class TestParseSource:
    """Tests for parse_source."""

    def test_valid_source(self, writing_tests_source: SkillSource) -> None:
        """Test that a valid source produces a Skill with compiled triggers."""
        skill = parse_source(writing_tests_source)

        assert skill.id == "writing-tests"
        assert skill.name == "Writing Tests"
        assert skill.description == "Guidance for writing and updating automated tests."
        assert skill.origin == "writing-tests/SKILL.md"
        assert [t.text for t in skill.triggers] == ["test", "spec", "coverage"]
        assert all(t.kind is TriggerKind.KEYWORD for t in skill.triggers)

    def test_body_is_kept_verbatim(self, make_document) -> None:
        """Test that the body keeps inner blank lines and horizontal rules."""
        body = "# Title\n\nFirst.\n\n---\n\n  indented line"
        skill = parse_source(_source(make_document("Demo", "Demo skill.", body)))

        assert skill.body == body

    def test_metadata_and_header_id(self, make_document) -> None:
        text = make_document(
            "Demo",
            "Demo skill.",
            "Body.",
            skill_id="demo-skill",
            extra="metadata:\n  owner: docs",
        )
        skill = parse_source(_source(text, default_id="ignored"))

        assert skill.id == "demo-skill"
        assert skill.metadata == {"owner": "docs"}

    def test_skill_is_frozen(self, writing_tests_source: SkillSource) -> None:
        skill = parse_source(writing_tests_source)

        with pytest.raises(ValidationError):
            skill.name = "Other"  # type: ignore[misc]

    def test_missing_description(self, make_document) -> None:
        """Test that a missing description names the source."""
        with pytest.raises(SkillValidationError) as exc_info:
            parse_source(_source(make_document("Demo", None, "Body."), origin="demo.md"))

        assert exc_info.value.origin == "demo.md"
        assert exc_info.value.errors == ["Missing required field: 'description'"]
        assert exc_info.value.skill_id == "demo"

    def test_all_problems_reported_together(self, make_document) -> None:
        with pytest.raises(SkillValidationError) as exc_info:
            parse_source(_source(make_document("Demo", None, None)))

        assert exc_info.value.errors == [
            "Missing required field: 'description'",
            "Missing skill body",
        ]

    def test_missing_body_raises_validation_error(self, make_document) -> None:
        """Test that a header without a body is a validation error, not a crash."""
        with pytest.raises(SkillValidationError) as exc_info:
            parse_source(_source(make_document("Demo", "Demo skill.", None)))

        assert exc_info.value.errors == ["Missing skill body"]
        assert exc_info.value.skill_id == "demo"

    def test_missing_opening_delimiter(self) -> None:
        with pytest.raises(SkillParseError, match="Missing opening"):
            parse_source(_source("name: Demo\n"))

    def test_missing_closing_delimiter(self) -> None:
        with pytest.raises(SkillParseError, match="Missing closing"):
            parse_source(_source("---\nname: Demo\ndescription: x\n"))

    def test_invalid_yaml(self) -> None:
        with pytest.raises(SkillParseError) as exc_info:
            parse_source(_source("---\nname: [unclosed\n---\nBody.\n"))

        assert exc_info.value.origin == "memory.md"

    def test_non_mapping_yaml(self) -> None:
        with pytest.raises(SkillParseError, match="must be a YAML mapping, got list"):
            parse_source(_source("---\n- a\n- b\n---\nBody.\n"))

    def test_byte_order_mark(self, make_document) -> None:
        skill = parse_source(_source("\ufeff" + make_document("Demo", "Demo skill.", "Body.")))

        assert skill.id == "demo"

    def test_unknown_field_logs_warning(self, make_document, caplog) -> None:
        text = make_document("Demo", "Demo skill.", "Body.", extra="color: blue")

        with caplog.at_level(logging.WARNING, logger="skill_engine"):
            parse_source(_source(text))

        assert "Unknown frontmatter field: 'color'" in caplog.text

    def test_large_body_logs_warning(self, make_document, caplog) -> None:
        text = make_document("Demo", "Demo skill.", "x" * 200)

        with caplog.at_level(logging.WARNING, logger="skill_engine"):
            parse_source(_source(text), large_body_token_threshold=10)

        assert "approximately 50 tokens" in caplog.text


class TestReadSource:
    """Tests for read_source and default ids."""

    def test_reads_skill_directory(self, skills_dir: Path) -> None:
        source = read_source(skills_dir / "writing-tests")

        assert source.origin == str(skills_dir / "writing-tests" / "SKILL.md")
        assert source.default_id == "writing-tests"
        assert source.text.startswith("---")

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(SkillParseError, match="File not found"):
            read_source(tmp_path / "nope.md")

    def test_default_id_for(self) -> None:
        assert default_id_for(Path("skills/writing-tests/SKILL.md")) == "writing-tests"
        assert default_id_for(Path("notes/commit.md")) == "commit"
