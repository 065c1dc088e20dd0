"""Tests for the skill registry."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from skill_engine.skills.config import SkillSource
from skill_engine.skills.errors import RegistryValidationError, SkillNotFoundError
from skill_engine.skills.loader import parse_source
from skill_engine.skills.registry import SkillRegistry, as_source_list, load_registry


class TestSkillRegistry:
    """Tests for SkillRegistry lookups."""

    def test_empty_registry(self) -> None:
        registry = SkillRegistry()

        assert len(registry) == 0
        assert registry.ids == ()
        assert repr(registry) == "SkillRegistry(skills=[])"

    def test_registration_order(self, registry: SkillRegistry) -> None:
        assert registry.ids == ("writing-tests", "git-commit-message")
        assert [skill.id for skill in registry] == ["writing-tests", "git-commit-message"]
        assert [skill.id for skill in registry.skills] == list(registry.ids)

    def test_lookups(self, registry: SkillRegistry) -> None:
        assert registry.get("writing-tests").name == "Writing Tests"
        assert registry.get("missing") is None
        assert registry.has("git-commit-message")
        assert "git-commit-message" in registry
        assert "missing" not in registry
        assert registry.position("git-commit-message") == 1

    def test_require_missing(self, registry: SkillRegistry) -> None:
        with pytest.raises(SkillNotFoundError) as exc_info:
            registry.require("missing")

        assert exc_info.value.skill_id == "missing"

    def test_position_missing(self, registry: SkillRegistry) -> None:
        with pytest.raises(SkillNotFoundError):
            registry.position("missing")

    def test_repr(self, registry: SkillRegistry) -> None:
        assert repr(registry) == "SkillRegistry(skills=['writing-tests', 'git-commit-message'])"

    def test_duplicate_skills_rejected(self, writing_tests_source: SkillSource) -> None:
        skill = parse_source(writing_tests_source)

        with pytest.raises(RegistryValidationError):
            SkillRegistry([skill, skill])


class TestLoadRegistry:
    """Tests for load_registry."""

    def test_loads_in_source_order(self, sample_sources: list[SkillSource]) -> None:
        registry = load_registry(list(reversed(sample_sources)))

        assert registry.ids == ("git-commit-message", "writing-tests")

    def test_loads_directory_of_skills(self, skills_dir: Path) -> None:
        registry = load_registry([skills_dir])

        assert registry.ids == ("git-commit-message", "writing-tests")

    def test_same_directory_twice(self, skills_dir: Path) -> None:
        """Test that a path listed twice is loaded once."""
        registry = load_registry([skills_dir, str(skills_dir)])

        assert len(registry) == 2

    def test_all_invalid_sources_reported(
        self,
        writing_tests_source: SkillSource,
        make_document,
    ) -> None:
        """Test that every offending source is listed, not just the first."""
        no_description = SkillSource("a.md", make_document("Alpha", None, "Body."))
        no_body = SkillSource("b.md", make_document("Beta", "Beta skill.", None))

        with pytest.raises(RegistryValidationError) as exc_info:
            load_registry([writing_tests_source, no_description, no_body])

        error = exc_info.value
        assert error.origins == ["a.md", "b.md"]
        assert error.errors[0].errors == ["Missing required field: 'description'"]
        assert error.errors[1].errors == ["Missing skill body"]
        assert "2 invalid skill source(s):" in str(error)
        assert "  - a.md: Missing required field: 'description'" in str(error)

    def test_parse_errors_are_collected(self, writing_tests_source: SkillSource) -> None:
        broken = SkillSource("broken.md", "no frontmatter here")

        with pytest.raises(RegistryValidationError) as exc_info:
            load_registry([broken, writing_tests_source])

        assert exc_info.value.origins == ["broken.md"]

    def test_missing_path(self, tmp_path: Path) -> None:
        missing = tmp_path / "missing.md"

        with pytest.raises(RegistryValidationError) as exc_info:
            load_registry([missing])

        assert exc_info.value.origins == [str(missing)]
        assert exc_info.value.errors[0].errors == ["File not found"]

    def test_duplicate_ids_name_every_source(self, make_document) -> None:
        first = SkillSource("one.md", make_document("Same", "First.", "Body.", skill_id="same"))
        second = SkillSource("two.md", make_document("Same", "Second.", "Body.", skill_id="same"))

        with pytest.raises(RegistryValidationError) as exc_info:
            load_registry([first, second])

        errors = exc_info.value.errors
        assert [e.origin for e in errors] == ["one.md", "two.md"]
        assert "also defined in two.md" in errors[0].errors[0]
        assert "also defined in one.md" in errors[1].errors[0]
        assert all(e.skill_id == "same" for e in errors)

    def test_failure_logs_error(self, make_document, caplog) -> None:
        bad = SkillSource("bad.md", make_document("Bad", None, "Body."))

        with caplog.at_level(logging.ERROR, logger="skill_engine"):
            with pytest.raises(RegistryValidationError):
                load_registry([bad])

        assert "Skill registry not created: 1 invalid source(s)" in caplog.text

    def test_success_logs_info(self, sample_sources: list[SkillSource], caplog) -> None:
        with caplog.at_level(logging.INFO, logger="skill_engine"):
            load_registry(sample_sources)

        assert "Loaded 2 skill(s): writing-tests, git-commit-message" in caplog.text

    def test_empty_sources(self) -> None:
        assert len(load_registry([])) == 0

    def test_single_path_string(self, skills_dir: Path) -> None:
        """Test that a bare string is one path, not a sequence of characters."""
        registry = load_registry(str(skills_dir))

        assert registry.ids == ("git-commit-message", "writing-tests")

    def test_single_path(self, skills_dir: Path) -> None:
        assert len(load_registry(skills_dir)) == 2

    def test_single_source(self, writing_tests_source: SkillSource) -> None:
        assert load_registry(writing_tests_source).ids == ("writing-tests",)

    def test_missing_string_path_reported_once(self, tmp_path: Path) -> None:
        with pytest.raises(RegistryValidationError) as exc_info:
            load_registry(str(tmp_path / "missing"))

        assert exc_info.value.origins == [str(tmp_path / "missing")]


class TestAsSourceList:
    """Tests for as_source_list."""

    def test_string_is_one_source(self) -> None:
        assert as_source_list("skills") == ["skills"]

    def test_path_is_one_source(self) -> None:
        assert as_source_list(Path("skills")) == [Path("skills")]

    def test_iterable_is_listed(self) -> None:
        sources = (Path("a"), "b")

        assert as_source_list(iter(sources)) == [Path("a"), "b"]
