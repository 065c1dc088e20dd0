"""Shared test fixtures and configuration for skill-engine tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from skill_engine.skills import SkillRegistry, SkillSource, load_registry
from skill_engine.testing import guidance_harness  # noqa: F401

WRITING_TESTS_BODY = """\
# Writing Tests

Write one behaviour per test and name the test after it.

## Keep setup minimal

Create only the fixtures the test reads.

## Assertions

Assert on observable results."""

COMMIT_MESSAGE_BODY = """\
# Git Commit Messages

Summarize the change in an imperative subject line of at most 50 characters.

## Keep setup minimal

Stage only the files that belong to the change.

## Body

Explain what changed and why, wrapped at 72 characters."""


def skill_document(
    name: str,
    description: str | None,
    body: str | None,
    *,
    skill_id: str | None = None,
    triggers: list[str] | None = None,
    extra: str = "",
) -> str:
    """Build a skill document (YAML frontmatter plus body)."""
    lines = ["---"]
    if skill_id is not None:
        lines.append(f"id: {skill_id}")
    lines.append(f"name: {name}")
    if description is not None:
        lines.append(f"description: {description}")
    if triggers is not None:
        lines.append("triggers:")
        lines.extend(f'  - "{trigger}"' for trigger in triggers)
    if extra:
        lines.append(extra)
    lines.append("---")
    lines.append("")
    if body is not None:
        lines.append(body)
    return "\n".join(lines) + "\n"


def write_skill(root: Path, dirname: str, document: str) -> Path:
    """Write a ``<root>/<dirname>/SKILL.md`` file and return its directory."""
    skill_dir = root / dirname
    skill_dir.mkdir(parents=True, exist_ok=True)
    (skill_dir / "SKILL.md").write_text(document, encoding="utf-8")
    return skill_dir


@pytest.fixture
def writing_tests_source() -> SkillSource:
    """Source for the ``writing-tests`` skill."""
    return SkillSource(
        origin="writing-tests/SKILL.md",
        text=skill_document(
            "Writing Tests",
            "Guidance for writing and updating automated tests.",
            WRITING_TESTS_BODY,
            triggers=["test", "spec", "coverage"],
        ),
        default_id="writing-tests",
    )


@pytest.fixture
def commit_message_source() -> SkillSource:
    """Source for the ``git-commit-message`` skill."""
    return SkillSource(
        origin="git-commit-message/SKILL.md",
        text=skill_document(
            "Git Commit Message",
            "Guidance for writing git commit messages.",
            COMMIT_MESSAGE_BODY,
            triggers=["commit message", "git commit"],
        ),
        default_id="git-commit-message",
    )


@pytest.fixture
def sample_sources(
    writing_tests_source: SkillSource,
    commit_message_source: SkillSource,
) -> list[SkillSource]:
    """Both sample skill sources, in registration order."""
    return [writing_tests_source, commit_message_source]


@pytest.fixture
def registry(sample_sources: list[SkillSource]) -> SkillRegistry:
    """Registry holding ``writing-tests`` and ``git-commit-message``."""
    return load_registry(sample_sources)


@pytest.fixture
def skills_dir(tmp_path: Path) -> Path:
    """Directory of skill directories with both sample skills on disk.

    Creates::

        skills/
          git-commit-message/SKILL.md
          writing-tests/SKILL.md
    """
    root = tmp_path / "skills"
    write_skill(
        root,
        "writing-tests",
        skill_document(
            "Writing Tests",
            "Guidance for writing and updating automated tests.",
            WRITING_TESTS_BODY,
            triggers=["test", "spec", "coverage"],
        ),
    )
    write_skill(
        root,
        "git-commit-message",
        skill_document(
            "Git Commit Message",
            "Guidance for writing git commit messages.",
            COMMIT_MESSAGE_BODY,
            triggers=["commit message", "git commit"],
        ),
    )
    return root


@pytest.fixture
def make_document():
    """Factory fixture building skill documents.

    Usage::

        def test_something(make_document):
            text = make_document("Lint", "Fix lint errors.", "# Lint")
    """
    return skill_document


@pytest.fixture
def make_skill_dir(tmp_path: Path):
    """Factory fixture writing ``<tmp>/skills/<dirname>/SKILL.md``."""

    def _make(dirname: str, document: str) -> Path:
        return write_skill(tmp_path / "skills", dirname, document)

    return _make
