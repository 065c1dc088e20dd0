"""Skill file discovery.

Resolves the paths handed to the registry loader into individual skill
files. A path may be:

- a skill document (``writing-tests/SKILL.md`` or ``writing-tests.md``),
- a skill directory holding ``SKILL.md``,
- a directory of skills, scanned as ``*/SKILL.md`` plus ``*.md`` files
  directly inside it (``README.md`` excluded).
"""

from __future__ import annotations

import logging
from pathlib import Path

from skill_engine.skills.loader import SKILL_FILENAME

logger = logging.getLogger(__name__)

_IGNORED_FILENAMES = frozenset({"readme.md"})


def scan_directory(path: Path) -> list[Path]:
    """Find the skill files in a directory of skills.

    Picks up ``<name>/SKILL.md`` skill directories and flat ``<name>.md``
    skill files. Results are sorted together so that registration order
    does not depend on the filesystem.

    Args:
        path: Directory to scan.

    Returns:
        Sorted list of skill file paths; empty if ``path`` is not a
        readable directory.
    """
    try:
        if not path.is_dir():
            logger.warning("Skills path is not a directory, skipping: %s", path)
            return []
        nested = path.glob(f"*/{SKILL_FILENAME}")
        flat = (
            p
            for p in path.glob("*.md")
            if p.is_file() and p.name.lower() not in _IGNORED_FILENAMES
        )
        return sorted([*nested, *flat])
    except PermissionError:
        logger.warning("Permission denied scanning directory: %s", path)
        return []


def expand_path(path: Path) -> list[Path]:
    """Resolve one user-supplied path into skill files.

    Paths that do not exist are returned unchanged so that the loader can
    report them as invalid sources.

    Args:
        path: File or directory.

    Returns:
        Skill file paths, in registration order.
    """
    if not path.exists() or path.is_file():
        return [path]
    if (path / SKILL_FILENAME).is_file():
        return [path / SKILL_FILENAME]
    found = scan_directory(path)
    if not found:
        logger.warning("No skills found in %s", path)
    return found
