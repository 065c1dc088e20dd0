"""Logging utilities.

Exports:
- StructuredFormatter, setup_logging
"""

from skill_engine.observability.logging import StructuredFormatter, setup_logging

__all__ = [
    "StructuredFormatter",
    "setup_logging",
]
