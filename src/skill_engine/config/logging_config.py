"""Logging configuration."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class LoggingConfig(BaseModel):
    """Logging configuration for the engine.

    Attributes:
        level: Level applied to the ``skill_engine`` logger.
        structured: Emit one JSON object per record instead of plain text.
        format: Format string for plain-text output.
    """

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Log level for the skill_engine logger",
    )
    structured: bool = Field(
        default=False,
        description="Emit JSON log records",
    )
    format: str = Field(
        default="%(asctime)s %(levelname)s %(name)s: %(message)s",
        description="Format string for plain-text records",
    )
