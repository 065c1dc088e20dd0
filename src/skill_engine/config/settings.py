"""Root engine settings."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from skill_engine.composition.template import DEFAULT_BLOCK_TEMPLATE
from skill_engine.config.logging_config import LoggingConfig


class ScoringConfig(BaseModel):
    """Trigger scoring parameters.

    Attributes:
        strategy: Scoring strategy name (``"keyword"`` or ``"semantic"``).
        phrase_weight: Weight of a matched multi-word trigger.
        keyword_weight: Weight of a matched single-word trigger.
        coverage_fraction: Fraction of a skill's triggers whose keyword
            weight saturates its score at 1.0.
    """

    strategy: Literal["keyword", "semantic"] = Field(
        default="keyword",
        description="Scoring strategy",
    )
    phrase_weight: float = Field(
        default=2.0,
        gt=0,
        description="Weight of a matched multi-word trigger",
    )
    keyword_weight: float = Field(
        default=1.0,
        gt=0,
        description="Weight of a matched single-word trigger",
    )
    coverage_fraction: float = Field(
        default=0.3,
        gt=0,
        le=1,
        description="Fraction of triggers that saturates a skill's score",
    )


class EngineSettings(BaseSettings):
    """Settings for the skill selection and composition engine.

    Values are read, in order of precedence, from constructor arguments,
    ``SKILL_ENGINE_*`` environment variables (nested with ``__``, e.g.
    ``SKILL_ENGINE_SCORING__PHRASE_WEIGHT``), a ``.env`` file, and a
    ``skill_engine.toml`` file in the working directory.

    Attributes:
        skills_dirs: Paths scanned for skills when no sources are given.
        activation_threshold: Minimum score for a skill to activate.
        allow_name_override: Whether naming a skill in the request
            force-activates it.
        overlap_similarity: Minimum heading similarity for two skills'
            sections to be marked as overlapping.
        large_body_token_threshold: Body size (estimated tokens) above
            which a warning is logged at load time.
        block_template: Jinja2 template used to render merged guidance.
        scoring: Trigger scoring parameters.
        logging: Logging configuration.
    """

    model_config = SettingsConfigDict(
        env_prefix="SKILL_ENGINE_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        toml_file="skill_engine.toml",
        extra="ignore",
    )

    skills_dirs: list[Path] = Field(
        default_factory=lambda: [Path("skills")],
        description="Directories to scan for skills",
    )
    activation_threshold: float = Field(
        default=0.3,
        ge=0,
        le=1,
        description="Minimum score for a skill to activate",
    )
    allow_name_override: bool = Field(
        default=True,
        description="Force-activate skills named in the request",
    )
    overlap_similarity: float = Field(
        default=0.8,
        gt=0,
        le=1,
        description="Heading similarity that marks sections as overlapping",
    )
    large_body_token_threshold: int = Field(
        default=5000,
        gt=0,
        description="Body size (estimated tokens) that triggers a warning",
    )
    block_template: str = Field(
        default=DEFAULT_BLOCK_TEMPLATE,
        description="Jinja2 template for rendering merged guidance",
    )
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Add the TOML file as the lowest-precedence source."""
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            TomlConfigSettingsSource(settings_cls),
        )
