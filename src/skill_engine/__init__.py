"""
Skill Engine - select and compose reusable agent guidance per request.

Quick Start:
    >>> from skill_engine import GuidanceEngine
    >>> engine = GuidanceEngine()
    >>> engine.load(["skills"])
    >>> guidance = engine.guide("write tests for the login handler")
    >>> guidance.skill_ids
    ('writing-tests',)
    >>> print(guidance.render())

With Settings:
    >>> from skill_engine import EngineSettings, GuidanceEngine
    >>> settings = EngineSettings(activation_threshold=0.5)
    >>> engine = GuidanceEngine(settings)

Pipeline:
    request -> TriggerMatcher -> ActivationPolicy -> Composer
    -> ConflictResolver -> MergedGuidance
"""

# Facade
from skill_engine.engine import GuidanceEngine

# Configuration
from skill_engine.config import EngineSettings, LoggingConfig, ScoringConfig

# Registry
from skill_engine.skills import (
    RegistryValidationError,
    Skill,
    SkillEngineError,
    SkillNotFoundError,
    SkillParseError,
    SkillRegistry,
    SkillSource,
    SkillValidationError,
    load_registry,
)

# Matching and activation
from skill_engine.activation import ActivationPolicy, ActiveSet
from skill_engine.matching import MatchResult, ScoringStrategy, TriggerMatcher

# Composition
from skill_engine.composition import (
    Advisory,
    AdvisoryKind,
    Composer,
    ConflictResolver,
    MergedGuidance,
)

# Logging
from skill_engine.observability import setup_logging

__all__ = [
    # Facade
    "GuidanceEngine",
    # Configuration
    "EngineSettings",
    "LoggingConfig",
    "ScoringConfig",
    # Registry
    "RegistryValidationError",
    "Skill",
    "SkillEngineError",
    "SkillNotFoundError",
    "SkillParseError",
    "SkillRegistry",
    "SkillSource",
    "SkillValidationError",
    "load_registry",
    # Matching and activation
    "ActivationPolicy",
    "ActiveSet",
    "MatchResult",
    "ScoringStrategy",
    "TriggerMatcher",
    # Composition
    "Advisory",
    "AdvisoryKind",
    "Composer",
    "ConflictResolver",
    "MergedGuidance",
    # Logging
    "setup_logging",
]

__version__ = "0.1.0"
