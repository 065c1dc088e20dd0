"""Configuration system for the skill engine.

Main exports:
- EngineSettings: Root configuration class
- ScoringConfig: Trigger scoring parameters
- LoggingConfig: Logging configuration
"""

from skill_engine.config.logging_config import LoggingConfig
from skill_engine.config.settings import EngineSettings, ScoringConfig

__all__ = [
    "EngineSettings",
    "LoggingConfig",
    "ScoringConfig",
]
