"""
Configuration management with typed Pydantic models.

Provides endpoint, table and hyperparameter settings with
environment-aware configuration loading.
"""

from exohunt.config.loader import load_config
from exohunt.config.settings import (
    AppConfig,
    LoggingConfig,
    PreflightConfig,
    QuizConfig,
    StatusConfig,
    StoreConfig,
    TrainingApiConfig,
    TrainingConfig,
)

__all__ = [
    "AppConfig",
    "LoggingConfig",
    "PreflightConfig",
    "QuizConfig",
    "StatusConfig",
    "StoreConfig",
    "TrainingApiConfig",
    "TrainingConfig",
    "load_config",
]
