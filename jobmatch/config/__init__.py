"""Configuration management for the job match streamer."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import apply_environment_overrides, load_config, validate_config_file
from .models import (
    AppConfig,
    ClassifierConfig,
    LogFormat,
    LoggingConfig,
    LogLevel,
    MatchingConfig,
)

__all__ = [
    # Main loader functions
    "load_config",
    "validate_config_file",
    "load_environment_config",
    "apply_environment_overrides",
    # Configuration models
    "AppConfig",
    "MatchingConfig",
    "ClassifierConfig",
    "LoggingConfig",
    "EnvironmentConfig",
    # Enums
    "LogLevel",
    "LogFormat",
    # Exceptions
    "ConfigurationError",
]
