"""Environment variable loading and validation."""

import os
from typing import Optional

from .exceptions import ConfigurationError

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class EnvironmentConfig:
    """Environment variable configuration holder."""

    def __init__(
        self,
        api_key: str,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        log_level: Optional[str] = None,
        threshold: Optional[float] = None,
    ):
        """Initialize environment configuration."""
        self.api_key = api_key
        self.base_url = base_url
        self.model = model
        self.log_level = log_level
        self.threshold = threshold

    def __repr__(self) -> str:
        # Never render the key itself
        return (
            f"EnvironmentConfig(api_key={'set' if self.api_key else 'unset'}, "
            f"base_url={self.base_url!r}, model={self.model!r}, "
            f"log_level={self.log_level!r}, threshold={self.threshold!r})"
        )


def _get(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def load_environment_config() -> EnvironmentConfig:
    """
    Load and validate environment variables.

    Required environment variables:
    - LLM_API_KEY: API key for the classification endpoint
      (OPENAI_API_KEY is used when LLM_API_KEY is unset)

    Optional environment variables:
    - LLM_BASE_URL: OpenAI-compatible endpoint URL (overrides config)
    - LLM_MODEL: Model name (overrides config)
    - LOG_LEVEL: Override log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - MATCH_THRESHOLD: Override streaming threshold (0-100)

    Returns:
        EnvironmentConfig object with validated values

    Raises:
        ConfigurationError: If required variables are missing or invalid
    """
    errors = []

    api_key = _get("LLM_API_KEY") or _get("OPENAI_API_KEY")
    base_url = _get("LLM_BASE_URL")
    model = _get("LLM_MODEL")
    log_level = _get("LOG_LEVEL")
    threshold_str = _get("MATCH_THRESHOLD")

    if not api_key:
        errors.append("Missing required environment variable: LLM_API_KEY (or OPENAI_API_KEY)")

    if base_url and not base_url.startswith(("http://", "https://")):
        errors.append(f"Invalid LLM_BASE_URL: '{base_url}'. Must start with http:// or https://")

    if log_level and log_level.upper() not in VALID_LOG_LEVELS:
        errors.append(
            f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
        )

    threshold = None
    if threshold_str:
        try:
            threshold = float(threshold_str)
            if not 0 <= threshold <= 100:
                errors.append(f"Invalid MATCH_THRESHOLD: {threshold_str}. Must be between 0 and 100.")
        except ValueError:
            errors.append(f"Invalid MATCH_THRESHOLD: '{threshold_str}'. Must be a number.")

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Copy .env.example to .env and fill in your credentials",
                "Ensure LLM_API_KEY or OPENAI_API_KEY is set",
                "Verify MATCH_THRESHOLD is a number between 0 and 100",
            ],
        )

    return EnvironmentConfig(
        api_key=api_key,
        base_url=base_url,
        model=model,
        log_level=log_level.upper() if log_level else None,
        threshold=threshold,
    )
