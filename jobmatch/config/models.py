"""Configuration schema models using Pydantic."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class MatchingConfig(BaseModel):
    """Batch matching behaviour."""

    threshold: float = Field(
        75, ge=0, le=100, description="Inclusive score at which matches are streamed"
    )
    progress_interval: int = Field(
        5, ge=1, description="Emit a progress notification every N postings"
    )
    description_limit: int = Field(
        1500, ge=100, le=20000, description="Description characters sent per request"
    )


class ClassifierConfig(BaseModel):
    """Settings for the LLM classification endpoint."""

    model: str = Field("gpt-4o-mini", min_length=1, description="Model name")
    base_url: Optional[str] = Field(
        None, description="OpenAI-compatible endpoint URL (default: OpenAI)"
    )
    max_tokens: int = Field(1024, ge=64, le=8192, description="Response token cap")
    temperature: float = Field(0.0, ge=0.0, le=2.0, description="Sampling temperature")
    timeout_seconds: float = Field(
        60.0, gt=0, le=600, description="Transport timeout per classification request"
    )

    @field_validator("model")
    @classmethod
    def strip_model(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("model cannot be empty")
        return stripped

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        stripped = v.strip()
        if not stripped.startswith(("http://", "https://")):
            raise ValueError(f"base_url must start with http:// or https://, got {stripped!r}")
        return stripped.rstrip("/")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True, "validate_default": True}


class AppConfig(BaseModel):
    """Root configuration object for the job match streamer."""

    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    classifier: ClassifierConfig = Field(default_factory=ClassifierConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
