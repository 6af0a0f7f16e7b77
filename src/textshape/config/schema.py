"""Configuration schema models using Pydantic."""

from typing import Literal

from pydantic import BaseModel, Field

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
ProviderName = Literal["claude", "gemini"]


class ExtractionConfig(BaseModel):
    """Extraction service configuration."""

    provider: ProviderName = "claude"
    model: str | None = None  # If None, the provider's default model is used
    claude_api_key: str | None = None  # If None, will use environment variable
    gemini_api_key: str | None = None  # If None, will use environment variable

    max_retries: int = Field(default=5, ge=0)
    retry_wait_seconds: float = Field(default=0.0, ge=0.0)
    max_tokens: int = Field(default=2048, gt=0)
    temperature: float = Field(default=0.0, ge=0.0, le=2.0)


class GlobalConfig(BaseModel):
    """Global textshape configuration."""

    version: str = "1"
    log_level: LogLevel = "INFO"
    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
