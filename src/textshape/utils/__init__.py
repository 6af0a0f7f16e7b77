"""Utility functions and helpers for textshape."""

from textshape.utils.errors import ConfigError, InvalidConfigError, TextshapeError
from textshape.utils.paths import get_config_dir, get_config_file
from textshape.utils.retry import DEFAULT_RETRY_CONFIG, RetryConfig, retry

__all__ = [
    # Errors
    "TextshapeError",
    "ConfigError",
    "InvalidConfigError",
    # Paths
    "get_config_dir",
    "get_config_file",
    # Retry
    "RetryConfig",
    "DEFAULT_RETRY_CONFIG",
    "retry",
]
