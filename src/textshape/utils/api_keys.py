"""API key validation utilities.

Validates keys from config or environment variables early, so a bad key is
reported before the first completion request rather than as a provider error
on every retry.
"""

import os
import re
from typing import Literal

Provider = Literal["claude", "gemini"]

_KEY_PATTERNS: dict[str, tuple[str, str]] = {
    "claude": (r"^sk-ant-[A-Za-z0-9_-]+$", "sk-ant-"),
    "gemini": (r"^AIza[A-Za-z0-9_-]+$", "AIza"),
}


class APIKeyError(ValueError):
    """Raised when API key is invalid or missing."""

    pass


def validate_api_key(key: str | None, provider: Provider, key_name: str) -> str:
    """Validate API key format and return cleaned key.

    Args:
        key: The API key to validate (may be None)
        provider: The API provider name
        key_name: Environment variable name (for error messages)

    Returns:
        Validated and stripped API key

    Raises:
        APIKeyError: If key is missing, empty, or malformed
    """
    if key is None or not key.strip():
        raise APIKeyError(
            f"{provider.title()} API key is required.\n"
            f"Set the {key_name} environment variable.\n"
            f"Example: export {key_name}='your-api-key-here'"
        )

    stripped = key.strip()
    if (stripped.startswith('"') and stripped.endswith('"')) or (
        stripped.startswith("'") and stripped.endswith("'")
    ):
        raise APIKeyError(
            f"{provider.title()} API key should not be quoted.\n"
            f"Remove quotes from {key_name} environment variable."
        )

    if any(char in key for char in ["\n", "\r", "\0", "\t"]):
        raise APIKeyError(
            f"{provider.title()} API key contains invalid characters.\n"
            f"Check your {key_name} environment variable."
        )

    if len(stripped) < 20:
        raise APIKeyError(
            f"{provider.title()} API key appears invalid (too short).\n"
            f"Expected at least 20 characters, got {len(stripped)}."
        )

    pattern, prefix = _KEY_PATTERNS[provider]
    if not re.match(pattern, stripped):
        raise APIKeyError(
            f"{provider.title()} API key format appears invalid.\n"
            f"Keys typically start with '{prefix}' and contain only "
            f"alphanumeric characters, underscores, and dashes."
        )

    return stripped


def get_validated_api_key(env_var: str, provider: Provider, key: str | None = None) -> str:
    """Validate an explicit key, falling back to the environment.

    Args:
        env_var: Environment variable name
        provider: API provider name
        key: Key from configuration, if any

    Returns:
        Validated API key

    Raises:
        APIKeyError: If key is missing or invalid
    """
    return validate_api_key(key or os.environ.get(env_var), provider, env_var)
