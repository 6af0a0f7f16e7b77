"""Custom exceptions for textshape."""


class TextshapeError(Exception):
    """Base exception for all textshape errors."""

    pass


class ConfigError(TextshapeError):
    """Configuration-related errors."""

    pass


class InvalidConfigError(ConfigError):
    """Invalid configuration data."""

    pass
