"""Configuration loading and logging setup."""

from textshape.config.manager import ConfigManager
from textshape.config.schema import ExtractionConfig, GlobalConfig

__all__ = ["ConfigManager", "ExtractionConfig", "GlobalConfig"]
