"""Filesystem locations used by textshape."""

import os
from pathlib import Path

import platformdirs

APP_NAME = "textshape"


def get_config_dir() -> Path:
    """Get the configuration directory.

    Honours ``XDG_CONFIG_HOME`` when set, otherwise the platform default.
    """
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / APP_NAME
    return Path(platformdirs.user_config_dir(APP_NAME))


def get_config_file() -> Path:
    return get_config_dir() / "config.yaml"
