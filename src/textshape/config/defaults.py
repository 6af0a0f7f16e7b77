"""Default configuration values."""

import yaml

from textshape.config.schema import GlobalConfig

DEFAULT_GLOBAL_CONFIG = GlobalConfig()


def get_default_config_content() -> str:
    """Get default config.yaml content as a YAML string."""
    header = (
        "# textshape configuration\n"
        "# API keys left as null are read from ANTHROPIC_API_KEY / GOOGLE_API_KEY.\n"
    )
    data = DEFAULT_GLOBAL_CONFIG.model_dump(mode="json")
    return header + yaml.safe_dump(data, default_flow_style=False, sort_keys=False)
