# scope_intake/config/loader.py
"""
Configuration loading with auto-creation of defaults.

Uses platformdirs for cross-platform config directory management.
"""

import logging
from pathlib import Path

import yaml
from platformdirs import user_config_path

from .schema import ScopeIntakeConfig

logger = logging.getLogger(__name__)


def get_config_path() -> Path:
    """Get path to config file, ensuring config directory exists."""
    config_dir = user_config_path("scope-intake", ensure_exists=True)
    return config_dir / "config.yaml"


def load_config(path: Path | None = None) -> ScopeIntakeConfig:
    """
    Load configuration from YAML file.

    If the file doesn't exist, it is created with defaults.
    An empty file yields the defaults without being rewritten.

    Args:
        path: Explicit config file (defaults to the platform config dir)

    Returns:
        Validated ScopeIntakeConfig

    Raises:
        pydantic.ValidationError: If the file holds out-of-range values
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        default_config = ScopeIntakeConfig()
        config_dict = default_config.model_dump(mode="json")

        config_path.parent.mkdir(parents=True, exist_ok=True)
        with config_path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(config_dict, f, default_flow_style=False, sort_keys=False)

        logger.info(f"Created default config at {config_path}")
        return default_config

    with config_path.open("r", encoding="utf-8") as f:
        config_data = yaml.safe_load(f) or {}

    config = ScopeIntakeConfig(**config_data)
    logger.info(f"Loaded config from {config_path}")
    return config
