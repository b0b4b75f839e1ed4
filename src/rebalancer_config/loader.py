"""Configuration loader with validation and singleton access."""

import logging
import yaml
from pathlib import Path
from typing import Optional

from .models import AppConfig

logger = logging.getLogger(__name__)

_config: Optional[AppConfig] = None


def load_config(config_path: str | Path) -> AppConfig:
    """
    Load a YAML config file and make it the current configuration.
    Omitted sections and keys take their model defaults.

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If the file is not valid YAML or fails validation
    """
    global _config

    config_path = Path(config_path)
    if not config_path.is_file():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        raw_config = yaml.safe_load(config_path.read_text(encoding='utf-8')) or {}
        _config = AppConfig.model_validate(raw_config)
    except (yaml.YAMLError, ValueError) as e:
        logger.error(f"Configuration in {config_path} rejected: {e}")
        raise ValueError(f"Invalid configuration: {e}") from e

    logger.info(
        f"Loaded configuration from {config_path}: drift threshold "
        f"{_config.engine.drift_threshold_percent}%, log level {_config.logging.level}"
    )
    return _config


def get_config() -> AppConfig:
    """
    Get the current loaded configuration.

    Raises:
        RuntimeError: If config hasn't been loaded yet
    """
    if _config is None:
        raise RuntimeError(
            "Configuration not loaded. Call load_config() first."
        )
    return _config


def reset_config() -> None:
    """Forget the loaded configuration."""
    global _config
    _config = None
