"""Application configuration management for the rebalance dashboard engine."""

from .models import (
    AppConfig,
    EngineConfig,
    AnalyticsConfig,
    LoggingConfig,
)
from .loader import load_config, get_config, reset_config

__all__ = [
    "AppConfig",
    "EngineConfig",
    "AnalyticsConfig",
    "LoggingConfig",
    "load_config",
    "get_config",
    "reset_config",
]
