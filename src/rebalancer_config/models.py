"""Pydantic models for application configuration with validation."""

from typing import Literal, Optional
from pydantic import BaseModel, Field, field_validator


class EngineConfig(BaseModel):
    """Rebalancing engine parameters."""

    drift_threshold_percent: float = Field(
        default=0.5,
        ge=0.0,
        le=10.0,
        description="Positions whose weight is within this percent of goal are flagged as on target"
    )
    over_allocation_tolerance_percent: float = Field(
        default=0.0001,
        ge=0.0,
        le=1.0,
        description="Target percentages may exceed 100 by this much before the account is flagged over-allocated"
    )


class AnalyticsConfig(BaseModel):
    """Client analytics settings."""

    top_sectors: int = Field(
        default=6,
        ge=1,
        le=50,
        description="Number of sectors reported in sector exposure"
    )
    top_states: int = Field(
        default=5,
        ge=1,
        le=50,
        description="Number of states reported in municipal bond concentration"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(
        default="INFO",
        description="Root log level"
    )
    format: Literal["text", "json"] = Field(
        default="text",
        description="text=human readable lines, json=one JSON object per line"
    )
    log_dir: Optional[str] = Field(
        default=None,
        description="Directory for the daily rotated log file; console only when unset"
    )

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate level is one of the standard logging level names."""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(
                f"Invalid log level '{v}'. Must be DEBUG, INFO, WARNING, ERROR or CRITICAL"
            )
        return level


class AppConfig(BaseModel):
    """Root application configuration."""

    engine: EngineConfig = Field(
        default_factory=EngineConfig,
        description="Rebalancing engine parameters"
    )
    analytics: AnalyticsConfig = Field(
        default_factory=AnalyticsConfig,
        description="Client analytics settings"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging configuration"
    )
