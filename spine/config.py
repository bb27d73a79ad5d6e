"""
Configuration management with environment variable support and validation.

Design principles:
- Environment-specific configs (dev, staging, prod)
- Validation at startup (fail fast)
- Type safety with Pydantic
- Local-only data (the record file never leaves the machine)
"""

import os
from functools import lru_cache
from typing import Literal, cast

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator, model_validator

# Load environment variables from .env file
load_dotenv()


class AnalyticsConfig(BaseModel):
    """Aggregation settings shared by the trend, calendar and goal screens."""

    good_day_threshold: int = Field(
        default=3, ge=0, le=10, description="Highest pain level that still counts as a good day"
    )
    unknown_trigger: str = Field(
        default="Unknown", description="Trigger label excluded from trigger breakdowns"
    )
    first_weekday: int = Field(
        default=6, ge=0, le=6, description="First day of the week (0=Monday ... 6=Sunday)"
    )
    default_range: Literal["7D", "14D", "30D"] = Field(
        default="7D", description="Analytics range selected when none is given"
    )


class ExportConfig(BaseModel):
    """Plain-text export layout."""

    app_name: str = Field(default="MyBackFit", min_length=1, description="Report title prefix")
    rule_width: int = Field(default=50, gt=0, description="Width of separator rule lines")
    timestamp_format: str = Field(
        default="%Y-%m-%d %H:%M", description="strftime format for report timestamps"
    )

    @field_validator("timestamp_format")
    def validate_timestamp_format(cls, v):
        if "%" not in v:
            raise ValueError("timestamp_format must contain at least one strftime directive")
        return v


class StorageConfig(BaseModel):
    """Record store location."""

    data_path: str = Field(
        default="~/.config/spine/data.json", description="Path to the JSON record file"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    format: Literal["json", "console"] = Field(default="json", description="Logging format")


class AppConfig(BaseModel):
    """Main application configuration combining all subsystems."""

    # Environment
    environment: Literal["development", "staging", "production"] = Field(
        default="development", description="Environment"
    )
    debug: bool = Field(default=False, description="Enable debug mode")

    # Component configs
    analytics: AnalyticsConfig = Field(default_factory=AnalyticsConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @model_validator(mode="after")
    def debug_only_in_dev(self) -> "AppConfig":
        """Ensure debug mode is only allowed in development environment."""
        if self.debug and self.environment != "development":
            raise ValueError("debug mode is only allowed in development environment")
        return self


def load_config_from_env() -> AppConfig:
    """Load configuration from environment variables with validation."""

    def _env_to_literal(val: str) -> Literal["development", "staging", "production"]:
        v = val.strip().lower()
        if v in {"dev", "development"}:
            return "development"
        if v in {"stage", "staging"}:
            return "staging"
        return "production"

    def _level_to_literal(val: str) -> Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
        v = val.strip().upper()
        return cast(
            Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
            v if v in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"} else "INFO",
        )

    def _range_to_literal(val: str) -> Literal["7D", "14D", "30D"]:
        v = val.strip().upper()
        return cast(Literal["7D", "14D", "30D"], v if v in {"7D", "14D", "30D"} else "7D")

    # Detect environment
    environment = _env_to_literal(os.getenv("ENVIRONMENT", "development"))
    debug = environment == "development"

    analytics_config = AnalyticsConfig(
        good_day_threshold=int(os.getenv("GOOD_DAY_THRESHOLD", "3")),
        unknown_trigger=os.getenv("UNKNOWN_TRIGGER", "Unknown"),
        first_weekday=int(os.getenv("FIRST_WEEKDAY", "6")),
        default_range=_range_to_literal(os.getenv("ANALYTICS_RANGE", "7D")),
    )

    export_config = ExportConfig(
        app_name=os.getenv("EXPORT_APP_NAME", "MyBackFit"),
        rule_width=int(os.getenv("EXPORT_RULE_WIDTH", "50")),
        timestamp_format=os.getenv("EXPORT_TIMESTAMP_FORMAT", "%Y-%m-%d %H:%M"),
    )

    storage_config = StorageConfig(
        data_path=os.getenv("SPINE_DATA", "~/.config/spine/data.json"),
    )

    logging_config = LoggingConfig(
        level=_level_to_literal(os.getenv("LOG_LEVEL", "INFO")),
        format="console" if debug else "json",
    )

    return AppConfig(
        environment=environment,
        debug=debug,
        analytics=analytics_config,
        export=export_config,
        storage=storage_config,
        logging=logging_config,
    )


@lru_cache
def get_config() -> AppConfig:
    """Get cached application configuration."""
    return load_config_from_env()


def print_config_summary() -> None:
    """Print configuration summary for debugging."""
    config = get_config()

    print("\nCONFIGURATION SUMMARY")
    print(f"Environment: {config.environment}")
    print(f"Debug Mode: {config.debug}")
    print(f"Log Level: {config.logging.level}")

    print("\nANALYTICS")
    print(f"Good Day Threshold: <= {config.analytics.good_day_threshold}")
    print(f"First Weekday: {config.analytics.first_weekday}")
    print(f"Default Range: {config.analytics.default_range}")

    print("\nSTORAGE")
    print(f"Data Path: {config.storage.data_path}")


if __name__ == "__main__":
    print_config_summary()
