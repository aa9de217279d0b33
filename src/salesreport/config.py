"""Configuration management for seller report generation."""

import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class AnalyzerConfig(BaseSettings):
    """Configuration for sales analysis."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    top_products_limit: int = Field(
        default=10,
        ge=1,
        le=1000,
        description="Number of top-selling SKUs listed per seller",
    )

    first_place_rate: float = Field(
        default=0.15,
        ge=0.0,
        le=1.0,
        description="Bonus share of profit for the most profitable seller",
    )

    runner_up_rate: float = Field(
        default=0.10,
        ge=0.0,
        le=1.0,
        description="Bonus share of profit for ranks 2 and 3",
    )

    last_place_rate: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        description="Bonus share of profit for the least profitable seller",
    )

    default_rate: float = Field(
        default=0.05,
        ge=0.0,
        le=1.0,
        description="Bonus share of profit for every other rank",
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level for CLI and API runs",
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept level names in any case."""
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(
                f"Invalid log level: '{v}'. Valid: {', '.join(_LOG_LEVELS)}"
            )
        return level

    api_host: str = Field(
        default="0.0.0.0",
        description="API host address",
    )

    api_port: int = Field(
        default=8000,
        description="API port",
    )

    def bonus_rates(self) -> dict[str, float]:
        """Bonus rates keyed by tier name."""
        return {
            "first_place_rate": self.first_place_rate,
            "runner_up_rate": self.runner_up_rate,
            "last_place_rate": self.last_place_rate,
            "default_rate": self.default_rate,
        }

    def validate_config(self) -> None:
        """Validate configuration at startup. Raises ValueError if invalid."""
        errors = []

        if self.api_port < 1 or self.api_port > 65535:
            errors.append("API_PORT must be between 1 and 65535")

        if errors:
            raise ValueError(
                "Configuration validation failed:\n"
                + "\n".join(f"  - {e}" for e in errors)
            )


_config_instance = None


def get_config() -> AnalyzerConfig:
    """Get or create global configuration instance."""
    global _config_instance
    if _config_instance is None:
        _config_instance = AnalyzerConfig()
        _config_instance.validate_config()
        logger.info("Configuration validated successfully")
    return _config_instance


def reload_config() -> AnalyzerConfig:
    """Reload configuration (useful for testing)."""
    global _config_instance
    _config_instance = AnalyzerConfig()
    return _config_instance
