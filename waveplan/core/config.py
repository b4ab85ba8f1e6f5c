"""Configuration management using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from waveplan.scheduling.grammar import PlanGrammar


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="WAVEPLAN_",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Logging level",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_file: str | None = Field(
        default=None,
        description="Optional log file path (rotated daily)",
    )

    # Plan grammar overrides
    heading_marker: str | None = Field(
        default=None,
        description="Regex for the heading prefix of a task declaration",
    )
    task_id_pattern: str | None = Field(
        default=None,
        description="Regex matching a task identifier",
    )
    dependencies_label: str | None = Field(
        default=None,
        description="Label of the dependencies field",
    )
    time_label: str | None = Field(
        default=None,
        description="Label of the estimated time field",
    )

    def plan_grammar(self) -> PlanGrammar:
        """Build the plan grammar, applying any configured overrides.

        Returns:
            PlanGrammar with defaults for every unset override.
        """
        overrides = {
            "heading_marker": self.heading_marker,
            "task_id_pattern": self.task_id_pattern,
            "dependencies_label": self.dependencies_label,
            "time_label": self.time_label,
        }
        return PlanGrammar(**{k: v for k, v in overrides.items() if v})


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings instance loaded from environment.

    Example:
        >>> settings = get_settings()
        >>> settings.log_level
        'WARNING'
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing)."""
    get_settings.cache_clear()
