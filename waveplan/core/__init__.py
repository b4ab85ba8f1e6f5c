"""Core module - configuration, logging, and exceptions."""

from waveplan.core.config import Settings, clear_settings_cache, get_settings
from waveplan.core.exceptions import CircularDependencyError, PlanFileError, WaveplanError
from waveplan.core.logging import configure_logging

__all__ = [
    "CircularDependencyError",
    "PlanFileError",
    "Settings",
    "WaveplanError",
    "clear_settings_cache",
    "configure_logging",
    "get_settings",
]
