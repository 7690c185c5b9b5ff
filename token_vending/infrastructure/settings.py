"""
Application settings.

Provides typed, immutable configuration sections aggregated in a single
Settings object shared through a guarded singleton accessor.
"""

import logging
from dataclasses import dataclass, field
from typing import Final, Optional

from ..core.interfaces import NonCopyable
from ..core.singleton import SingletonAccessor


# =============================================================================
# Configuration Classes
# =============================================================================


@dataclass(frozen=True)
class LoggingSettings:
    """Logging output settings."""

    name: str = "token_vending"
    app: str = "token_vending"
    level: int = logging.DEBUG
    log_file: Optional[str] = None
    loki_url: str = "http://localhost:3100/loki/api/v1/push"
    loki_enabled: bool = False


@dataclass(frozen=True)
class MachineSettings:
    """Session machine settings."""

    history_size: int = 10


@dataclass(frozen=True)
class DemoSettings:
    """Demonstration program settings."""

    racing_threads: int = 8
    happy_path_cycles: int = 3
    session_id: str = "demo"


# =============================================================================
# Main Settings
# =============================================================================


@dataclass
class Settings(NonCopyable):
    """
    Main application settings.

    Aggregates all configuration sections.
    """

    logging: LoggingSettings = field(default_factory=LoggingSettings)
    machine: MachineSettings = field(default_factory=MachineSettings)
    demo: DemoSettings = field(default_factory=DemoSettings)


# =============================================================================
# Settings Singleton
# =============================================================================


_settings_accessor: Final[SingletonAccessor[Settings]] = SingletonAccessor(
    Settings,
    name="settings",
)


def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns:
        Settings instance.
    """
    return _settings_accessor.get_instance()


def shutdown_settings() -> bool:
    """
    Drop the settings singleton; the next get_settings() builds a fresh one.

    Returns:
        True if settings had been built.
    """
    return _settings_accessor.shutdown()
