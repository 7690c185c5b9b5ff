"""
Infrastructure layer - Configuration.

Contains:
- Settings
"""

from .settings import (
    Settings,
    LoggingSettings,
    MachineSettings,
    DemoSettings,
    get_settings,
    shutdown_settings,
)


__all__ = [
    "Settings",
    "LoggingSettings",
    "MachineSettings",
    "DemoSettings",
    "get_settings",
    "shutdown_settings",
]
