"""
Application layer - Application services and use cases.

Contains:
- Command handlers
"""

from .command_handler import (
    CommandHandler,
    CommandResponse,
    execute_session_command,
)


__all__ = [
    "CommandHandler",
    "CommandResponse",
    "execute_session_command",
]
