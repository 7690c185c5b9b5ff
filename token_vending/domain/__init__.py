"""
Domain layer - Business logic and domain models.

Contains:
- Session state machine
- Session registry
"""

from .session_state_machine import (
    TRANSITION_TABLE,
    SessionMachine,
    transition,
)
from .session_registry import (
    SessionRegistry,
    get_session_registry,
    shutdown_session_registry,
)


__all__ = [
    # Session State
    "TRANSITION_TABLE",
    "SessionMachine",
    "transition",
    # Session Registry
    "SessionRegistry",
    "get_session_registry",
    "shutdown_session_registry",
]
