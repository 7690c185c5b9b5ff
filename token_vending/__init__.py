"""
Token Vending - guarded singleton accessor and vending session state machine.
"""

from .core import (
    ConstructionFailure,
    Effect,
    EffectKind,
    SessionEvent,
    SessionState,
    SingletonAccessor,
    Transition,
    VendingError,
)
from .domain import (
    SessionMachine,
    SessionRegistry,
    get_session_registry,
    shutdown_session_registry,
    transition,
)


__all__ = [
    "ConstructionFailure",
    "Effect",
    "EffectKind",
    "SessionEvent",
    "SessionState",
    "SingletonAccessor",
    "Transition",
    "VendingError",
    "SessionMachine",
    "SessionRegistry",
    "get_session_registry",
    "shutdown_session_registry",
    "transition",
]
