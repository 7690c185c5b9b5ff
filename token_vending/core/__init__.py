"""
Core module - Foundation layer with no external dependencies.

Contains:
- Exceptions
- Interfaces (Protocols)
- Value Objects
- Singleton accessor
"""

from .exceptions import (
    VendingError,
    SingletonError,
    ConstructionFailure,
    SingletonCopyError,
    SessionError,
    UnknownSessionError,
    SessionExistsError,
    CommandError,
)
from .interfaces import (
    Closeable,
    NonCopyable,
    TransitionListener,
)
from .value_objects import (
    SessionState,
    SessionEvent,
    EffectKind,
    Effect,
    Transition,
)
from .singleton import SingletonAccessor


__all__ = [
    # Exceptions
    "VendingError",
    "SingletonError",
    "ConstructionFailure",
    "SingletonCopyError",
    "SessionError",
    "UnknownSessionError",
    "SessionExistsError",
    "CommandError",
    # Interfaces
    "Closeable",
    "NonCopyable",
    "TransitionListener",
    # Value Objects
    "SessionState",
    "SessionEvent",
    "EffectKind",
    "Effect",
    "Transition",
    # Singleton
    "SingletonAccessor",
]
