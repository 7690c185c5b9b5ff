"""
Interfaces (Protocols) for the token vending system.

Defines contracts for owned resources and transition listeners using
Python's Protocol for structural subtyping (duck typing with type hints).
"""

from __future__ import annotations

from typing import Any, Callable, Protocol, runtime_checkable

from .exceptions import SingletonCopyError
from .value_objects import Transition


# Type alias for transition listeners
TransitionListener = Callable[[Transition], None]


@runtime_checkable
class Closeable(Protocol):
    """Resource that releases what it holds when closed."""

    def close(self) -> None:
        """Release the resource."""
        ...


class NonCopyable:
    """
    Base class for objects whose identity must stay unique.

    Shallow copies, deep copies and pickling are rejected.
    """

    def __copy__(self) -> Any:
        raise SingletonCopyError(f"{type(self).__name__} cannot be copied")

    def __deepcopy__(self, memo: dict[int, Any]) -> Any:
        raise SingletonCopyError(f"{type(self).__name__} cannot be deep-copied")

    def __reduce_ex__(self, protocol: Any) -> Any:
        raise SingletonCopyError(f"{type(self).__name__} cannot be pickled")
