"""
Guarded Singleton Accessor.

Lazily constructs one shared instance of a resource type and hands the
same object to every caller, from any thread. Construction runs under a
lock (double-checked locking); once the instance exists, reads take no lock.

Usage:
    _accessor = SingletonAccessor(Resource, name="resource")

    def get_resource() -> Resource:
        return _accessor.get_instance()
"""

from __future__ import annotations

import atexit
import logging
import threading
from typing import Any, Callable, Generic, Optional, TypeVar

from .exceptions import ConstructionFailure
from .interfaces import Closeable, NonCopyable


logger = logging.getLogger(__name__)

T = TypeVar("T")

# Marks an accessor with no live instance
_UNSET: Any = object()


class SingletonAccessor(NonCopyable, Generic[T]):
    """
    Process-wide owner of a single lazily created instance.

    Lifecycle: ``initialize()`` / ``get_instance()`` create the instance on
    first demand, ``shutdown()`` destroys it. A later access after shutdown
    opens a new lifecycle; at most one instance is alive at any time.

    Attributes:
        name: Name used in log messages and errors.
    """

    def __init__(self, factory: Callable[[], T], name: Optional[str] = None) -> None:
        """
        Initialize the accessor.

        Args:
            factory: Zero-argument callable building the instance.
            name: Optional name, defaults to the factory's name.
        """
        self._factory = factory
        self.name = name or getattr(factory, "__name__", repr(factory))
        self._instance: Any = _UNSET
        self._lock = threading.Lock()
        self._generation = 0
        self._atexit_registered = False

    @property
    def is_initialized(self) -> bool:
        """Check if the instance currently exists."""
        return self._instance is not _UNSET

    @property
    def generation(self) -> int:
        """Get the number of successful constructions so far."""
        return self._generation

    def get_instance(self) -> T:
        """
        Get the shared instance, constructing it on first call.

        Returns:
            The shared instance.

        Raises:
            ConstructionFailure: If the factory raised. The accessor stays
                uninitialized and the next call retries.
        """
        instance = self._instance
        if instance is not _UNSET:
            return instance

        with self._lock:
            # Double-checked locking pattern
            if self._instance is _UNSET:
                self._instance = self._construct()
            return self._instance

    def initialize(self) -> T:
        """Eagerly construct the instance (no-op if it already exists)."""
        return self.get_instance()

    def shutdown(self) -> bool:
        """
        Destroy the instance.

        Calls ``close()`` on instances that have one and drops the exit
        hook. Safe to call repeatedly.

        Returns:
            True if an instance was destroyed, False if there was none.
        """
        with self._lock:
            if self._atexit_registered:
                atexit.unregister(self._shutdown_at_exit)
                self._atexit_registered = False
            return self._destroy()

    def _shutdown_at_exit(self) -> None:
        """Destroy the instance at interpreter exit."""
        with self._lock:
            self._atexit_registered = False
            self._destroy()

    def _destroy(self) -> bool:
        """Drop and close the instance. Caller must hold the lock."""
        instance = self._instance
        if instance is _UNSET:
            return False

        self._instance = _UNSET

        if isinstance(instance, Closeable):
            try:
                instance.close()
            except Exception as e:
                logger.error(f"Error closing singleton '{self.name}': {e}")

        logger.info(f"Singleton '{self.name}' destroyed")
        return True

    def _construct(self) -> T:
        """Run the factory. Caller must hold the lock."""
        logger.debug(f"Constructing singleton '{self.name}'")

        try:
            instance = self._factory()
        except Exception as e:
            logger.error(f"Singleton '{self.name}' construction failed: {e}")
            raise ConstructionFailure(
                f"Failed to construct singleton '{self.name}': {e}",
                singleton_name=self.name,
            ) from e

        self._generation += 1
        if not self._atexit_registered:
            atexit.register(self._shutdown_at_exit)
            self._atexit_registered = True

        logger.info(f"Singleton '{self.name}' created (generation {self._generation})")
        return instance

    def __repr__(self) -> str:
        state = "initialized" if self.is_initialized else "uninitialized"
        return f"SingletonAccessor(name={self.name!r}, {state})"
