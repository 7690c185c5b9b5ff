"""
Session Registry - Process-wide owner of session machines.

Each session gets its own SessionMachine; machines are never shared
between sessions.
"""

from __future__ import annotations

import threading
import uuid
from typing import Final, Optional

from ..core.exceptions import SessionExistsError, UnknownSessionError
from ..core.interfaces import NonCopyable
from ..core.singleton import SingletonAccessor
from ..loggers import logger
from .session_state_machine import SessionMachine


# =============================================================================
# Session Registry
# =============================================================================


class SessionRegistry(NonCopyable):
    """
    Registry of open vending sessions.

    The session map is guarded by a lock; driving a single machine is
    still the job of one caller at a time.
    """

    def __init__(self, history_size: Optional[int] = None) -> None:
        """
        Initialize the registry.

        Args:
            history_size: History size passed to every new machine.
        """
        self._machines: dict[str, SessionMachine] = {}
        self._lock = threading.Lock()
        self._history_size = history_size

    def open(self, session_id: Optional[str] = None) -> SessionMachine:
        """
        Open a new session.

        Args:
            session_id: Session identifier, generated if omitted.

        Returns:
            The new session's machine.

        Raises:
            SessionExistsError: If the id is already open.
        """
        session_id = session_id or uuid.uuid4().hex

        with self._lock:
            if session_id in self._machines:
                raise SessionExistsError(
                    f"Session already open: {session_id}",
                    session_id=session_id,
                )
            machine = SessionMachine(session_id, history_size=self._history_size)
            self._machines[session_id] = machine

        logger.debug(f"Opened session: {session_id}")
        return machine

    def get(self, session_id: str) -> SessionMachine:
        """
        Get a session's machine.

        Raises:
            UnknownSessionError: If the session is not open.
        """
        machine = self._machines.get(session_id)
        if machine is None:
            raise UnknownSessionError(
                f"Session not found: {session_id}",
                session_id=session_id,
            )
        return machine

    def get_or_open(self, session_id: str) -> SessionMachine:
        """Get a session's machine, opening the session if needed."""
        with self._lock:
            machine = self._machines.get(session_id)
            if machine is None:
                machine = SessionMachine(session_id, history_size=self._history_size)
                self._machines[session_id] = machine
                logger.debug(f"Opened session: {session_id}")
            return machine

    def close_session(self, session_id: str) -> SessionMachine:
        """
        Close a session.

        Returns:
            The removed machine.

        Raises:
            UnknownSessionError: If the session is not open.
        """
        with self._lock:
            machine = self._machines.pop(session_id, None)

        if machine is None:
            raise UnknownSessionError(
                f"Session not found: {session_id}",
                session_id=session_id,
            )

        logger.debug(f"Closed session: {session_id} ({machine.state.value})")
        return machine

    def session_ids(self) -> list[str]:
        """Get ids of all open sessions."""
        with self._lock:
            return list(self._machines)

    def close(self) -> None:
        """Close all sessions."""
        with self._lock:
            count = len(self._machines)
            self._machines.clear()

        logger.info(f"Session registry closed ({count} sessions)")

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._machines

    def __len__(self) -> int:
        return len(self._machines)


# =============================================================================
# Registry Singleton
# =============================================================================


_registry_accessor: Final[SingletonAccessor[SessionRegistry]] = SingletonAccessor(
    SessionRegistry,
    name="session_registry",
)


def get_session_registry() -> SessionRegistry:
    """
    Get the process-wide session registry.

    Returns:
        SessionRegistry instance.
    """
    return _registry_accessor.get_instance()


def shutdown_session_registry() -> bool:
    """
    Close all sessions and drop the process-wide registry.

    Returns:
        True if a registry existed.
    """
    return _registry_accessor.shutdown()
