"""
Session State Machine - Manages the token vending cycle.

Implements the State pattern as a closed set of state tags and a pure
transition function, so every (state, event) pair has exactly one outcome.
"""

from __future__ import annotations

from collections import deque
from typing import Any, Final, Optional, Union

from ..core.interfaces import TransitionListener
from ..core.value_objects import (
    Effect,
    EffectKind,
    SessionEvent,
    SessionState,
    Transition,
)
from ..infrastructure.settings import get_settings
from ..loggers import logger


# =============================================================================
# Transition Table
# =============================================================================

_IN = SessionState.AWAITING_INPUT
_SEL = SessionState.AWAITING_SELECTION
_OUT = SessionState.DISPENSING

# (state, event) -> (next state, effect)
TRANSITION_TABLE: Final[dict[tuple[SessionState, SessionEvent], tuple[SessionState, EffectKind]]] = {
    (_IN, SessionEvent.INSERT_TOKEN): (_SEL, EffectKind.TOKEN_ACCEPTED),
    (_IN, SessionEvent.EJECT_TOKEN): (_IN, EffectKind.NOTHING_TO_EJECT),
    (_IN, SessionEvent.PRESS_SELECT): (_IN, EffectKind.INSERT_TOKEN_FIRST),
    (_IN, SessionEvent.DISPENSE_OUTPUT): (_IN, EffectKind.INSERT_TOKEN_FIRST),

    (_SEL, SessionEvent.INSERT_TOKEN): (_SEL, EffectKind.ALREADY_HAVE_TOKEN),
    (_SEL, SessionEvent.EJECT_TOKEN): (_IN, EffectKind.TOKEN_REFUNDED),
    (_SEL, SessionEvent.PRESS_SELECT): (_OUT, EffectKind.SELECTION_ACCEPTED),
    (_SEL, SessionEvent.DISPENSE_OUTPUT): (_SEL, EffectKind.SELECT_FIRST),

    (_OUT, SessionEvent.INSERT_TOKEN): (_OUT, EffectKind.BUSY),
    (_OUT, SessionEvent.EJECT_TOKEN): (_OUT, EffectKind.BUSY),
    (_OUT, SessionEvent.PRESS_SELECT): (_OUT, EffectKind.BUSY),
    (_OUT, SessionEvent.DISPENSE_OUTPUT): (_IN, EffectKind.OUTPUT_DISPENSED),
}


def transition(
    state: Union[SessionState, str],
    event: Union[SessionEvent, str],
) -> Transition:
    """
    Apply an event to a state.

    Args:
        state: Current state (member or its value).
        event: Event to apply (member or its value).

    Returns:
        The resulting Transition.

    Raises:
        ValueError: If state or event is not a known member.
    """
    state = SessionState(state)
    event = SessionEvent(event)
    target, kind = TRANSITION_TABLE[(state, event)]
    return Transition(source=state, event=event, target=target, effect=Effect.of(kind))


# =============================================================================
# Session Machine
# =============================================================================


class SessionMachine:
    """
    State machine for a single vending session.

    Starts in AWAITING_INPUT and is driven only through the four event
    methods. Not thread-safe: one caller drives a machine at a time.

    Attributes:
        session_id: Identifier used in log messages.
    """

    def __init__(
        self,
        session_id: Optional[str] = None,
        history_size: Optional[int] = None,
    ) -> None:
        """
        Initialize the state machine.

        Args:
            session_id: Optional session identifier.
            history_size: Transitions kept in history (default from settings).
        """
        if history_size is None:
            history_size = get_settings().machine.history_size

        self.session_id = session_id
        self._state = SessionState.AWAITING_INPUT
        self._history: deque[Transition] = deque(maxlen=history_size)
        self._last_transition: Optional[Transition] = None
        self._listeners: list[TransitionListener] = []
        self._tokens_accepted = 0
        self._outputs_dispensed = 0

    @property
    def state(self) -> SessionState:
        """Get the current state."""
        return self._state

    @property
    def last_transition(self) -> Optional[Transition]:
        """Get the most recent transition."""
        return self._last_transition

    @property
    def history(self) -> list[Transition]:
        """Get recent transitions, oldest first."""
        return list(self._history)

    @property
    def tokens_accepted(self) -> int:
        """Get the number of tokens accepted."""
        return self._tokens_accepted

    @property
    def outputs_dispensed(self) -> int:
        """Get the number of outputs dispensed."""
        return self._outputs_dispensed

    @property
    def is_idle(self) -> bool:
        """Check if the machine is waiting for a token."""
        return self._state is SessionState.AWAITING_INPUT

    def add_listener(self, listener: TransitionListener) -> None:
        """Register a callback invoked after every event."""
        self._listeners.append(listener)

    def remove_listener(self, listener: TransitionListener) -> None:
        """Remove a previously registered callback."""
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    # -------------------------------------------------------------------------
    # Events
    # -------------------------------------------------------------------------

    def insert_token(self) -> Effect:
        """Insert a token."""
        return self.handle(SessionEvent.INSERT_TOKEN)

    def eject_token(self) -> Effect:
        """Ask for the inserted token back."""
        return self.handle(SessionEvent.EJECT_TOKEN)

    def press_select(self) -> Effect:
        """Press the select button."""
        return self.handle(SessionEvent.PRESS_SELECT)

    def dispense_output(self) -> Effect:
        """Release the selected output."""
        return self.handle(SessionEvent.DISPENSE_OUTPUT)

    def handle(self, event: Union[SessionEvent, str]) -> Effect:
        """
        Apply an event to the machine.

        Args:
            event: Event member or its value.

        Returns:
            Effect of the event. Rejections are effects, never exceptions.

        Raises:
            ValueError: If event is not a known event.
        """
        result = transition(self._state, event)

        self._state = result.target
        self._last_transition = result
        self._history.append(result)

        if result.effect.kind is EffectKind.TOKEN_ACCEPTED:
            self._tokens_accepted += 1
        elif result.effect.kind is EffectKind.OUTPUT_DISPENSED:
            self._outputs_dispensed += 1

        if result.effect.accepted:
            logger.info(
                f"[{self._label}] {result.event.value}: "
                f"{result.source.value} -> {result.target.value} ({result.effect.message})"
            )
        else:
            logger.warning(
                f"[{self._label}] {result.event.value} rejected in "
                f"{result.source.value}: {result.effect.message}"
            )

        self._notify(result)
        return result.effect

    def _notify(self, result: Transition) -> None:
        """Call all listeners, logging their errors."""
        for listener in list(self._listeners):
            try:
                listener(result)
            except Exception as e:
                logger.error(f"[{self._label}] Transition listener error: {e}")

    @property
    def _label(self) -> str:
        return self.session_id or f"session@{id(self):x}"

    def to_dict(self) -> dict[str, Any]:
        """Snapshot of the machine for status responses."""
        return {
            "session_id": self.session_id,
            "state": self._state.value,
            "tokens_accepted": self._tokens_accepted,
            "outputs_dispensed": self._outputs_dispensed,
            "last_transition": (
                self._last_transition.to_dict() if self._last_transition else None
            ),
        }
