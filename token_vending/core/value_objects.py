"""
Value Objects for the token vending system.

Immutable objects that represent values in the domain.
Value objects are compared by value, not by identity.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Final


# =============================================================================
# Enums
# =============================================================================


class SessionState(Enum):
    """States of a vending session."""

    AWAITING_INPUT = "awaiting_input"            # Waiting for a token
    AWAITING_SELECTION = "awaiting_selection"    # Token held, waiting for select
    DISPENSING = "dispensing"                    # Selection accepted, output pending


class SessionEvent(str, Enum):
    """
    External events a session machine reacts to.

    Values double as command names in the command handler.
    """

    INSERT_TOKEN = "insert_token"
    EJECT_TOKEN = "eject_token"
    PRESS_SELECT = "press_select"
    DISPENSE_OUTPUT = "dispense_output"


class EffectKind(Enum):
    """Outcome of applying an event to a session state."""

    TOKEN_ACCEPTED = auto()
    NOTHING_TO_EJECT = auto()
    INSERT_TOKEN_FIRST = auto()
    ALREADY_HAVE_TOKEN = auto()
    TOKEN_REFUNDED = auto()
    SELECTION_ACCEPTED = auto()
    SELECT_FIRST = auto()
    BUSY = auto()
    OUTPUT_DISPENSED = auto()


# kind -> (accepted, message)
EFFECT_MESSAGES: Final[dict[EffectKind, tuple[bool, str]]] = {
    EffectKind.TOKEN_ACCEPTED: (True, "Token accepted"),
    EffectKind.NOTHING_TO_EJECT: (False, "No token to eject"),
    EffectKind.INSERT_TOKEN_FIRST: (False, "Insert a token first"),
    EffectKind.ALREADY_HAVE_TOKEN: (False, "A token is already inserted"),
    EffectKind.TOKEN_REFUNDED: (True, "Token refunded"),
    EffectKind.SELECTION_ACCEPTED: (True, "Selection accepted"),
    EffectKind.SELECT_FIRST: (False, "Press select first"),
    EffectKind.BUSY: (False, "Busy dispensing, please wait"),
    EffectKind.OUTPUT_DISPENSED: (True, "Output dispensed"),
}


# =============================================================================
# Effect Value Object
# =============================================================================


@dataclass(frozen=True)
class Effect:
    """
    Side effect produced by a single event.

    Attributes:
        kind: Which outcome occurred.
        accepted: Whether the event was acted on (False means rejected).
        message: Human-readable message for the customer.
    """

    kind: EffectKind
    accepted: bool
    message: str

    @classmethod
    def of(cls, kind: EffectKind) -> "Effect":
        """Create the canonical effect for a kind."""
        accepted, message = EFFECT_MESSAGES[kind]
        return cls(kind=kind, accepted=accepted, message=message)

    @property
    def rejected(self) -> bool:
        """Check if the event was rejected."""
        return not self.accepted

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "effect": self.kind.name.lower(),
            "accepted": self.accepted,
            "message": self.message,
        }


# =============================================================================
# Transition Value Object
# =============================================================================


@dataclass(frozen=True)
class Transition:
    """
    Result of applying one event to one state.

    Attributes:
        source: State before the event.
        event: The applied event.
        target: State after the event.
        effect: Effect of the event.
    """

    source: SessionState
    event: SessionEvent
    target: SessionState
    effect: Effect

    @property
    def changed(self) -> bool:
        """Check if the state changed."""
        return self.source is not self.target

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "source": self.source.value,
            "event": self.event.value,
            "target": self.target.value,
            **self.effect.to_dict(),
        }
