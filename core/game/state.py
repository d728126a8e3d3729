"""Round state enumeration."""

from enum import Enum, auto


class RoundState(Enum):
    """
    Round state machine states.

    Flow: CONTINUING → (CONTINUING)* → WON | LOST
    """

    # Player may keep acting
    CONTINUING = auto()

    # Hand reached exactly 21
    WON = auto()

    # Hand busted or the player gave up the round
    LOST = auto()

    def __str__(self) -> str:
        return self.name.title()

    @property
    def is_terminal(self) -> bool:
        """Check if no action can move the round out of this state."""
        return not VALID_TRANSITIONS[self]


# Valid state transitions
VALID_TRANSITIONS: dict[RoundState, list[RoundState]] = {
    RoundState.CONTINUING: [RoundState.CONTINUING, RoundState.WON, RoundState.LOST],
    RoundState.WON: [],  # Terminal state
    RoundState.LOST: [],  # Terminal state
}
