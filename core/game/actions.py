"""Player actions and the text parser that produces them."""

from enum import Enum


class Action(Enum):
    """Actions a player can take during a round."""

    HIT = "hit"
    STAND = "stand"
    DOUBLE_DOWN = "double-down"
    SPLIT = "split"
    SURRENDER = "surrender"

    def __str__(self) -> str:
        return self.value


def parse_action(raw: str) -> Action | None:
    """
    Parse a line of player input into an Action.

    Surrounding whitespace is ignored; the command itself must match
    exactly, including case.

    Returns:
        The matching Action, or None for anything unrecognised
    """
    try:
        return Action(raw.strip())
    except ValueError:
        return None
