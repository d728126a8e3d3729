"""Round engine and state management."""

from core.game.actions import Action, parse_action
from core.game.events import GameEvent, EventEmitter, EventType
from core.game.state import RoundState
from core.game.engine import BlackjackRound, PlayerState, apply_action, new_round, start

__all__ = [
    "Action",
    "parse_action",
    "GameEvent",
    "EventEmitter",
    "EventType",
    "RoundState",
    "BlackjackRound",
    "PlayerState",
    "apply_action",
    "new_round",
    "start",
]
