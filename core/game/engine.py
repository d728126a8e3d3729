"""Blackjack round engine with state machine."""

import logging
from dataclasses import dataclass, field
from random import Random
from typing import Callable

from transitions import Machine

from core.cards import Card, Deck
from core.hand import Hand
from core.game.actions import Action
from core.game.events import EventEmitter, EventType
from core.game.state import RoundState

logger = logging.getLogger(__name__)


@dataclass
class PlayerState:
    """The deck a round draws from and the hand it deals into."""

    deck: Deck
    hand: Hand = field(default_factory=Hand)


class BlackjackRound:
    """
    Single-player blackjack round driven by a state machine.

    The round owns its deck and hand outright; nothing else draws from the
    deck or touches the hand while the round is alive. Once the round is
    won or lost every further action is ignored.
    """

    # State machine states
    STATES = [s.name.lower() for s in RoundState]

    # State machine transitions
    TRANSITIONS = [
        {"trigger": "keep_playing", "source": "continuing", "dest": "continuing"},
        {"trigger": "reach_twenty_one", "source": "continuing", "dest": "won"},
        {"trigger": "bust", "source": "continuing", "dest": "lost"},
        {"trigger": "forfeit", "source": "continuing", "dest": "lost"},
    ]

    # One handler per action; stand, double-down and split are not played
    # out yet and forfeit the round like a surrender.
    ACTION_HANDLERS: dict[Action, str] = {
        Action.HIT: "hit",
        Action.STAND: "stand",
        Action.DOUBLE_DOWN: "double_down",
        Action.SPLIT: "split",
        Action.SURRENDER: "surrender",
    }

    def __init__(
        self,
        player: PlayerState,
        events: EventEmitter | None = None,
        initial: RoundState = RoundState.CONTINUING,
    ) -> None:
        """
        Initialize a round.

        Args:
            player: Deck and hand, handed over to the round
            events: Emitter to report round events on
            initial: State to resume from (CONTINUING for a new round)
        """
        self.player = player
        self.events = events or EventEmitter()

        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial=initial.name.lower(),
            auto_transitions=False,
            model_attribute="_machine_state",
            after_state_change="_log_transition",
        )

    @property
    def state(self) -> RoundState:
        """Get current round state as enum."""
        return RoundState[self._machine_state.upper()]  # type: ignore

    @property
    def message(self) -> str:
        """Return the display selector: Continuing, Won or Lost."""
        return str(self.state)

    @property
    def is_over(self) -> bool:
        """Check if the round has been won or lost."""
        return self.state.is_terminal

    @property
    def hand(self) -> tuple[Card, ...]:
        """Return the player's cards in deal order."""
        return tuple(self.player.hand.cards)

    @property
    def possible_totals(self) -> frozenset[int]:
        """Return every total of at most 21 the hand can make."""
        return self.player.hand.possible_totals

    @property
    def cards_remaining(self) -> int:
        return self.player.deck.cards_remaining

    def apply(self, action: Action | None) -> RoundState:
        """
        Apply a player action.

        Args:
            action: Parsed action, or None when the input was not understood

        Returns:
            The state after the action
        """
        if action is None or self.is_over:
            logger.debug("Ignoring %s in state %s", action, self.state)
            return self.state
        handler: Callable[[], RoundState] = getattr(self, self.ACTION_HANDLERS[action])
        return handler()

    def hit(self) -> RoundState:
        """Player hits (takes another card)."""
        if self.is_over:
            return self.state

        hand = self.player.hand
        card = self.player.deck.draw()
        if card is None:
            self.events.emit_new(EventType.DECK_EXHAUSTED)
        else:
            hand.add_card(card)
            self.events.emit_new(
                EventType.CARD_DEALT,
                card=str(card),
                cards_remaining=self.player.deck.cards_remaining,
            )

        totals = sorted(hand.possible_totals)
        self.events.emit_new(EventType.PLAYER_HIT, possible_totals=totals)

        if hand.is_too_large:
            self.events.emit_new(EventType.PLAYER_BUSTS, hand=str(hand))
            self.bust()
            self._end_round()
        elif hand.has_winning_total:
            self.events.emit_new(EventType.PLAYER_WINS, possible_totals=totals)
            self.reach_twenty_one()
            self._end_round()
        else:
            self.keep_playing()

        return self.state

    def stand(self) -> RoundState:
        """Player stands."""
        return self._forfeit(EventType.PLAYER_STAND, Action.STAND)

    def double_down(self) -> RoundState:
        """Player doubles down."""
        return self._forfeit(EventType.PLAYER_DOUBLE, Action.DOUBLE_DOWN)

    def split(self) -> RoundState:
        """Player splits."""
        return self._forfeit(EventType.PLAYER_SPLIT, Action.SPLIT)

    def surrender(self) -> RoundState:
        """Player surrenders."""
        return self._forfeit(EventType.PLAYER_SURRENDER, Action.SURRENDER)

    def _forfeit(self, event_type: EventType, action: Action) -> RoundState:
        """Lose the round without drawing."""
        if self.is_over:
            return self.state

        self.events.emit_new(event_type)
        self.events.emit_new(EventType.PLAYER_LOSES, reason=action.value)
        self.forfeit()
        self._end_round()
        return self.state

    def _end_round(self) -> None:
        self.events.emit_new(
            EventType.ROUND_ENDED,
            result=self.message,
            hand=[str(card) for card in self.player.hand],
        )

    def _log_transition(self) -> None:
        logger.debug(
            "Round is %s with hand [%s]",
            self.message,
            self.player.hand,
        )

    def __repr__(self) -> str:
        return f"BlackjackRound(state={self.state.name}, hand={self.player.hand!r})"


def start(deck: Deck, events: EventEmitter | None = None) -> BlackjackRound:
    """
    Begin a round with an empty hand.

    The deck is handed over to the round; callers should not keep drawing
    from it.
    """
    round_ = BlackjackRound(PlayerState(deck=deck), events=events)
    round_.events.emit_new(
        EventType.ROUND_STARTED,
        cards_remaining=deck.cards_remaining,
    )
    logger.debug("Started round with %d cards in the deck", deck.cards_remaining)
    return round_


def apply_action(round_: BlackjackRound, action: Action | None) -> BlackjackRound:
    """Apply an action (or no action) and return the round."""
    round_.apply(action)
    return round_


def new_round(
    rng: Random | None = None,
    events: EventEmitter | None = None,
) -> BlackjackRound:
    """
    Shuffle a fresh deck and start a round with it.

    Args:
        rng: Random number generator for reproducible rounds
        events: Emitter to report round events on
    """
    events = events or EventEmitter()
    deck = Deck(rng=rng)
    deck.shuffle()
    events.emit_new(EventType.DECK_SHUFFLED, cards_remaining=deck.cards_remaining)
    return start(deck, events=events)
