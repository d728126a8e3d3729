"""Card and Deck classes - immutable card representations."""

from dataclasses import dataclass
from enum import Enum, auto
from random import Random
from typing import Iterable, Iterator


class Suit(Enum):
    """Card suits, in fresh-deck order."""

    CLUBS = auto()
    HEARTS = auto()
    DIAMONDS = auto()
    SPADES = auto()

    def __str__(self) -> str:
        symbols = {
            Suit.CLUBS: "♣",
            Suit.HEARTS: "♥",
            Suit.DIAMONDS: "♦",
            Suit.SPADES: "♠",
        }
        return symbols[self]


class Rank(Enum):
    """Card ranks."""

    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    def __str__(self) -> str:
        if self.value <= 10:
            return str(self.value)
        return {
            Rank.JACK: "J",
            Rank.QUEEN: "Q",
            Rank.KING: "K",
            Rank.ACE: "A",
        }[self]

    @property
    def is_ace(self) -> bool:
        """Check if this rank is an Ace."""
        return self == Rank.ACE

    @property
    def values(self) -> frozenset[int]:
        """Return every point value this rank can count as."""
        return rank_to_values(self)


def rank_to_values(rank: Rank) -> frozenset[int]:
    """
    Map a rank to the set of point values it can take.

    Face cards count 10, an Ace counts either 1 or 11.
    """
    if rank == Rank.ACE:
        return frozenset({1, 11})
    if rank.value <= 10:
        return frozenset({rank.value})
    return frozenset({10})  # Face cards


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card."""

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def values(self) -> frozenset[int]:
        """Return the possible point values of this card."""
        return rank_to_values(self.rank)

    @property
    def is_ace(self) -> bool:
        """Check if this card is an Ace."""
        return self.rank.is_ace


def full_deck() -> list[Card]:
    """Return all 52 cards, suit-major and rank-minor."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]


FULL_DECK: frozenset[Card] = frozenset(full_deck())


class Deck:
    """
    A standard 52-card deck split into remaining and drawn cards.

    Cards only ever move from ``remaining`` to ``drawn``, one at a time,
    so the two piles always partition the full 52-card set.
    """

    def __init__(self, rng: Random | None = None) -> None:
        """Initialize a new, unshuffled deck."""
        self._rng = rng or Random()
        self._remaining: list[Card] = full_deck()
        self._drawn: list[Card] = []

    @classmethod
    def from_cards(
        cls,
        remaining: Iterable[Card],
        drawn: Iterable[Card] = (),
        rng: Random | None = None,
    ) -> "Deck":
        """
        Rebuild a deck from its two piles.

        Args:
            remaining: Cards still to be drawn; the last one is drawn next
            drawn: Cards already drawn, in draw order
            rng: Random number generator for later shuffles

        Raises:
            ValueError: If the piles do not partition the 52-card set
        """
        remaining = list(remaining)
        drawn = list(drawn)
        combined = remaining + drawn
        if len(combined) != len(FULL_DECK) or set(combined) != FULL_DECK:
            raise ValueError(
                "Remaining and drawn cards must hold each of the 52 cards exactly once"
            )

        deck = cls(rng=rng)
        deck._remaining = remaining
        deck._drawn = drawn
        return deck

    def shuffle(self, rng: Random | None = None) -> None:
        """Shuffle the remaining cards in place."""
        (rng or self._rng).shuffle(self._remaining)

    def draw(self) -> Card | None:
        """Draw the top card, or return None if the deck is exhausted."""
        if not self._remaining:
            return None
        card = self._remaining.pop()
        self._drawn.append(card)
        return card

    @property
    def remaining(self) -> tuple[Card, ...]:
        """Cards not yet drawn; the last one is the top of the deck."""
        return tuple(self._remaining)

    @property
    def drawn(self) -> tuple[Card, ...]:
        """Cards drawn so far, in draw order."""
        return tuple(self._drawn)

    @property
    def cards_remaining(self) -> int:
        """Return the number of cards remaining."""
        return len(self._remaining)

    @property
    def cards_drawn(self) -> int:
        """Return the number of cards drawn."""
        return len(self._drawn)

    @property
    def is_empty(self) -> bool:
        return not self._remaining

    def __len__(self) -> int:
        return len(self._remaining)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._remaining)

    def __repr__(self) -> str:
        return f"Deck(remaining={len(self._remaining)}, drawn={len(self._drawn)})"
