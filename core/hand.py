"""Hand evaluation for blackjack."""

from dataclasses import dataclass, field
from typing import Iterable, Iterator

from core.cards import Card, Rank, rank_to_values

# Highest total a hand may reach without busting.
BLACKJACK = 21


@dataclass(frozen=True, slots=True)
class HandValue:
    """
    A partial or complete point total.

    A standalone value must stay below 21, while combining two values may
    land exactly on 21. The two bounds differ on purpose: no single card
    is worth 21, but a hand can be.
    """

    value: int

    @classmethod
    def from_int(cls, value: int) -> "HandValue | None":
        """Return a HandValue, or None if value is outside [0, 21)."""
        if 0 <= value < BLACKJACK:
            return cls(value)
        return None

    def combine(self, other: "HandValue") -> "HandValue | None":
        """Add two values, or return None if the sum exceeds 21."""
        total = self.value + other.value
        if total <= BLACKJACK:
            return HandValue(total)
        return None


def rank_to_hand_values(rank: Rank) -> list[HandValue]:
    """Lift a rank's point values into HandValues."""
    values = []
    for points in sorted(rank_to_values(rank)):
        value = HandValue.from_int(points)
        if value is None:
            raise ValueError(f"{rank.name} cannot be worth {points} on its own")
        values.append(value)
    return values


def combine_possible_values(
    totals: Iterable[HandValue],
    card_values: Iterable[HandValue],
) -> frozenset[HandValue]:
    """
    Combine every running total with every value of the next card.

    Sums above 21 are dropped and duplicate sums collapse.
    """
    card_values = list(card_values)
    combined = (total.combine(value) for total in totals for value in card_values)
    return frozenset(value for value in combined if value is not None)


def possible_totals(ranks: Iterable[Rank]) -> frozenset[int]:
    """
    Calculate every total of at most 21 that the ranks can make.

    Each Ace may count as 1 or 11 independently. Folding card by card and
    pruning anything over 21 keeps the running set small no matter how
    many Aces the hand holds.

    Returns:
        The set of reachable totals; empty if every combination busts
    """
    totals: frozenset[HandValue] = frozenset({HandValue(0)})
    for rank in ranks:
        totals = combine_possible_values(totals, rank_to_hand_values(rank))
    return frozenset(total.value for total in totals)


def is_too_large(ranks: Iterable[Rank]) -> bool:
    """Check if every interpretation of a non-empty hand exceeds 21."""
    ranks = list(ranks)
    if not ranks:
        return False
    return not possible_totals(ranks)


def has_winning_total(ranks: Iterable[Rank]) -> bool:
    """Check if some interpretation of the hand totals exactly 21."""
    return BLACKJACK in possible_totals(ranks)


@dataclass
class Hand:
    """The player's cards, in the order they were dealt."""

    cards: list[Card] = field(default_factory=list)

    def add_card(self, card: Card) -> None:
        """Add a card to the hand."""
        self.cards.append(card)

    @property
    def ranks(self) -> list[Rank]:
        return [card.rank for card in self.cards]

    @property
    def possible_totals(self) -> frozenset[int]:
        """All totals of at most 21 this hand can make."""
        return possible_totals(self.ranks)

    @property
    def is_too_large(self) -> bool:
        """Check if the hand has busted under every Ace interpretation."""
        return is_too_large(self.ranks)

    @property
    def has_winning_total(self) -> bool:
        """Check if the hand can total exactly 21."""
        return has_winning_total(self.ranks)

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        cards_str = " ".join(str(card) for card in self.cards)
        if self.is_too_large:
            value_str = "(BUST)"
        else:
            totals = sorted(self.possible_totals)
            value_str = "(" + " or ".join(str(t) for t in totals) + ")"
        return f"{cards_str} {value_str}".strip()

    def __repr__(self) -> str:
        return f"Hand({self.cards!r}, totals={sorted(self.possible_totals)})"
