"""Pytest fixtures for blackjack round tests."""

import pytest
from random import Random

from core.cards import Card, Deck, Rank, Suit, full_deck
from core.hand import Hand
from core.game import BlackjackRound, EventEmitter, start


def stack_deck(*top_cards: Card) -> Deck:
    """
    Build an unshuffled deck whose next draws are exactly ``top_cards``.

    The first card given is the first card drawn.
    """
    rest = [card for card in full_deck() if card not in top_cards]
    return Deck.from_cards(remaining=rest + list(reversed(top_cards)))


_RANK_CODES = {"A": Rank.ACE, "K": Rank.KING, "Q": Rank.QUEEN, "J": Rank.JACK}
_RANK_CODES.update({str(rank.value): rank for rank in Rank if rank.value <= 10})
_SUIT_CODES = {"C": Suit.CLUBS, "H": Suit.HEARTS, "D": Suit.DIAMONDS, "S": Suit.SPADES}


def card(code: str) -> Card:
    """Build a card from a short code like 'KH', 'AS' or '10D'."""
    return Card(_RANK_CODES[code[:-1]], _SUIT_CODES[code[-1]])


def cards(*codes: str) -> list[Card]:
    """Build cards from short codes."""
    return [card(code) for code in codes]


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def deck(rng):
    """A shuffled deck."""
    d = Deck(rng=rng)
    d.shuffle()
    return d


@pytest.fixture
def events():
    """A fresh event emitter."""
    return EventEmitter()


@pytest.fixture
def stacked_round(events):
    """Factory for rounds whose draws come out in a chosen order."""

    def _make(*codes: str) -> BlackjackRound:
        return start(stack_deck(*cards(*codes)), events=events)

    return _make


@pytest.fixture
def empty_hand():
    """An empty player hand."""
    return Hand()


@pytest.fixture
def twenty_one_hand():
    """A hand that can total 21 (A-K)."""
    return Hand(cards=cards("AS", "KH"))


@pytest.fixture
def bust_hand():
    """A busted hand (K-Q-2)."""
    return Hand(cards=cards("KS", "QH", "2C"))


@pytest.fixture
def stacked_deck():
    """Factory for unshuffled decks that deal the given cards first."""

    def _make(*codes: str) -> Deck:
        return stack_deck(*cards(*codes))

    return _make
