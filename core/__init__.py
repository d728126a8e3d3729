"""Core blackjack round engine - 100% UI-agnostic."""

from core.cards import Card, Deck, Rank, Suit, rank_to_values
from core.hand import Hand, HandValue, possible_totals

__all__ = [
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "rank_to_values",
    "Hand",
    "HandValue",
    "possible_totals",
]
