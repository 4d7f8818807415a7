from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Optional, Sequence

RANKS = "AKQJT98765432"
SUITS = "hdcs"

SUIT_SYMBOLS = {"h": "♥", "d": "♦", "c": "♣", "s": "♠"}
_SYMBOL_SUITS = {symbol: suit for suit, symbol in SUIT_SYMBOLS.items()}


@dataclass(frozen=True)
class Card:
    rank: str
    suit: str

    def __post_init__(self) -> None:
        if self.rank not in RANKS:
            raise ValueError(f"Invalid rank: {self.rank}")
        if self.suit not in SUITS:
            raise ValueError(f"Invalid suit: {self.suit}")

    @property
    def label(self) -> str:
        return f"{self.rank}{self.suit}"

    @property
    def symbol(self) -> str:
        rank = "10" if self.rank == "T" else self.rank
        return f"{rank}{SUIT_SYMBOLS[self.suit]}"

    def __str__(self) -> str:
        return self.symbol


def build_deck(rng: Optional[random.Random] = None) -> List[Card]:
    """Return all 52 cards in shuffled order; the top of the deck is index 0."""
    rng = rng or random.Random()
    deck = [Card(rank, suit) for suit in SUITS for rank in RANKS[::-1]]
    rng.shuffle(deck)
    return deck


def deal(deck: List[Card], count: int) -> List[Card]:
    if len(deck) < count:
        raise ValueError("Not enough cards left in deck")
    cards = deck[:count]
    del deck[:count]
    return cards


def cards_to_labels(cards: Sequence[Card]) -> List[str]:
    return [card.label for card in cards]


def cards_to_symbols(cards: Sequence[Card]) -> List[str]:
    return [card.symbol for card in cards]


def parse_label(label: str) -> Card:
    # Accepts "Th", "10h", "10♥" and "A♠".
    text = label.strip()
    if len(text) < 2:
        raise ValueError(f"Invalid card label: {label}")
    rank, suit = text[:-1], text[-1]
    if rank == "10":
        rank = "T"
    suit = _SYMBOL_SUITS.get(suit, suit.lower())
    if len(rank) != 1:
        raise ValueError(f"Invalid card label: {label}")
    return Card(rank.upper(), suit)


def parse_cards(labels: Sequence[str]) -> List[Card]:
    return [parse_label(label) for label in labels]
