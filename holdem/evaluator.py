from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, List, Optional, Sequence

from .cards import Card, parse_cards
from .errors import InvalidHand

RANK_ORDER = "23456789TJQKA"
RANK_VALUE = {rank: idx for idx, rank in enumerate(RANK_ORDER, start=2)}


class HandRank(IntEnum):
    HIGH_CARD = 0
    ONE_PAIR = 1
    TWO_PAIR = 2
    TRIPLE = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8
    ROYAL_STRAIGHT_FLUSH = 9

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES = {
    HandRank.HIGH_CARD: "High Card",
    HandRank.ONE_PAIR: "One Pair",
    HandRank.TWO_PAIR: "Two Pairs",
    HandRank.TRIPLE: "Triple",
    HandRank.STRAIGHT: "Straight",
    HandRank.FLUSH: "Flush",
    HandRank.FULL_HOUSE: "Full House",
    HandRank.FOUR_OF_A_KIND: "Four of a Kind",
    HandRank.STRAIGHT_FLUSH: "Straight Flush",
    HandRank.ROYAL_STRAIGHT_FLUSH: "Royal Straight Flush",
}


@dataclass(frozen=True, order=True)
class EvaluatedHand:
    """Category plus a single high-card kicker. Ordering is (category, kicker)."""

    category: HandRank
    kicker: int

    @property
    def strength(self) -> float:
        # kicker / 100 < 1, so the category always dominates.
        return int(self.category) + self.kicker / 100

    @property
    def name(self) -> str:
        return self.category.display_name


def evaluate(cards: Sequence[Card], wheel_straights: bool = False) -> EvaluatedHand:
    """Classify a Hold'em hand of 5 to 7 distinct cards. Higher is better."""
    _validate(cards, minimum=5)
    return _classify(cards, wheel_straights)


def assess(cards: Sequence[Card], wheel_straights: bool = False) -> EvaluatedHand:
    """Same classification for an incomplete hand (1 to 7 cards), e.g. hole cards pre-flop."""
    _validate(cards, minimum=1)
    return _classify(cards, wheel_straights)


def evaluate_labels(labels: Sequence[str], wheel_straights: bool = False) -> EvaluatedHand:
    return evaluate(parse_cards(labels), wheel_straights)


def describe(hand: EvaluatedHand) -> str:
    return hand.category.display_name


def _validate(cards: Sequence[Card], minimum: int) -> None:
    if len(cards) < minimum:
        raise InvalidHand(f"Need at least {minimum} cards, got {len(cards)}")
    if len(cards) > 7:
        raise InvalidHand(f"At most 7 cards can be evaluated, got {len(cards)}")
    if len(set(cards)) != len(cards):
        raise InvalidHand("Duplicate cards in hand")


def _classify(cards: Sequence[Card], wheel_straights: bool) -> EvaluatedHand:
    values = sorted((RANK_VALUE[card.rank] for card in cards), reverse=True)
    rank_counts = Counter(values)
    suit_counts = Counter(card.suit for card in cards)

    has_flush = any(count >= 5 for count in suit_counts.values())
    straight_high = _straight_high(values, wheel_straights)
    count_values = sorted(rank_counts.values(), reverse=True)
    kicker = values[0]

    def ranked(category: HandRank) -> EvaluatedHand:
        return EvaluatedHand(category, kicker)

    # Flush and straight are detected independently over all the cards.
    if straight_high and has_flush:
        if straight_high == 14:
            return ranked(HandRank.ROYAL_STRAIGHT_FLUSH)
        return ranked(HandRank.STRAIGHT_FLUSH)
    if count_values[0] >= 4:
        return ranked(HandRank.FOUR_OF_A_KIND)
    if count_values[0] == 3 and len(count_values) > 1 and count_values[1] >= 2:
        return ranked(HandRank.FULL_HOUSE)
    if has_flush:
        return ranked(HandRank.FLUSH)
    if straight_high:
        return ranked(HandRank.STRAIGHT)
    if count_values[0] == 3:
        return ranked(HandRank.TRIPLE)
    if count_values.count(2) == 2:
        return ranked(HandRank.TWO_PAIR)
    if count_values[0] == 2:
        return ranked(HandRank.ONE_PAIR)
    return ranked(HandRank.HIGH_CARD)


def _straight_high(values: Iterable[int], wheel_straights: bool) -> Optional[int]:
    ranks = set(values)
    if wheel_straights and 14 in ranks:  # Ace low
        ranks.add(1)
    ordered: List[int] = sorted(ranks, reverse=True)
    for idx in range(len(ordered) - 4):
        window = ordered[idx : idx + 5]
        if window[0] - window[-1] == 4:
            return window[0]
    return None
