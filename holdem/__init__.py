"""Heads-up Texas Hold'em: hand evaluation, round state machine and house opponent."""

from .cards import Card, RANKS, SUITS, build_deck, deal, parse_cards, parse_label
from .errors import GameOver, HoldemError, InsufficientFunds, InvalidAction, InvalidBetUnit, InvalidHand
from .evaluator import EvaluatedHand, HandRank, assess, describe, evaluate
from .game import HoldemEngine
from .models import Decision, GameConfig, OpponentAction, Phase, RoundState, Snapshot, Street
from .policy import OpponentPolicy

__all__ = [
    "Card",
    "RANKS",
    "SUITS",
    "build_deck",
    "deal",
    "parse_cards",
    "parse_label",
    "GameOver",
    "HoldemError",
    "InsufficientFunds",
    "InvalidAction",
    "InvalidBetUnit",
    "InvalidHand",
    "EvaluatedHand",
    "HandRank",
    "assess",
    "describe",
    "evaluate",
    "HoldemEngine",
    "Decision",
    "GameConfig",
    "OpponentAction",
    "Phase",
    "RoundState",
    "Snapshot",
    "Street",
    "OpponentPolicy",
]
