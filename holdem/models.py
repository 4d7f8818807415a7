from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from .cards import Card
from .evaluator import EvaluatedHand


class Phase(str, Enum):
    READY = "READY"
    PLAYING = "PLAYING"
    SHOWDOWN = "SHOWDOWN"
    FOLDED = "FOLDED"


class Street(str, Enum):
    PRE_FLOP = "PRE_FLOP"
    FLOP = "FLOP"
    TURN = "TURN"
    RIVER = "RIVER"


class OpponentAction(str, Enum):
    CALL = "CALL"
    FOLD = "FOLD"
    CHECK = "CHECK"
    RAISE = "RAISE"
    BLUFF = "BLUFF"


@dataclass(frozen=True)
class Decision:
    action: OpponentAction
    amount: int = 0
    # Set when the opponent wanted to call but could not cover the raise.
    forced: bool = False


@dataclass
class GameConfig:
    starting_stack: int = 1_000
    bet_unit: int = 50
    min_bet_unit: int = 10
    bet_step: int = 10
    wheel_straights: bool = False


@dataclass
class RoundState:
    # Everything the engine mutates during a session lives here.
    round_id: str
    deck: List[Card]
    player_chips: int
    opponent_chips: int
    bet_unit: int
    phase: Phase = Phase.READY
    street: Street = Street.PRE_FLOP
    player_hole: List[Card] = field(default_factory=list)
    opponent_hole: List[Card] = field(default_factory=list)
    community: List[Card] = field(default_factory=list)
    pot: int = 0
    message: str = ""
    player_hand: Optional[EvaluatedHand] = None
    opponent_hand: Optional[EvaluatedHand] = None

    def chips_in_play(self) -> int:
        return self.player_chips + self.opponent_chips + self.pot


@dataclass(frozen=True)
class Snapshot:
    """Read-only view handed to the presentation layer."""

    round_id: str
    phase: Phase
    street: Street
    pot: int
    player_chips: int
    opponent_chips: int
    bet_unit: int
    message: str
    game_over: bool
    player_hole: Tuple[str, ...]
    community: Tuple[str, ...]
    player_rank: Optional[str] = None
    # Only populated once the round reaches showdown.
    opponent_hole: Optional[Tuple[str, ...]] = None
    opponent_rank: Optional[str] = None
