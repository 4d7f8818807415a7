from __future__ import annotations

import random
from dataclasses import dataclass

from .models import Decision, OpponentAction


@dataclass(frozen=True)
class OpponentPolicy:
    """House opponent: calls or folds against raises, otherwise checks with the odd bluff.

    The policy holds no state between decisions. Every random draw comes from
    the ``rng`` passed to :meth:`decide`, so tests can script the outcome.
    """

    # Strength above this (Flush with any kicker, or better) counts as a strong hand.
    strong_hand: float = 5.0
    call_bluff_chance: float = 0.25
    bluff_chance: float = 0.10
    value_raise_chance: float = 0.5

    def decide(
        self,
        strength: float,
        player_raised: bool,
        raise_amount: int,
        opponent_chips: int,
        bet_unit: int,
        rng: random.Random,
    ) -> Decision:
        if player_raised:
            return self._answer_raise(strength, raise_amount, opponent_chips, rng)
        return self._answer_check(strength, bet_unit, rng)

    def _answer_raise(
        self, strength: float, raise_amount: int, opponent_chips: int, rng: random.Random
    ) -> Decision:
        if not self._should_call(strength, rng.random()):
            return Decision(OpponentAction.FOLD)
        if opponent_chips < raise_amount:
            return Decision(OpponentAction.FOLD, forced=True)
        return Decision(OpponentAction.CALL, raise_amount)

    def _answer_check(self, strength: float, bet_unit: int, rng: random.Random) -> Decision:
        if rng.random() < self.bluff_chance:
            return Decision(OpponentAction.BLUFF, bet_unit)
        # Second draw only happens for strong hands.
        if strength > self.strong_hand and rng.random() < self.value_raise_chance:
            return Decision(OpponentAction.RAISE, bet_unit)
        return Decision(OpponentAction.CHECK)

    def _should_call(self, strength: float, roll: float) -> bool:
        return strength > self.strong_hand or roll < self.call_bluff_chance
